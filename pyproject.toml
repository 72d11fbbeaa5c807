[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "radonlines"
version = "0.1.0"
description = "Line detection with the Radon transform: projections, gradients, adaptive peak thresholds, clustering and crossing-line removal"
requires-python = ">=3.10"
keywords = [
    "radon",
    "radon-transform",
    "line-detection",
    "image-processing",
    "peaks",
    "clustering",
    "k-means",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Image Processing",
]
dependencies = [
    "numpy",
    "scipy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
radonlines-process = "radonlines.processor:main"
radonlines-adapt-rate = "radonlines.adapt_rate:main"
radonlines-cluster = "radonlines.cluster:main"
radonlines-lines = "radonlines.lines:main"
radonlines-crossings = "radonlines.crossings:main"

[tool.hatch.build.targets.wheel]
packages = ["radonlines"]

[tool.hatch.build.targets.sdist]
include = [
    "radonlines",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
ignore_missing_imports = true
