"""Radon-transform line detection: projections, gradients, peak thresholds, clustering and crossing lines."""

__version__ = "0.1.0"