# radonlines

Tools for finding straight, line-like structures in grayscale images
with the Radon transform, from the projection of an image to a cleaned
list of lines.

## Installation

```
pip install .
```

The package needs numpy, scipy and pillow. To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `radonlines.radon` – `radon(image, theta)` computes the Radon
  transform of a 2-D image along angles given in degrees, measured
  counter-clockwise from the horizontal axis. Every non-zero pixel is
  split into four quarter-weight sub-masses offset by a quarter pixel,
  and each is spread linearly over the two nearest rho bins. The origin
  is the image centre rounded towards the upper left. Complex images are
  transformed part by part. The result is a `RadonResult` with
  `projections` (one row per rho value, one column per angle), `rho`
  and `theta`. `degree_range(start, stop, step)` builds an angle list
  such as 10° to 170° in 0.2° steps; `rho_axis(shape)` gives the rho
  values of the rows for an image of shape `(rows, cols)`.
- `radonlines.gradient` – `gradient(matrix, axis=0)` takes central
  differences along one axis, with one-sided differences at both ends.
- `radonlines.threshold` – `PeakThreshold(values, length, width)`
  sorts the first `length * width` values once, largest first
  (`sorted_values`); `.threshold(rate)` returns the
  `ceil(size * rate)`-th largest value and raises `ValueError` when the
  rate selects none. `imthresh(values, rate)` sorts in one call and
  returns the value at zero-based position `ceil(n * rate)`.
- `radonlines.processor` – `load_grayscale(path)` reads an image file
  as 8-bit grayscale; `pretreat(image)` divides by 255 and subtracts
  the mean. `RadonProcessor(image, degree_min, degree_max,
  degree_interval)` pretreats an image and keeps `degrees`, `radians`,
  `center`, `rho`, the transform `radon_matrix` (one row per angle) and
  its `gradient_matrix` along rho. `.threshold(rate)` answers threshold
  queries on the gradient, `.format_rows(start, stop)` renders rows of
  it as nested lists.
- `radonlines.adapt_rate` – `rate_candidates()` lists the rates tried
  (0.001 to 0.003 in steps of 0.0002). `peak_mask(...)` marks the
  values above a threshold on a `width` by `length` grid and clears the
  border rows; `mean_component_area(mask, count_background)` measures
  the mean area of the 8-connected regions; `select_rate_index(pixes)`
  picks the lowest value after the first run of rising maxima ends.
  `adaptive_rate(values, thresholds, im_height)` ties these together.
  `arg_max` and `arg_min` return the index of the first largest and
  smallest value.
- `radonlines.cluster` – `cluster_peaks(values, length, width,
  im_height)` chooses the rate, thresholds the map, groups the peak
  points with `kmeans` (k-means++ seeding, 50 attempts, fixed seed)
  into three clusters ordered by centre x with `classify_points`, and
  returns a `ClusterResult` holding the low and high fascia points
  (`point_of_fascia`: the region with the largest summed value) and the
  fibre points (`points_of_fiber`: the maximum of each region).
  `mask_points(mask)` lists the `(x, y)` of non-zero entries.
- `radonlines.lines` – `LineMapper(image_length, image_width, theta,
  rho)` turns peak positions `(x, y)` in the projection matrix into
  `Line` objects with two end points, `theta` (radians), `rho` and
  weight `g`; `line_from_peak(...)` does one peak in one call.
  `read_lines(path)` reads lines stored as groups of seven numbers and
  `angle_mean(line_sets)` gives their `g`-weighted mean angle.
- `radonlines.crossings` – `get_crosses(lines, im_len, im_wid,
  area_len, area_wid)` returns a `Cross` for each pair of lines with
  different angles that meet inside the area; `lines_denoise(...,
  angle_mean)` returns the sorted indices of the lines to drop: of each
  crossing pair, the one whose angle lies further from `angle_mean`.
- `radonlines.textio` – `read_numbers(path)` reads whitespace-separated
  numbers up to the first token that is not one; `write_numbers(path,
  values)` writes one number per line with six significant digits.

## Example

```python
from radonlines.processor import load_grayscale, pretreat
from radonlines.radon import degree_range, radon
from radonlines.gradient import gradient
from radonlines.threshold import PeakThreshold

image = pretreat(load_grayscale("scan.bmp"))
result = radon(image, degree_range(10.0, 170.0, 0.2))
g = gradient(result.projections, axis=0)
cut = PeakThreshold(g, *g.shape).threshold(0.001)
```

## Commands

| Command                 | What it does                                                   |
|-------------------------|----------------------------------------------------------------|
| `radonlines-process`    | transform an image (default `bmc1.bmp`); prints the matrix size, and gradient rows with `--rows START STOP`; `--min`, `--max`, `--step` set the angles |
| `radonlines-adapt-rate` | read a gradient file (default `G.txt`) and print the chosen rate; `--length`, `--width`, `--height` |
| `radonlines-cluster`    | cluster the peaks of a gradient file; prints threshold, point count, centres and group sizes; same options |
| `radonlines-lines`      | `line [RHO_FILE]` maps one peak (`--peak X Y`, `--g`, `--length`, `--width`, `--min`, `--max`, `--step`) to a line; `angle-mean [LINES_FILE]` prints the weighted mean angle; `line` is the default |
| `radonlines-crossings`  | `cross [LINES_FILE]` lists crossing pairs; `denoise [LINES_FILE]` lists lines to discard (`--angle-mean`); both take `--length`, `--width`, `--area-length`, `--area-width`; `denoise` is the default |

Line files hold seven numbers per line: x1, y1, x2, y2, theta, rho and
the weight G; an incomplete last group is ignored.

## What it does not do

The package opens no windows and draws nothing: masks, clusters and
lines are returned as arrays and lists, and the commands print text.
The commands do not write intermediate files; to pass a transform or a
gradient between stages, write it with `radonlines.textio.write_numbers`.