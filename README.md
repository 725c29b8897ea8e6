# splinepath

Plan smooth paths for a differential-drive robot and turn them into
time-parameterised motion profiles. Pure Python, no third-party libraries.

## What is in the package

- `splinepath.general`: numeric helpers (`clamp`, `lerp`, `range_map`,
  `mod_range`, `signum`, `integrate_polynomial`, `newtons_method`, ...).
- `splinepath.angle`: `sinc`, `cosm1_x` and `swap_field_polar_degrees`.
- `splinepath.units`: `Length` (tiles, inches, quarter inches, cm, m; one tile
  is 23 13/16 inches) and `PolarAngle` (degrees and radians).
- `splinepath.vector2d`: `Vector2D` with rotation, dot and cross products,
  normalisation and `angle_from`.
- `splinepath.polygon`: `Polygon2D` with signed `area`, `winding_number` and
  containment (`contains_point`, or `point in polygon`).
- `splinepath.linegular`: `Linegular`, a position plus a heading.
- `splinepath.matrix`: a small dense `Matrix` (`multiply` or `a @ b`,
  scaling, `identity`, `zeros`). Multiplying mismatched shapes raises
  `ValueError`.
- `splinepath.named_storage`: `NamedStorage`, a keyed store that raises
  `KeyError` on a missing key and when a key is stored twice.
- `splinepath.segments`: `SplineType` and `CubicSplineSegment` for cubic
  Bézier, Hermite, Catmull-Rom and B-spline segments.
- `splinepath.spline_curve`: `SplineCurve`, a chain of segments where segment
  `i` covers `t` in `[i, i + 1]`, with position, first and second
  derivatives, heading (`polar_angle_at`), signed curvature, reversal and
  poses (`linegular_at`). `from_auto_tangent_cubic_spline` builds a curve
  from at least four points and raises `ValueError` otherwise.
- `splinepath.curve_sampler`: `CurveSampler`, which samples arc length by the
  midpoint rule and maps between curve parameter and distance.
- `splinepath.constraint`: `DistanceConstraint` and `ConstraintSequence`,
  motion limits (velocity, acceleration, ...) that vary with distance,
  stepped or linearly interpolated.
- `splinepath.curvature`: `CurvatureSequence`, curvature over distance with
  smooth-maximum smoothing.
- `splinepath.trajectory_constraint`: pose-dependent velocity limits:
  `CentripetalAccelerationConstraint` and `PolygonRegionConstraint`.
- `splinepath.plan_point`: `PlanPoint` and the step helpers used by the planner.
- `splinepath.trajectory_planner`: `TrajectoryPlanner`, which runs forward
  and backward passes along a path under limits for the robot centre and for
  each wheel track, then answers `total_time()` and `motion_at_time(t)`.
  `total_time()` raises `ValueError` before `calculate_motion_profile()`.
- `splinepath.spline_profile`: `SplineProfile` and `build_spline_profile`,
  which samples a spline and plans a profile along it with sensible defaults.
- `splinepath.demo`: sample runs that write CSV data, and the demo command.

## Installation

```
pip install .
```

## Example

```python
from splinepath.segments import SplineType
from splinepath.spline_curve import SplineCurve
from splinepath.spline_profile import build_spline_profile

spline = SplineCurve.from_auto_tangent_cubic_spline(
    SplineType.CATMULL_ROM,
    [(2.76, 5.81), (1.99, 4.98), (1.15, 3.97), (1.02, 2.17), (1.0, 0.76)],
)
profile = build_spline_profile(spline)

planner = profile.trajectory_plan
print("total time:", planner.total_time())
distance, motion = planner.motion_at_time(0.5)
print("distance:", distance, "velocity:", motion[0])
```

Passing `reverse=True` to `build_spline_profile` plans the path driven
backwards; distances and velocities then come out negative.

A one-dimensional move without a spline:

```python
from splinepath.trajectory_planner import TrajectoryPlanner

planner = TrajectoryPlanner(1.0, 0.5, 0.05)
planner.add_center_constraint_max_motion([3.2, 4.8])
planner.calculate_motion_profile()
print(planner.total_time())
```

## Demo command

```
splinepath-demo
```

Prints a few unit-conversion and vector checks. Options select sample runs
that write CSV files for plotting under the output directory
(`--output-dir`, default `dev-files`):

```
splinepath-demo --output-dir dev-files --polygon --spline --trajectory
```

- `--polygon`: vertices and a containment grid for three polygons, in `polygons/`.
- `--spline`: arc-length samples of four splines, in `splines/`; prints each
  spline's parameter range end and length.
- `--trajectory-small`: one short path with a slow region, in `paths/`.
- `--trajectory`: several sample paths, in `paths/`.
- `--drive`: three straight drives with velocity limits in percent, in `paths/`.
- `--integral`: prints two sample polynomial integrals.

The trajectory runs all number their files from `path0`, so running more
than one of them into the same directory overwrites earlier files.

## What it does not do

The package computes paths and profiles and writes CSV files; it does not
plot them, and it does not drive a robot or talk to any hardware.

## Tests

```
pip install .[test]
pytest
```