"""Sample runs that write polygon, spline and trajectory data to CSV files."""

from __future__ import annotations

import argparse
from contextlib import ExitStack
from pathlib import Path
from typing import Iterable, Optional, Sequence, Tuple, Union

from splinepath.constraint import ConstraintSequence
from splinepath.curve_sampler import CurveSampler
from splinepath.general import clamp, integrate_polynomial
from splinepath.named_storage import NamedStorage
from splinepath.polygon import Polygon2D
from splinepath.segments import SplineType
from splinepath.spline_curve import SplineCurve
from splinepath.spline_profile import (
    DEFAULT_MAX_ACCELERATION,
    DEFAULT_MAX_VELOCITY,
    DEFAULT_TRACK_WIDTH,
    SplineProfile,
    build_spline_profile,
)
from splinepath.trajectory_constraint import PolygonRegionConstraint, TrajectoryConstraint
from splinepath.trajectory_planner import TrajectoryPlanner
from splinepath.units import Length, PolarAngle
from splinepath.vector2d import Vector2D

PathLike = Union[str, Path]

DEFAULT_OUTPUT_DIR = Path("dev-files")


def _fmt(value: object) -> str:
    """Format a value the way a default-precision stream would."""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, int):
        return str(value)
    return f"{value:g}"


def _row(*values: object) -> str:
    return ", ".join(_fmt(value) for value in values) + "\n"


def _polygon(points: Iterable[Tuple[float, float]]) -> Polygon2D:
    return Polygon2D([Vector2D(float(x), float(y)) for x, y in points])


def _catmull_rom(points: Sequence[Tuple[float, float]]) -> SplineCurve:
    return SplineCurve.from_auto_tangent_cubic_spline(
        SplineType.CATMULL_ROM, [[x, y] for x, y in points]
    )


def _prepare(output_dir: PathLike, subdir: str) -> Path:
    directory = Path(output_dir) / subdir
    directory.mkdir(parents=True, exist_ok=True)
    return directory


# ---------- CSV writers ----------


def write_polygon_csv(polygon: Polygon2D, prefix: PathLike) -> list[Path]:
    """Write the polygon's vertices and a grid of containment tests."""
    poly_path = Path(f"{prefix}-poly.csv")
    points_path = Path(f"{prefix}-points.csv")

    with poly_path.open("w") as file:
        file.write("poly_x,poly_y\n")
        for point in polygon.ccw_points:
            file.write(_row(point.x, point.y))

    with points_path.open("w") as file:
        file.write("point_x,point_y,winding_number,is_in\n")
        point_x = -10.0
        while point_x <= 10:
            point_y = -10.0
            while point_y <= 10:
                point = Vector2D(point_x, point_y)
                file.write(
                    _row(
                        point_x,
                        point_y,
                        int(polygon.winding_number(point)),
                        bool(polygon.contains_point(point)),
                    )
                )
                point_y += 0.2
            point_x += 0.2

    return [poly_path, points_path]


def write_spline_csv(sampler: CurveSampler, prefix: PathLike) -> Path:
    """Write points spaced evenly by arc length along the sampler's spline."""
    path = Path(f"{prefix}.csv")
    spline = sampler.spline
    total_distance = sampler.distance_range()[1]
    with path.open("w") as file:
        file.write("t,x,y,s\n")
        md = 0
        while md <= 1000 * total_distance + 0.1:
            d = md / 1000.0
            t = sampler.distance_to_param(d)
            position = spline.position_at(t)
            file.write(_row(t, position[0], position[1], total_distance - d))
            md += 50
    return path


def write_trajectory_csv(
    planner: Optional[TrajectoryPlanner],
    prefix: PathLike,
    profile: Optional[SplineProfile] = None,
) -> list[Path]:
    """Write distance, velocity, angular velocity, acceleration and curvature over time.

    When ``profile`` is given, its planner is used and the curvature is read
    from its spline.
    """
    if profile is not None:
        planner = profile.trajectory_plan
    if planner is None:
        raise ValueError("a planner or a spline profile is required")

    names = ("dis", "vel", "ang_vel", "accel", "k")
    headers = (
        "time, distance\n",
        "time, maxV, minV, right vel, left vel, velocity\n",
        "time, ang vel\n",
        "time, maxA, minA, right accel, left accel, accel\n",
        "time, curvature, smoothed curvature, factorR, factorL, zero\n",
    )
    paths = [Path(f"{prefix}-{name}.csv") for name in names]

    with ExitStack() as stack:
        files = [stack.enter_context(path.open("w")) for path in paths]
        for file, header in zip(files, headers):
            file.write(header)
        file_dis, file_vel, file_ang_vel, file_accel, file_k = files

        total_time = planner.total_time()
        prev_t: Optional[float] = None
        prev_left = prev_right = 0.0
        mt = -100
        while mt <= 1000 * total_time + 101:
            t = mt / 1000.0
            distance, motion = planner.motion_at_time(t)
            abs_distance = abs(distance)
            velocity = motion[0]
            acceleration = motion[1] if len(motion) >= 2 else 0.0
            profile_curvature = planner.curvature_at_distance(abs_distance)
            if profile is not None:
                param = profile.curve_sampler.distance_to_param(abs_distance)
                curvature = profile.spline.curvature_at(param)
            else:
                curvature = profile_curvature

            factor = profile_curvature * DEFAULT_TRACK_WIDTH / 2
            left_velocity = velocity - abs(velocity) * factor
            right_velocity = velocity + abs(velocity) * factor
            if prev_t is None:
                left_accel = right_accel = 0.0
            else:
                left_accel = (left_velocity - prev_left) / (t - prev_t)
                right_accel = (right_velocity - prev_right) / (t - prev_t)
            prev_t, prev_left, prev_right = t, left_velocity, right_velocity

            file_dis.write(_row(t, distance))
            file_vel.write(
                _row(t, DEFAULT_MAX_VELOCITY, -DEFAULT_MAX_VELOCITY, right_velocity, left_velocity, velocity)
            )
            file_ang_vel.write(_row(t, velocity * profile_curvature))
            file_accel.write(
                _row(t, DEFAULT_MAX_ACCELERATION, -DEFAULT_MAX_ACCELERATION, right_accel, left_accel, acceleration)
            )
            file_k.write(_row(t, curvature, profile_curvature, 1 + factor, 1 - factor, 0))
            mt += 5

    return paths


# ---------- Demos ----------

_DEMO_POLYGONS = (
    ((0, 0), (4, 0), (2, 5)),
    (
        (0, -5), (1, -4), (2, -3), (3, -2), (4, 1), (4, 2), (3, 4), (2, 5), (1, 4), (0, 2),
        (-1, 4), (-2, 5), (-3, 4), (-4, 2), (-4, 1), (-3, -2), (-2, -3), (-1, -4),
    ),
    (
        (-8, -1), (-2, -8), (1, 2), (3, -8), (6, -3), (8, 6),
        (6, 8), (3, 6), (3, 4), (4, 6), (5, 2), (4, -1), (2, 6), (-1, 3),
        (-4, -5), (-6, 1),
    ),
)

_DEMO_SPLINES = (
    ((3.06, 2.27), (2.45, 4.2), (1.86, 5.06), (1.26, 4.19), (1, 2.36), (0.66, 0.09)),
    (
        (-0.02, -0.07), (1.36, 0.64), (2.4, 1.55), (0.97, 2.99), (0.42, 4.03),
        (0.74, 5.28), (2, 5.54), (2.01, 3.98), (3.02, 3), (4.03, 4.02),
        (3.02, 4.85), (3.02, 5.51), (4.39, 5.49), (4.67, 4.2), (5.55, 3.07),
        (4.65, 1.77), (5.49, 0.98), (4.31, 0.42), (4.02, 1.33), (3.15, 1.37),
        (3, 0.48), (3.02, -0.22),
    ),
    (
        (2.62, 0.09), (1.52, 0.49), (0.67, 1.35), (1.03, 1.97), (1.54, 1.8),
        (2.06, 1.95), (2.49, 1.34), (1.54, 0.48), (0.48, 0.05),
    ),
    (
        (0.54, 2.81), (0.47, 5.38), (1.2, 4.35), (1.87, 5.45), (2.5, 4.91), (3.52, 4.96),
        (3.02, 5.47), (2.57, 4.47), (3.89, 4.47), (5.01, 5.4), (4.03, 4.94), (4.13, 5.38),
        (4.96, 4.46), (5.48, 2.84),
    ),
)


def run_polygon_demo(output_dir: PathLike = DEFAULT_OUTPUT_DIR) -> list[Path]:
    """Write containment grids for three sample polygons."""
    directory = _prepare(output_dir, "polygons")
    written: list[Path] = []
    for index, points in enumerate(_DEMO_POLYGONS):
        written.extend(write_polygon_csv(_polygon(points), directory / f"polygon{index}"))
    return written


def run_spline_demo(output_dir: PathLike = DEFAULT_OUTPUT_DIR) -> list[Tuple[float, float]]:
    """Sample four splines; returns each spline's parameter end and arc length."""
    directory = _prepare(output_dir, "splines")
    results = []
    for index, points in enumerate(_DEMO_SPLINES):
        spline = _catmull_rom(points)
        sampler = CurveSampler(spline).calculate_by_resolution(spline.t_range()[1] * 10)
        t_end = spline.t_range()[1]
        total_distance = sampler.distance_range()[1]
        print(f"T: {t_end:.3f}, D: {total_distance:.7f}")
        write_spline_csv(sampler, directory / f"spline{index}")
        results.append((t_end, total_distance))
    return results


def _push_spline(
    storage: NamedStorage[SplineProfile],
    name: str,
    spline: SplineCurve,
    reverse: bool = False,
    constraints: Iterable[TrajectoryConstraint] = (),
) -> None:
    if name in storage:
        raise KeyError(f"profile {name!r} already exists")
    storage.store(name, build_spline_profile(spline, reverse, constraints))


def _follow_spline(storage: NamedStorage[SplineProfile], name: str, prefix: Path) -> list[Path]:
    profile = storage.get(name)
    return write_trajectory_csv(profile.trajectory_plan, prefix, profile)


def run_small_trajectory_demo(output_dir: PathLike = DEFAULT_OUTPUT_DIR) -> NamedStorage[SplineProfile]:
    """Plan one short path with a slow region and write its trajectory."""
    directory = _prepare(output_dir, "paths")
    storage: NamedStorage[SplineProfile] = NamedStorage()
    region = _polygon(((0.5, 3), (1, 2.5), (1.5, 3), (1, 3.5)))
    _push_spline(
        storage,
        "grab goal",
        _catmull_rom(((2.76, 5.81), (1.99, 4.98), (1.15, 3.97), (1.02, 2.17), (1, 0.76))),
        False,
        [PolygonRegionConstraint(region, DEFAULT_MAX_VELOCITY * 0.3)],
    )
    _follow_spline(storage, "grab goal", directory / "path0")
    return storage


def run_trajectory_demo(output_dir: PathLike = DEFAULT_OUTPUT_DIR) -> NamedStorage[SplineProfile]:
    """Plan several sample paths and write the trajectories of all but the longest."""
    directory = _prepare(output_dir, "paths")
    storage: NamedStorage[SplineProfile] = NamedStorage()
    _push_spline(storage, "180", _catmull_rom(
        ((1.5, -0.94), (1.5, 0.5), (1.0, 1.15), (1.5, 1.73), (2.0, 1.15), (1.5, 0.5), (1.5, -0.94))
    ))
    _push_spline(storage, "test", _catmull_rom(
        ((2.54, 0.49), (1.54, 0.47), (0.47, 0.94), (1.32, 1.59), (1.54, 0.47), (1.5, -0.46))
    ), True)
    _push_spline(storage, "big curvature 1", _catmull_rom(
        ((1.59, -0.42), (1.52, 0.5), (1.49, 0.81), (0.48, 1), (1.55, 1.02), (2.51, 1),
         (1.57, 1.28), (1.53, 1.81), (1.53, 2.79))
    ))
    _push_spline(storage, "love shape", _catmull_rom(_DEMO_SPLINES[2]))
    _push_spline(storage, "m shape", _catmull_rom(
        ((2.15, -0.38), (0.98, 1), (0.98, 5.02), (3.02, 1), (5.02, 5), (5.04, 1.02), (3.95, -0.38))
    ))
    _push_spline(storage, "field tour", _catmull_rom(_DEMO_SPLINES[1]))
    for index, name in enumerate(("180", "test", "big curvature 1", "love shape", "m shape")):
        _follow_spline(storage, name, directory / f"path{index}")
    return storage


def _drive_planner(distance: float, velocity_limits: Iterable[Tuple[float, float]]) -> TrajectoryPlanner:
    planner = TrajectoryPlanner(distance, DEFAULT_TRACK_WIDTH, 0.05)
    sequence = ConstraintSequence()
    for at_distance, percent in velocity_limits:
        sequence.add_constraints([(at_distance, [clamp(percent, 1, 100) / 100.0 * DEFAULT_MAX_VELOCITY])])
    planner.add_center_constraint_sequence(sequence)
    planner.add_center_constraint_max_motion([DEFAULT_MAX_VELOCITY, DEFAULT_MAX_ACCELERATION])
    planner.add_track_constraint_max_motion([DEFAULT_MAX_VELOCITY, DEFAULT_MAX_ACCELERATION])
    return planner.calculate_motion_profile()


def run_drive_trajectory_demo(output_dir: PathLike = DEFAULT_OUTPUT_DIR) -> list[TrajectoryPlanner]:
    """Plan three straight drives with velocity limits given in percent."""
    directory = _prepare(output_dir, "paths")
    drives = (
        (1, [(0, 75)]),
        (-1, [(0, 75)]),
        (-1, [(0, 20), (0.5, 60)]),
    )
    planners = []
    for index, (distance, limits) in enumerate(drives):
        planner = _drive_planner(distance, limits)
        write_trajectory_csv(planner, directory / f"path{index}")
        planners.append(planner)
    return planners


def _integral_lines() -> list[str]:
    lines = []
    for dx in (1, -1):
        delta, motion = integrate_polynomial([1, -1], dx)
        lines.append("".join(f"{value:.3f} " for value in [delta, *motion]))
    return lines


def basic_checks() -> list[str]:
    """Lines showing unit conversions and vector arithmetic."""
    negated = -Vector2D(0.0, 2.0)
    added = Vector2D(0.0, 2.0) + Vector2D(2.0, 0.0)
    subtracted = Vector2D(0.0, 2.0) - Vector2D(2.0, 0.0)
    return [
        f"{(Length.from_inches(-2000.0) + Length.from_inches(200)).m():.10f}",
        f"{PolarAngle.from_degrees(-90).polar_rad():.10f}",
        f"Cross: {Vector2D(0.0, 2.0).cross_scalar(Vector2D(2.0, 0.0)):.10f}",
        f"Dot: {Vector2D(0.0, 2.0).dot(Vector2D(2.0, 0.0)):.10f}",
        f"Angle: {Vector2D(2.0, 0.0).angle_from(Vector2D(0.0, 2.0)).polar_deg():.10f}",
        f"Neg: {negated.x:.10f} {negated.y:.10f}",
        f"Add: {added.x:.10f} {added.y:.10f}",
        f"Minus: {subtracted.x:.10f} {subtracted.y:.10f}",
    ]


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Run path-planning sample computations.")
    parser.add_argument("--output-dir", type=Path, default=DEFAULT_OUTPUT_DIR)
    parser.add_argument("--polygon", action="store_true", help="write polygon containment grids")
    parser.add_argument("--spline", action="store_true", help="write sampled splines")
    parser.add_argument("--trajectory-small", action="store_true", help="plan the short sample path")
    parser.add_argument("--trajectory", action="store_true", help="plan the sample paths")
    parser.add_argument("--drive", action="store_true", help="plan straight drives")
    parser.add_argument("--integral", action="store_true", help="print polynomial integrals")
    args = parser.parse_args(argv)

    for line in basic_checks():
        print(line)
    if args.spline:
        run_spline_demo(args.output_dir)
    if args.trajectory_small:
        run_small_trajectory_demo(args.output_dir)
    if args.trajectory:
        run_trajectory_demo(args.output_dir)
    if args.drive:
        run_drive_trajectory_demo(args.output_dir)
    if args.integral:
        for line in _integral_lines():
            print(line)
    if args.polygon:
        run_polygon_demo(args.output_dir)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())