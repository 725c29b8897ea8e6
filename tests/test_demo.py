import csv

import pytest

from splinepath.curve_sampler import CurveSampler
from splinepath.demo import (
    basic_checks,
    main,
    run_drive_trajectory_demo,
    run_polygon_demo,
    run_small_trajectory_demo,
    run_spline_demo,
    write_polygon_csv,
    write_spline_csv,
    write_trajectory_csv,
)
from splinepath.polygon import Polygon2D
from splinepath.segments import SplineType
from splinepath.spline_curve import SplineCurve
from splinepath.spline_profile import DEFAULT_MAX_VELOCITY
from splinepath.units import Length, PolarAngle
from splinepath.vector2d import Vector2D


def _rows(path):
    with open(path) as file:
        return [[cell.strip() for cell in row] for row in csv.reader(file)]


def _triangle():
    return Polygon2D([Vector2D(0.0, 0.0), Vector2D(4.0, 0.0), Vector2D(2.0, 5.0)])


def test_basic_checks_lines():
    lines = basic_checks()
    assert len(lines) == 8
    assert float(lines[0]) == pytest.approx(Length.from_inches(-1800).m(), abs=1e-9)
    assert float(lines[1]) == pytest.approx(PolarAngle.from_degrees(-90).polar_rad(), abs=1e-9)
    assert lines[2] == "Cross: -4.0000000000"
    assert lines[4] == "Angle: -90.0000000000"
    assert lines[6] == "Add: 2.0000000000 2.0000000000"
    assert lines[3].startswith("Dot: ")
    assert float(lines[3].split()[1]) == 0.0


def test_main_prints_checks(capsys):
    assert main([]) == 0
    output = capsys.readouterr().out.splitlines()
    assert output == basic_checks()


def test_write_polygon_csv(tmp_path):
    poly_path, points_path = write_polygon_csv(_triangle(), tmp_path / "tri")
    poly_rows = _rows(poly_path)
    assert poly_rows[0] == ["poly_x", "poly_y"]
    assert len(poly_rows) == 4

    point_rows = _rows(points_path)
    assert point_rows[0] == ["point_x", "point_y", "winding_number", "is_in"]
    body = point_rows[1:]
    assert all((row[2] != "0") == (row[3] == "1") for row in body)
    assert body[0][3] == "0"
    inside = [row for row in body if abs(float(row[0]) - 2) < 1e-6 and abs(float(row[1]) - 1) < 1e-6]
    assert inside and inside[0][3] == "1"


def test_run_polygon_demo(tmp_path):
    written = run_polygon_demo(tmp_path)
    assert len(written) == 6
    assert all(path.exists() for path in written)
    assert (tmp_path / "polygons" / "polygon2-points.csv") in written


def test_write_spline_csv(tmp_path):
    spline = SplineCurve.from_auto_tangent_cubic_spline(
        SplineType.CATMULL_ROM, [[0, 0], [0, 1], [1, 2], [2, 2], [3, 3]]
    )
    sampler = CurveSampler(spline).calculate_by_resolution(20)
    rows = _rows(write_spline_csv(sampler, tmp_path / "s"))
    assert rows[0] == ["t", "x", "y", "s"]
    body = [[float(cell) for cell in row] for row in rows[1:]]
    total = sampler.distance_range()[1]
    assert body[0][3] == pytest.approx(total, rel=1e-5)
    ts = [row[0] for row in body]
    assert ts == sorted(ts)
    remaining = [row[3] for row in body]
    assert remaining == sorted(remaining, reverse=True)


def test_run_spline_demo(tmp_path):
    results = run_spline_demo(tmp_path)
    assert len(results) == 4
    for t_end, distance in results:
        assert t_end == int(t_end)
        assert distance > 0
    assert (tmp_path / "splines" / "spline3.csv").exists()


def test_run_drive_trajectory_demo(tmp_path):
    planners = run_drive_trajectory_demo(tmp_path)
    assert len(planners) == 3
    forward, backward, stepped = planners
    assert forward.motion_at_time(forward.total_time() + 1)[0] == pytest.approx(1.0)
    assert backward.motion_at_time(backward.total_time() + 1)[0] == pytest.approx(-1.0)

    def speeds(planner):
        total = planner.total_time()
        return [abs(planner.motion_at_time(total * i / 50)[1][0]) for i in range(51)]

    assert max(speeds(forward)) <= DEFAULT_MAX_VELOCITY * 0.75 + 1e-9
    assert max(speeds(stepped)) <= DEFAULT_MAX_VELOCITY * 0.6 + 1e-9
    assert stepped.total_time() > backward.total_time()
    assert _rows(tmp_path / "paths" / "path2-dis.csv")[0] == ["time", "distance"]


def test_write_trajectory_csv_rows_align(tmp_path):
    planner = run_drive_trajectory_demo(tmp_path)[0]
    paths = write_trajectory_csv(planner, tmp_path / "again")
    counts = {len(_rows(path)) for path in paths}
    assert len(counts) == 1
    distances = _rows(paths[0])
    assert float(distances[1][1]) == 0.0
    assert float(distances[-1][1]) == pytest.approx(1.0)


def test_write_trajectory_csv_needs_planner(tmp_path):
    with pytest.raises(ValueError):
        write_trajectory_csv(None, tmp_path / "none")


def test_run_small_trajectory_demo(tmp_path):
    storage = run_small_trajectory_demo(tmp_path)
    assert "grab goal" in storage
    profile = storage.get("grab goal")
    assert profile.trajectory_plan.total_time() > 0
    assert (tmp_path / "paths" / "path0-k.csv").exists()
    with pytest.raises(KeyError):
        storage.get("missing")