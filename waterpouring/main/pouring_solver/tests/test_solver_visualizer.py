"""
Tests for SolutionVisualizer (solution rendering with OpenCV).
"""

import cv2
import numpy as np
import pytest

from waterpouring.main.pouring_solver.solver.models import Fill, Pour
from waterpouring.main.pouring_solver.solver.bfs_solver import solve
from waterpouring.main.pouring_solver.solver.solver_visualizer import SolutionVisualizer
from waterpouring.main.pouring_solver.solver.utils.conversion import parse_state


@pytest.fixture
def visualizer(tmp_path):
    return SolutionVisualizer(output_dir=str(tmp_path))


def water_pixels(img):
    return np.all(img == np.array(SolutionVisualizer.WATER_COLOR, dtype=np.uint8), axis=-1)


def test_render_one_panel_per_step(visualizer):
    start = parse_state("0/5, 0/3")
    img = visualizer.render_solution(start, [Fill(0), Pour(0, 1)])

    height, width = visualizer.panel_size(2)
    assert img.dtype == np.uint8
    assert img.shape == (height, 3 * width, 3)


def test_water_drawn_only_where_glasses_hold_some(visualizer):
    start = parse_state("0/5, 0/3")
    img = visualizer.render_solution(start, [Fill(0)])
    _, width = visualizer.panel_size(2)

    assert not water_pixels(img[:, :width]).any()
    assert water_pixels(img[:, width:]).any()


def test_fuller_glass_draws_more_water(visualizer):
    _, width = visualizer.panel_size(1)
    img = visualizer.render_solution(parse_state("1/4"), [Fill(0)])

    partial = water_pixels(img[:, :width]).sum()
    full = water_pixels(img[:, width:]).sum()
    assert 0 < partial < full


def test_long_solution_wraps_into_rows(visualizer):
    start = parse_state("0/5, 0/3")
    moves = solve(start, parse_state("4/5, 0/3"))
    img = visualizer.render_solution(start, moves)

    height, width = visualizer.panel_size(2)
    rows = -(-(len(moves) + 1) // SolutionVisualizer.PANELS_PER_ROW)
    assert rows == 2
    assert img.shape == (rows * height, SolutionVisualizer.PANELS_PER_ROW * width, 3)


def test_visualize_solution_writes_png(visualizer, tmp_path):
    start = parse_state("0/5, 0/3")
    filename = visualizer.visualize_solution(start, [Fill(1)], "abc")

    assert filename == "solution_abc.png"
    written = cv2.imread(str(tmp_path / filename))
    assert written is not None
    assert written.shape == visualizer.render_solution(start, [Fill(1)]).shape


def test_zero_capacity_glass(visualizer):
    img = visualizer.render_solution(parse_state("0/0, 0/2"), [Fill(1)])
    assert img.shape[0] == visualizer.panel_size(2)[0]
