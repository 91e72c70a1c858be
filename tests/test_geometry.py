"""Tests for the geometry projector and gridlines."""

from __future__ import annotations

import pytest

from kmeans_hospitals.core.geometry import (
    VIEWPORT_PADDING,
    VIEWPORT_SIZE,
    grid_lines,
    project,
)


class TestProject:
    def test_origin_maps_to_padding(self):
        assert project(0, 20, 520, 24) == 24

    def test_extent_maps_to_far_edge(self):
        assert project(20, 20, 520, 24) == pytest.approx(520 - 24)

    def test_midpoint(self):
        assert project(10, 20, 520, 24) == pytest.approx(260)

    @pytest.mark.parametrize("extent", [1, 5, 20, 37.5, 100])
    def test_values_stay_inside_viewport(self, extent):
        for i in range(11):
            v = extent * i / 10
            px = project(v, extent, 520, 24)
            assert 24 - 1e-9 <= px <= 496 + 1e-9

    def test_zero_extent_does_not_divide_by_zero(self):
        """The denominator is floored at 1."""
        assert project(0, 0, 520, 24) == 24
        assert project(1, 0, 520, 24) == pytest.approx(496)

    def test_defaults_use_map_viewport(self):
        assert project(20, 20) == pytest.approx(VIEWPORT_SIZE - VIEWPORT_PADDING)


class TestGridLines:
    def test_step_count_capped_at_twelve(self):
        lines = grid_lines(100)
        assert len(lines) == 13
        assert lines[-1].label == 100

    def test_small_grid_one_line_per_km(self):
        lines = grid_lines(5)
        assert [line.label for line in lines] == [0, 1, 2, 3, 4, 5]

    def test_positions_span_viewport(self):
        lines = grid_lines(20)
        assert lines[0].position == pytest.approx(VIEWPORT_PADDING)
        assert lines[-1].position == pytest.approx(VIEWPORT_SIZE - VIEWPORT_PADDING)

    def test_labels_round_half_up(self):
        # 20 km over 12 steps: step 3 is 5.0, step 9 is 15.0, step 1 is 1.67
        labels = [line.label for line in grid_lines(20)]
        assert labels[1] == 2
        assert labels[3] == 5
        assert labels[9] == 15

    def test_ticks_match_projection(self):
        for line in grid_lines(20):
            assert line.position == pytest.approx(project(line.id * 20 / 12, 20))

    def test_zero_extent_yields_single_step(self):
        lines = grid_lines(0)
        assert len(lines) == 2
        assert all(line.label == 0 for line in lines)
