"""Tests for the cluster colorizer."""

from __future__ import annotations

from kmeans_hospitals.core.palette import CLUSTER_PALETTE, color_for


class TestColorFor:
    def test_palette_has_eight_distinct_colors(self):
        assert len(CLUSTER_PALETTE) >= 8
        assert len(set(CLUSTER_PALETTE)) == len(CLUSTER_PALETTE)

    def test_first_colors_follow_palette_order(self):
        assert [color_for(i) for i in range(len(CLUSTER_PALETTE))] == list(CLUSTER_PALETTE)

    def test_cyclic(self):
        n = len(CLUSTER_PALETTE)
        for i in range(40):
            assert color_for(i) == color_for(i + n)

    def test_stable_across_calls(self):
        assert color_for(11) == color_for(11) == CLUSTER_PALETTE[3]
