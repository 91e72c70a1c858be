"""Tests for the summary aggregator."""

from __future__ import annotations

import math

import pytest

from kmeans_hospitals.core.models import SimulationResponse
from kmeans_hospitals.core.palette import color_for
from kmeans_hospitals.derive.enrich import enrich
from kmeans_hospitals.derive.summary import summarize


def _summary(payload: dict):
    return summarize(enrich(SimulationResponse.from_payload(payload)))


class TestSummarize:
    def test_two_clusters(self, two_cluster_payload):
        summary = _summary(two_cluster_payload)
        assert [s.count for s in summary] == [1, 1]
        assert summary[0].average_distance == pytest.approx(math.sqrt(2))
        assert summary[1].average_distance == pytest.approx(math.sqrt(2))

    def test_counts_sum_to_neighborhoods(self, city_payload):
        summary = _summary(city_payload)
        assert len(summary) == 4
        assert sum(s.count for s in summary) == 80

    def test_matches_server_side_stats(self, city_payload):
        summary = _summary(city_payload)
        for s, stat in zip(summary, city_payload["cluster_stats"]):
            assert s.count == stat["count"]
            assert s.average_distance == pytest.approx(stat["avg_distance"])

    def test_empty_cluster_averages_zero(self, make_payload):
        payload = make_payload([(0.0, 0.0), (100.0, 100.0)], [(1.0, 0.0), (0.0, 2.0)])
        summary = _summary(payload)
        assert summary[1].count == 0
        assert summary[1].average_distance == 0.0
        assert summary[0].average_distance == pytest.approx(1.5)

    def test_no_neighborhoods(self, make_payload):
        payload = make_payload([(0.0, 0.0)], [])
        summary = _summary(payload)
        assert summary[0].count == 0
        assert summary[0].average_distance == 0.0

    def test_hospital_order_and_colors(self, city_payload):
        summary = _summary(city_payload)
        assert [s.hospital_id for s in summary] == [1, 2, 3, 4]
        assert [s.color for s in summary] == [color_for(i) for i in range(4)]
