"""Tests for the result enricher."""

from __future__ import annotations

import pytest

from kmeans_hospitals.core.errors import InvariantViolation
from kmeans_hospitals.core.models import Neighborhood, SimulationResponse
from kmeans_hospitals.derive.enrich import assignment_map, enrich


class TestAssignmentMap:
    def test_keys_by_neighborhood_id(self):
        nbs = [Neighborhood(7, 0, 0), Neighborhood(3, 1, 1)]
        assert assignment_map(nbs, [1, 0], 2) == {7: 1, 3: 0}

    def test_length_mismatch(self):
        nbs = [Neighborhood(0, 0, 0), Neighborhood(1, 1, 1)]
        with pytest.raises(InvariantViolation, match="1 assignments for 2"):
            assignment_map(nbs, [0], 2)

    def test_out_of_range_cluster(self):
        nbs = [Neighborhood(0, 0, 0)]
        with pytest.raises(InvariantViolation):
            assignment_map(nbs, [2], 2)

    def test_negative_cluster(self):
        nbs = [Neighborhood(0, 0, 0)]
        with pytest.raises(InvariantViolation):
            assignment_map(nbs, [-1], 2)

    def test_duplicate_ids(self):
        nbs = [Neighborhood(0, 0, 0), Neighborhood(0, 1, 1)]
        with pytest.raises(InvariantViolation, match="Duplicate"):
            assignment_map(nbs, [0, 1], 2)


class TestEnrich:
    def test_labels_every_neighborhood(self, city_payload):
        resp = SimulationResponse.from_payload(city_payload)
        enriched = enrich(resp)
        assert [nb.cluster for nb in enriched.neighborhoods] == list(resp.assignments)
        assert [nb.id for nb in enriched.neighborhoods] == [nb.id for nb in resp.neighborhoods]

    def test_keeps_aggregates(self, city_payload):
        resp = SimulationResponse.from_payload(city_payload)
        enriched = enrich(resp)
        assert enriched.hospitals == resp.hospitals
        assert enriched.inertia == resp.inertia
        assert enriched.cluster_stats == resp.cluster_stats

    def test_mismatch_fails_loudly(self, two_cluster_payload):
        two_cluster_payload["assignments"].append(0)
        resp = SimulationResponse.from_payload(two_cluster_payload)
        with pytest.raises(InvariantViolation):
            enrich(resp)
