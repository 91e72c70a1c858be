"""Tests for payload decoding."""

from __future__ import annotations

import pytest

from kmeans_hospitals.core.errors import DecodeError
from kmeans_hospitals.core.models import (
    PretrainedModel,
    SimulationParams,
    SimulationResponse,
)


class TestSimulationResponse:
    def test_decodes_full_payload(self, city_payload):
        resp = SimulationResponse.from_payload(city_payload)
        assert len(resp.neighborhoods) == 80
        assert len(resp.hospitals) == 4
        assert len(resp.assignments) == 80
        assert resp.grid_size == 20
        assert resp.cluster_stats[0].hospital_id == 1
        assert [b.label for b in resp.distance_bins] == ["0-2 km", "2-4 km", "4+ km"]

    def test_decoded_result_is_hashable(self, two_cluster_payload):
        resp = SimulationResponse.from_payload(two_cluster_payload)
        assert hash(resp) == hash(SimulationResponse.from_payload(two_cluster_payload))

    def test_integer_coordinates_become_floats(self, two_cluster_payload):
        two_cluster_payload["hospitals"][0]["x"] = 0
        resp = SimulationResponse.from_payload(two_cluster_payload)
        assert isinstance(resp.hospitals[0].x, float)

    def test_missing_field(self, two_cluster_payload):
        del two_cluster_payload["inertia"]
        with pytest.raises(DecodeError, match="inertia"):
            SimulationResponse.from_payload(two_cluster_payload)

    def test_wrong_type(self, two_cluster_payload):
        two_cluster_payload["neighborhoods"][0]["x"] = "far"
        with pytest.raises(DecodeError):
            SimulationResponse.from_payload(two_cluster_payload)

    def test_boolean_is_not_a_number(self, two_cluster_payload):
        two_cluster_payload["assignments"][0] = True
        with pytest.raises(DecodeError):
            SimulationResponse.from_payload(two_cluster_payload)

    def test_not_an_object(self):
        with pytest.raises(DecodeError):
            SimulationResponse.from_payload([1, 2, 3])


class TestPretrainedModel:
    def test_decodes_centroids(self, pretrained_payload):
        model = PretrainedModel.from_payload(pretrained_payload)
        assert model.k == 2
        assert model.hospitals == ((3.14159, 2.5), (10.0, 12.346))

    def test_rejects_short_pair(self, pretrained_payload):
        pretrained_payload["hospitals"] = [[1.0]]
        with pytest.raises(DecodeError):
            PretrainedModel.from_payload(pretrained_payload)


class TestSimulationParams:
    def test_defaults(self):
        assert SimulationParams().to_payload() == {"m": 20, "n": 80, "k": 4}

    def test_from_form_coerces(self):
        assert SimulationParams.from_form("30", 100.0, 5) == SimulationParams(30, 100, 5)

    def test_from_form_rejects_missing(self):
        with pytest.raises(ValueError, match=r"Hospitals \(k\) must be a whole number between 1 and 12"):
            SimulationParams.from_form(20, 80, None)

    def test_from_form_rejects_fractions(self):
        """20.7 must not be silently sent as 20."""
        with pytest.raises(ValueError, match=r"City size \(m\) must be a whole number between 5 and 100"):
            SimulationParams.from_form(20.7, 80, 4)
        with pytest.raises(ValueError, match=r"Neighborhoods \(n\)"):
            SimulationParams.from_form(20, "80.5", 4)

    def test_from_form_rejects_out_of_range(self):
        with pytest.raises(ValueError, match="between 1 and 12"):
            SimulationParams.from_form(20, 80, 20)
        with pytest.raises(ValueError, match="between 10 and 500"):
            SimulationParams.from_form(20, 5, 4)

    def test_from_form_accepts_bounds(self):
        assert SimulationParams.from_form(5, 10, 1) == SimulationParams(5, 10, 1)
        assert SimulationParams.from_form(100, 500, 12) == SimulationParams(100, 500, 12)

    def test_from_form_rejects_booleans(self):
        with pytest.raises(ValueError):
            SimulationParams.from_form(True, 80, 4)
