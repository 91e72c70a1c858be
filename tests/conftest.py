"""Shared payload fixtures for the dashboard tests."""

from __future__ import annotations

import math

import numpy as np
import pytest


def build_payload(
    hospitals: list[tuple[float, float]],
    neighborhoods: list[tuple[float, float]],
    grid_size: int = 20,
    iterations: int = 7,
) -> dict:
    """Build a ``/kmeans/run`` response with nearest-hospital assignments."""
    assignments = [
        min(range(len(hospitals)),
            key=lambda h: math.hypot(x - hospitals[h][0], y - hospitals[h][1]))
        for x, y in neighborhoods
    ]
    dists = [
        math.hypot(x - hospitals[a][0], y - hospitals[a][1])
        for (x, y), a in zip(neighborhoods, assignments)
    ]
    stats = []
    for idx in range(len(hospitals)):
        mine = [d for d, a in zip(dists, assignments) if a == idx]
        stats.append({
            "hospital_id": idx + 1,
            "count": len(mine),
            "avg_distance": sum(mine) / len(mine) if mine else 0.0,
            "max_distance": max(mine) if mine else 0.0,
        })
    return {
        "neighborhoods": [
            {"id": i, "x": x, "y": y} for i, (x, y) in enumerate(neighborhoods)
        ],
        "hospitals": [
            {"id": i + 1, "x": x, "y": y} for i, (x, y) in enumerate(hospitals)
        ],
        "assignments": assignments,
        "iterations": iterations,
        "grid_size": grid_size,
        "inertia": sum(d * d for d in dists),
        "overall_avg_distance": sum(dists) / len(dists) if dists else 0.0,
        "overall_max_distance": max(dists) if dists else 0.0,
        "cluster_stats": stats,
        "distance_bins": [
            {"label": "0-2 km", "count": sum(1 for d in dists if d < 2)},
            {"label": "2-4 km", "count": sum(1 for d in dists if 2 <= d < 4)},
            {"label": "4+ km", "count": sum(1 for d in dists if d >= 4)},
        ],
    }


@pytest.fixture
def city_payload() -> dict:
    """m=20, n=80, k=4 city with deterministic positions."""
    rng = np.random.default_rng(42)
    points = [(float(x), float(y)) for x, y in rng.uniform(0, 20, size=(80, 2))]
    hospitals = [(5.0, 5.0), (15.0, 5.0), (5.0, 15.0), (15.0, 15.0)]
    return build_payload(hospitals, points, grid_size=20)


@pytest.fixture
def two_cluster_payload() -> dict:
    return build_payload([(0.0, 0.0), (10.0, 10.0)], [(1.0, 1.0), (9.0, 9.0)],
                         grid_size=10, iterations=2)


@pytest.fixture
def pretrained_payload() -> dict:
    return {
        "k": 2,
        "hospitals": [[3.14159, 2.5], [10.0, 12.346]],
        "description": "Centroids trained on 500 neighborhoods",
    }


@pytest.fixture
def make_payload():
    return build_payload
