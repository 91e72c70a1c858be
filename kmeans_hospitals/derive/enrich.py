"""Result enricher: attach the cluster label to every neighborhood."""

from __future__ import annotations

from collections.abc import Sequence

from ..core.errors import InvariantViolation
from ..core.models import (
    EnrichedNeighborhood,
    EnrichedResult,
    Neighborhood,
    SimulationResponse,
)


def assignment_map(
    neighborhoods: Sequence[Neighborhood],
    assignments: Sequence[int],
    hospital_count: int,
) -> dict[int, int]:
    """Build ``{neighborhood_id: cluster_index}`` from the service's arrays.

    The service pairs ``assignments`` with ``neighborhoods`` by position;
    this is the only place that pairing is relied on.  Raises
    :class:`InvariantViolation` when the arrays differ in length, ids
    repeat, or a cluster index does not name a hospital.
    """
    if len(assignments) != len(neighborhoods):
        raise InvariantViolation(
            f"Got {len(assignments)} assignments for "
            f"{len(neighborhoods)} neighborhoods"
        )

    mapping: dict[int, int] = {}
    for neighborhood, cluster in zip(neighborhoods, assignments):
        if neighborhood.id in mapping:
            raise InvariantViolation(f"Duplicate neighborhood id {neighborhood.id}")
        if not 0 <= cluster < hospital_count:
            raise InvariantViolation(
                f"Neighborhood {neighborhood.id} assigned to cluster {cluster}, "
                f"but only {hospital_count} hospitals exist"
            )
        mapping[neighborhood.id] = cluster
    return mapping


def enrich(response: SimulationResponse) -> EnrichedResult:
    """Label each neighborhood with its cluster, keyed by neighborhood id."""
    clusters = assignment_map(
        response.neighborhoods, response.assignments, len(response.hospitals)
    )
    return EnrichedResult(
        neighborhoods=tuple(
            EnrichedNeighborhood(id=nb.id, x=nb.x, y=nb.y, cluster=clusters[nb.id])
            for nb in response.neighborhoods
        ),
        hospitals=response.hospitals,
        assignments=response.assignments,
        iterations=response.iterations,
        grid_size=response.grid_size,
        inertia=response.inertia,
        overall_avg_distance=response.overall_avg_distance,
        overall_max_distance=response.overall_max_distance,
        cluster_stats=response.cluster_stats,
        distance_bins=response.distance_bins,
    )
