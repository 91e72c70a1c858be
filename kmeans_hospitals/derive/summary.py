"""Summary aggregator: per-hospital membership and mean distance."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from ..core.models import EnrichedResult, Hospital
from ..core.palette import color_for


@dataclass(frozen=True)
class ClusterSummary:
    """View-only summary of one hospital's cluster."""

    hospital_id: int
    color: str
    count: int
    average_distance: float
    hospital: Hospital


def summarize(result: EnrichedResult) -> list[ClusterSummary]:
    """One :class:`ClusterSummary` per hospital, in hospital order.

    The hospital's position in ``result.hospitals`` is its cluster index.
    A hospital with no neighborhoods gets an average distance of ``0.0``.
    """
    if result.neighborhoods:
        xs = np.array([nb.x for nb in result.neighborhoods], dtype=float)
        ys = np.array([nb.y for nb in result.neighborhoods], dtype=float)
        clusters = np.array([nb.cluster for nb in result.neighborhoods], dtype=int)
    else:
        xs = ys = np.empty(0, dtype=float)
        clusters = np.empty(0, dtype=int)

    summaries: list[ClusterSummary] = []
    for idx, hospital in enumerate(result.hospitals):
        mask = clusters == idx
        count = int(mask.sum())
        distances = np.hypot(xs[mask] - hospital.x, ys[mask] - hospital.y)
        summaries.append(
            ClusterSummary(
                hospital_id=hospital.id,
                color=color_for(idx),
                count=count,
                average_distance=float(distances.sum()) / max(count, 1),
                hospital=hospital,
            )
        )
    return summaries
