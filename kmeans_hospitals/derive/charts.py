"""Chart data shaper.

Reformats the aggregate statistics the service computes into flat rows for
the chart figures and the KPI card strip.  Every transform keeps the order
of its input.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from ..core.models import (
    ClusterStat,
    DistanceBin,
    EnrichedResult,
    PretrainedModel,
    SimulationResponse,
)
from ..core.palette import color_for


@dataclass(frozen=True)
class KpiCard:
    label: str
    value: str
    caption: str


def round2(value: float) -> float:
    """Round half up to two decimals."""
    return math.floor(value * 100 + 0.5) / 100


def format_km(value: float) -> str:
    return f"{value:.1f} km"


def cluster_chart_rows(cluster_stats: Iterable[ClusterStat]) -> list[dict[str, Any]]:
    return [
        {
            "hospital_label": f"H{stat.hospital_id}",
            "count": stat.count,
            "avg": round2(stat.avg_distance),
            "max": round2(stat.max_distance),
            "color": color_for(idx),
        }
        for idx, stat in enumerate(cluster_stats)
    ]


def histogram_rows(distance_bins: Iterable[DistanceBin]) -> list[dict[str, Any]]:
    return [{"label": b.label, "count": b.count} for b in distance_bins]


def kpi_cards(result: SimulationResponse | EnrichedResult) -> list[KpiCard]:
    """The five headline statistics shown above the charts."""
    return [
        KpiCard(
            label="Simulated neighborhoods",
            value=str(len(result.neighborhoods)),
            caption=f"{result.grid_size} km per side",
        ),
        KpiCard(
            label="Suggested hospitals",
            value=str(len(result.hospitals)),
            caption=f"{result.iterations} iterations",
        ),
        KpiCard(
            label="Average distance",
            value=format_km(result.overall_avg_distance),
            caption="Global average",
        ),
        KpiCard(
            label="Maximum distance",
            value=format_km(result.overall_max_distance),
            caption="Farthest case",
        ),
        KpiCard(
            label="Total inertia",
            value=f"{result.inertia:.2f}",
            caption="Sum of squared distances",
        ),
    ]


def pretrained_rows(model: PretrainedModel) -> list[dict[str, str]]:
    return [
        {
            "label": f"Hospital #{idx + 1}",
            "x": f"{x:.2f} km",
            "y": f"{y:.2f} km",
        }
        for idx, (x, y) in enumerate(model.hospitals)
    ]
