"""Bundle of every view model derived from one enriched result."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Any

from ..core.models import EnrichedResult
from .charts import KpiCard, cluster_chart_rows, histogram_rows, kpi_cards
from .summary import ClusterSummary, summarize


@dataclass(frozen=True)
class DerivedViews:
    summary: list[ClusterSummary]
    cluster_rows: list[dict[str, Any]]
    histogram_rows: list[dict[str, Any]]
    kpis: list[KpiCard]


@functools.lru_cache(maxsize=8)
def derive_views(result: EnrichedResult) -> DerivedViews:
    """Compute all derived views for *result*.

    Cached on the (immutable) result; callers must not mutate the returned
    lists.
    """
    return DerivedViews(
        summary=summarize(result),
        cluster_rows=cluster_chart_rows(result.cluster_stats),
        histogram_rows=histogram_rows(result.distance_bins),
        kpis=kpi_cards(result),
    )
