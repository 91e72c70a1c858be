"""Cluster colorizer: a fixed palette indexed cyclically by cluster."""

from __future__ import annotations

CLUSTER_PALETTE: tuple[str, ...] = (
    "#72efdd",
    "#ffbe0b",
    "#ff006e",
    "#00b4d8",
    "#9ef01a",
    "#f15bb5",
    "#f77f00",
    "#3a0ca3",
)


def color_for(cluster_index: int) -> str:
    """Return the palette color for *cluster_index*.

    Colors repeat every ``len(CLUSTER_PALETTE)`` clusters, so the same
    index always maps to the same color regardless of how many clusters
    a result has.
    """
    return CLUSTER_PALETTE[cluster_index % len(CLUSTER_PALETTE)]
