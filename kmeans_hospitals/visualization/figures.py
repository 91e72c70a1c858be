"""Plotly figure builders for the city map and the analytics charts.

The map reproduces a fixed square viewport: simulation coordinates are
projected to pixels with :func:`~kmeans_hospitals.core.geometry.project`
and the y axis grows downwards, as on a drawing canvas.
"""

from __future__ import annotations

from typing import Any, Optional

import pandas as pd
import plotly.graph_objects as go

from ..core.geometry import VIEWPORT_PADDING, VIEWPORT_SIZE, grid_lines, project
from ..core.models import EnrichedResult
from ..core.palette import color_for

# ═══════════════════════════════════════════════════════════════════════
#  Dark plotly theme
# ═══════════════════════════════════════════════════════════════════════

_LAYOUT_DEFAULTS = dict(
    template="plotly_dark",
    paper_bgcolor="#0a0a0f",
    plot_bgcolor="#0a0a0f",
    font=dict(family="Inter, -apple-system, sans-serif", color="#e8eaed"),
    margin=dict(l=20, r=20, t=40, b=20),
    height=260,
    uirevision="stable",
)

_MAP_BG = "#1e1b4b"
_GRID_COLOR = "#2d325a"
_AXIS_COLOR = "#94a3b8"


def _layout(**overrides: Any) -> dict[str, Any]:
    layout = dict(_LAYOUT_DEFAULTS)
    layout.update(overrides)
    return layout


# ═══════════════════════════════════════════════════════════════════════
#  City map
# ═══════════════════════════════════════════════════════════════════════


def _grid_shapes(grid_size: float) -> tuple[list[dict], list[dict]]:
    shapes: list[dict] = [
        dict(
            type="rect", x0=0, y0=0, x1=VIEWPORT_SIZE, y1=VIEWPORT_SIZE,
            fillcolor=_MAP_BG, line=dict(width=0), layer="below",
        )
    ]
    annotations: list[dict] = []
    far = VIEWPORT_SIZE - VIEWPORT_PADDING
    for line in grid_lines(grid_size):
        style = dict(color=_GRID_COLOR, width=0.5)
        shapes.append(dict(type="line", x0=VIEWPORT_PADDING, x1=far,
                           y0=line.position, y1=line.position, line=style, layer="below"))
        shapes.append(dict(type="line", y0=VIEWPORT_PADDING, y1=far,
                           x0=line.position, x1=line.position, line=style, layer="below"))
        annotations.append(dict(
            x=line.position, y=VIEWPORT_PADDING - 6, text=f"{line.label} km",
            showarrow=False, yanchor="bottom",
            font=dict(size=9, color=_AXIS_COLOR),
        ))
    return shapes, annotations


def city_map_figure(result: Optional[EnrichedResult], grid_size: float) -> go.Figure:
    """Neighborhoods colored by cluster, hospitals as labeled crosses."""
    shapes, annotations = _grid_shapes(grid_size)
    fig = go.Figure()

    if result is not None:
        nbs = result.neighborhoods
        hospitals = result.hospitals
        fig.add_trace(
            go.Scatter(
                x=[project(nb.x, grid_size) for nb in nbs],
                y=[project(nb.y, grid_size) for nb in nbs],
                mode="markers",
                marker=dict(
                    size=11,
                    color=[color_for(nb.cluster) for nb in nbs],
                    opacity=0.85,
                ),
                text=[
                    f"<b>Neighborhood #{nb.id}</b><br>"
                    f"Position: ({nb.x:.1f}, {nb.y:.1f}) km<br>"
                    f"Hospital: H{hospitals[nb.cluster].id}"
                    for nb in nbs
                ],
                hoverinfo="text",
                name="Neighborhoods",
                showlegend=False,
            )
        )
        fig.add_trace(
            go.Scatter(
                x=[project(h.x, grid_size) for h in hospitals],
                y=[project(h.y, grid_size) for h in hospitals],
                mode="markers+text",
                marker=dict(
                    size=18,
                    symbol="circle-cross",
                    color="#0f172a",
                    line=dict(width=2, color="#f8fafc"),
                ),
                text=[f"H{h.id}" for h in hospitals],
                textposition="bottom center",
                textfont=dict(size=10, color="#f8fafc"),
                hovertext=[
                    f"<b>Hospital #{h.id}</b><br>Position: ({h.x:.1f}, {h.y:.1f}) km"
                    for h in hospitals
                ],
                hoverinfo="text",
                name="Hospitals",
                showlegend=False,
            )
        )

    fig.update_layout(
        shapes=shapes,
        annotations=annotations,
        xaxis=dict(range=[0, VIEWPORT_SIZE], visible=False, fixedrange=True),
        yaxis=dict(range=[VIEWPORT_SIZE, 0], visible=False, fixedrange=True,
                   scaleanchor="x", scaleratio=1),
        **_layout(height=VIEWPORT_SIZE, margin=dict(l=0, r=0, t=0, b=0)),
    )
    return fig


# ═══════════════════════════════════════════════════════════════════════
#  Analytics charts
# ═══════════════════════════════════════════════════════════════════════


def _chart_axes(fig: go.Figure, integer_y: bool = False) -> None:
    fig.update_xaxes(color=_AXIS_COLOR, gridcolor="#1f2937")
    fig.update_yaxes(color=_AXIS_COLOR, gridcolor="#1f2937",
                     griddash="dash", tickformat=",d" if integer_y else None)


def cluster_count_figure(rows: list[dict[str, Any]]) -> go.Figure:
    """Neighborhoods per hospital, to check load balance."""
    df = pd.DataFrame(rows, columns=["hospital_label", "count", "avg", "max", "color"])
    fig = go.Figure(
        go.Bar(
            x=df["hospital_label"],
            y=df["count"],
            marker=dict(color=df["color"]),
            hovertemplate="%{x}<br>Neighborhoods: %{y}<extra></extra>",
        )
    )
    fig.update_layout(title=dict(text="Neighborhoods per hospital", font=dict(size=14)),
                      **_layout())
    _chart_axes(fig, integer_y=True)
    return fig


def coverage_figure(rows: list[dict[str, Any]]) -> go.Figure:
    """Average vs maximum distance per hospital."""
    df = pd.DataFrame(rows, columns=["hospital_label", "count", "avg", "max", "color"])
    fig = go.Figure()
    fig.add_trace(go.Scatter(x=df["hospital_label"], y=df["avg"], mode="lines+markers",
                             name="Average (km)", line=dict(width=2, color="#ffbe0b")))
    fig.add_trace(go.Scatter(x=df["hospital_label"], y=df["max"], mode="lines+markers",
                             name="Maximum (km)", line=dict(width=2, color="#00b4d8")))
    fig.update_layout(
        title=dict(text="Coverage quality", font=dict(size=14)),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1),
        **_layout(),
    )
    _chart_axes(fig)
    return fig


def distance_histogram_figure(rows: list[dict[str, Any]]) -> go.Figure:
    """How many neighborhoods fall in each travel-distance bin."""
    df = pd.DataFrame(rows, columns=["label", "count"])
    fig = go.Figure(
        go.Scatter(
            x=df["label"],
            y=df["count"],
            mode="lines",
            fill="tozeroy",
            line=dict(width=2, color="#f43f5e", shape="spline"),
            fillcolor="rgba(244,63,94,0.35)",
            hovertemplate="%{x}<br>Neighborhoods: %{y}<extra></extra>",
        )
    )
    fig.update_layout(title=dict(text="Distance distribution", font=dict(size=14)),
                      **_layout())
    _chart_axes(fig, integer_y=True)
    return fig


def empty_figure(message: str = "No data to show.") -> go.Figure:
    fig = go.Figure()
    fig.update_layout(
        xaxis=dict(visible=False),
        yaxis=dict(visible=False),
        annotations=[dict(text=message, showarrow=False, font=dict(color=_AXIS_COLOR))],
        **_layout(),
    )
    return fig
