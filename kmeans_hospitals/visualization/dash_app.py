"""Interactive Dash UI for the K-Means hospitals dashboard.

Run with:
    python -m kmeans_hospitals.visualization.dash_app

Opens at http://127.0.0.1:7860
"""

from __future__ import annotations

import dash
from dash import dcc, html, Input, Output, State

from kmeans_hospitals.api.session import RequestSlot, ViewSession
from kmeans_hospitals.config import configure_logging, get_server_settings
from kmeans_hospitals.core.models import (
    GRID_SIZE_BOUNDS,
    HOSPITAL_BOUNDS,
    NEIGHBORHOOD_BOUNDS,
    EnrichedResult,
    PretrainedModel,
    SimulationParams,
)
from kmeans_hospitals.derive.charts import format_km, pretrained_rows
from kmeans_hospitals.derive.summary import ClusterSummary
from kmeans_hospitals.derive.views import DerivedViews, derive_views
from kmeans_hospitals.visualization.figures import (
    city_map_figure,
    cluster_count_figure,
    coverage_figure,
    distance_histogram_figure,
    empty_figure,
)

_DEFAULTS = SimulationParams()
_HIDDEN = {"display": "none"}
_SHOWN: dict[str, str] = {}

RUN_LABEL = "Run K-Means"
RUN_BUSY_LABEL = "Computing..."
PRETRAINED_LABEL = "Show pretrained hospitals"
PRETRAINED_BUSY_LABEL = "Loading..."


# ═══════════════════════════════════════════════════════════════════════
#  Server-side state (single user)
# ═══════════════════════════════════════════════════════════════════════

_session = ViewSession()


# ═══════════════════════════════════════════════════════════════════════
#  Panel builders (pure, return Dash components)
# ═══════════════════════════════════════════════════════════════════════


def _legend(summary: list[ClusterSummary]) -> list:
    return [
        html.Span([
            html.Span(className="legend-dot", style={"backgroundColor": s.color}),
            f"H{s.hospital_id}",
        ])
        for s in summary
    ]


def _summary_cards(summary: list[ClusterSummary]) -> list:
    return [
        html.Article([
            html.Header([
                html.P(f"Hospital #{s.hospital_id}"),
                html.Strong(f"{s.count} neighborhoods"),
            ], style={"borderColor": s.color}),
            html.Dl([
                html.Div([
                    html.Dt("Coordinates"),
                    html.Dd(f"{s.hospital.x:.1f} km, {s.hospital.y:.1f} km"),
                ]),
                html.Div([
                    html.Dt("Mean distance"),
                    html.Dd(format_km(s.average_distance)),
                ]),
            ]),
        ], className="summary-card")
        for s in summary
    ]


def _kpi_strip(views: DerivedViews) -> list:
    return [
        html.Article([
            html.P(card.label),
            html.Strong(card.value),
            html.Span(card.caption),
        ], className="stat-card")
        for card in views.kpis
    ]


def _error_outputs(slot: RequestSlot) -> tuple[str, dict]:
    message = slot.error
    return (message or ""), (_SHOWN if message else _HIDDEN)


def simulation_panels(slot: RequestSlot[EnrichedResult]) -> tuple:
    """Everything the simulation callback renders, from the slot state.

    Returns, in callback output order: map figure, legend, summary cards,
    KPI strip, three chart figures, results style, empty-state style,
    error text, error style, iterations chip text.
    """
    result = slot.data
    error_text, error_style = _error_outputs(slot)

    if result is None:
        blank = empty_figure()
        return (
            city_map_figure(None, _DEFAULTS.m),
            [], [], [],
            blank, blank, blank,
            _HIDDEN, _SHOWN,
            error_text, error_style,
            "",
        )

    views = derive_views(result)
    return (
        city_map_figure(result, result.grid_size),
        _legend(views.summary),
        _summary_cards(views.summary),
        _kpi_strip(views),
        cluster_count_figure(views.cluster_rows) if views.cluster_rows else empty_figure(),
        coverage_figure(views.cluster_rows) if views.cluster_rows else empty_figure(),
        distance_histogram_figure(views.histogram_rows) if views.histogram_rows else empty_figure(),
        _SHOWN, _HIDDEN,
        error_text, error_style,
        f"Converged in {result.iterations} iterations.",
    )


def pretrained_panel(slot: RequestSlot[PretrainedModel]) -> tuple:
    """Pretrained card children, card style, error text, error style."""
    model = slot.data
    error_text, error_style = _error_outputs(slot)
    if model is None:
        return [], _HIDDEN, error_text, error_style
    card = [
        html.P(model.description),
        html.Ul([
            html.Li([html.Span(row["label"]), html.Span(f"{row['x']} · {row['y']}")])
            for row in pretrained_rows(model)
        ]),
    ]
    return card, _SHOWN, error_text, error_style


# ═══════════════════════════════════════════════════════════════════════
#  Dash app + dark theme
# ═══════════════════════════════════════════════════════════════════════

app = dash.Dash(
    __name__,
    title="K-Means Hospitals",
    suppress_callback_exceptions=True,
)

app.index_string = """<!DOCTYPE html>
<html>
<head>
    {%metas%}
    <title>{%title%}</title>
    {%favicon%}
    {%css%}
    <link rel="preconnect" href="https://fonts.googleapis.com">
    <link rel="preconnect" href="https://fonts.gstatic.com" crossorigin>
    <link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600;700&display=swap" rel="stylesheet">
    <style>
        :root {
            --bg-base: #0a0a0f;
            --bg-surface: rgba(15, 15, 25, 0.8);
            --bg-elevated: rgba(25, 25, 45, 0.6);
            --glass-border: rgba(255, 255, 255, 0.08);
            --text-primary: #e8eaed;
            --text-secondary: #9aa0a6;
            --text-muted: #5f6368;
            --accent: #7c5cfc;
            --accent-red: #f87171;
            --accent-blue: #60a5fa;
            --radius-md: 12px;
            --radius-lg: 16px;
            --shadow-md: 0 4px 16px rgba(0,0,0,0.4);
            --transition: 0.2s cubic-bezier(0.4, 0, 0.2, 1);
        }
        * { box-sizing: border-box; margin: 0; padding: 0; }
        body {
            background: var(--bg-base); color: var(--text-primary);
            font-family: 'Inter', -apple-system, BlinkMacSystemFont, sans-serif;
            line-height: 1.6; -webkit-font-smoothing: antialiased;
        }
        .app-shell { max-width: 1280px; margin: 0 auto; padding: 32px; }
        .eyebrow {
            color: var(--accent); text-transform: uppercase;
            letter-spacing: 0.12em; font-size: 0.75em; font-weight: 600;
        }
        h1 { font-size: 2em; letter-spacing: -0.02em; margin: 4px 0 8px 0; }
        .lede { color: var(--text-secondary); max-width: 720px; }

        .layout { display: grid; grid-template-columns: 320px 1fr; gap: 24px; margin-top: 24px; }
        .panel, .visual, .chart-card, .pretrained-section {
            background: var(--bg-surface); border: 1px solid var(--glass-border);
            border-radius: var(--radius-lg); padding: 20px; box-shadow: var(--shadow-md);
        }
        .panel-hint { color: var(--text-secondary); font-size: 0.85em; margin: 6px 0 12px 0; }
        .controls label { display: block; margin: 10px 0; color: var(--text-secondary); font-size: 0.8em; }
        .controls input {
            width: 100%; margin-top: 4px; padding: 8px 10px;
            background: var(--bg-elevated); color: var(--text-primary);
            border: 1px solid var(--glass-border); border-radius: var(--radius-md);
        }
        button {
            padding: 10px 20px; margin-top: 12px;
            border: 1px solid rgba(124,92,252,0.3); border-radius: var(--radius-md);
            background: linear-gradient(135deg, #5b3fd9, #7c5cfc);
            color: #fff; font-weight: 600; cursor: pointer;
            transition: all var(--transition);
        }
        button:disabled { opacity: 0.5; cursor: wait; }
        .error-banner {
            margin-top: 12px; padding: 10px 14px; border-radius: var(--radius-md);
            background: rgba(248,113,113,0.12); color: var(--accent-red);
            border: 1px solid rgba(248,113,113,0.3);
        }
        .iterations-chip {
            display: inline-block; margin-top: 12px; padding: 4px 14px;
            border-radius: 999px; border: 1px solid var(--glass-border);
            color: var(--accent-blue); font-size: 0.85em; font-weight: 600;
        }
        .iterations-chip:empty { display: none; }
        .visual-header { display: flex; justify-content: space-between; gap: 16px; }
        .visual-header p { color: var(--text-secondary); font-size: 0.85em; }
        .legend { display: flex; flex-wrap: wrap; gap: 10px; font-size: 0.8em; }
        .legend-dot {
            display: inline-block; width: 10px; height: 10px;
            border-radius: 50%; margin-right: 4px;
        }
        .empty-state { color: var(--text-muted); text-align: center; margin: 12px 0; }
        .summary-grid, .analytics {
            display: grid; grid-template-columns: repeat(auto-fill, minmax(200px, 1fr));
            gap: 12px; margin-top: 16px;
        }
        .summary-card, .stat-card {
            background: var(--bg-elevated); border: 1px solid var(--glass-border);
            border-radius: var(--radius-md); padding: 12px 16px;
        }
        .summary-card header { border-left: 4px solid; padding-left: 8px; margin-bottom: 8px; }
        .summary-card dt, .stat-card p, .stat-card span { color: var(--text-secondary); font-size: 0.8em; }
        .stat-card strong { display: block; font-size: 1.4em; }
        .charts-grid { display: grid; grid-template-columns: 1fr 1fr; gap: 16px; margin-top: 16px; }
        .span-2 { grid-column: span 2; }
        .pretrained-section { margin-top: 24px; }
        .pretrained-card { margin-top: 12px; }
        .pretrained-card li { display: flex; justify-content: space-between; list-style: none; }
        @media (max-width: 900px) {
            .layout, .charts-grid { grid-template-columns: 1fr; }
            .span-2 { grid-column: span 1; }
        }
    </style>
</head>
<body>
    {%app_entry%}
    <footer>{%config%}{%scripts%}{%renderer%}</footer>
</body>
</html>"""


# ═══════════════════════════════════════════════════════════════════════
#  Page layout
# ═══════════════════════════════════════════════════════════════════════


def _param_input(label: str, name: str, bounds: tuple[int, int], value: int):
    return html.Label([
        html.Span(label),
        dcc.Input(id=f"input-{name}", type="number", min=bounds[0], max=bounds[1],
                  step=1, value=value, required=True),
    ])


def _chart_card(title: str, hint: str, graph_id: str, wide: bool = False):
    return html.Article([
        html.Header([html.H3(title), html.P(hint, className="panel-hint")]),
        dcc.Graph(id=graph_id, config={"displayModeBar": False}),
    ], className="chart-card span-2" if wide else "chart-card")


def _layout():
    (map_fig, legend, cards, kpis, count_fig, coverage_fig, dist_fig,
     results_style, empty_style, error_text, error_style, chip) = simulation_panels(
        _session.simulation
    )
    pre_card, pre_style, pre_error, pre_error_style = pretrained_panel(_session.pretrained)

    return html.Div([
        html.Header([
            html.P("K-Means Hospitals", className="eyebrow"),
            html.H1("Place hospitals where every neighborhood is best served"),
            html.P(
                "Simulate a city as a grid, generate neighborhoods and compute the "
                "recommended hospital locations with K-Means.",
                className="lede",
            ),
        ]),

        html.Main([
            # ── Parameters ──
            html.Section([
                html.H2("Parameters"),
                html.P(
                    "Set the city size, how many neighborhoods to simulate and "
                    "how many hospitals (clusters) to place.",
                    className="panel-hint",
                ),
                html.Div([
                    _param_input("City size (m)", "m", GRID_SIZE_BOUNDS, _DEFAULTS.m),
                    _param_input("Neighborhoods to simulate (n)", "n",
                                 NEIGHBORHOOD_BOUNDS, _DEFAULTS.n),
                    _param_input("Hospitals (k)", "k", HOSPITAL_BOUNDS, _DEFAULTS.k),
                    html.Button(RUN_LABEL, id="btn-run", n_clicks=0),
                ], className="controls"),
                html.P(error_text, id="error-banner", className="error-banner",
                       style=error_style),
                html.Div(chip, id="iterations-chip", className="iterations-chip"),
            ], className="panel"),

            # ── Map ──
            html.Section([
                html.Div([
                    html.Div([
                        html.H2("Simulated city"),
                        html.P("An m x m canvas where every point is a neighborhood."),
                    ]),
                    html.Div(legend, id="legend", className="legend"),
                ], className="visual-header"),
                dcc.Loading(dcc.Graph(id="city-map", figure=map_fig,
                                      config={"displayModeBar": False})),
                html.P(
                    "Run the simulation to see neighborhoods and hospitals on the grid.",
                    id="empty-state", className="empty-state", style=empty_style,
                ),
                html.Div(cards, id="summary-grid", className="summary-grid"),
            ], className="visual"),
        ], className="layout"),

        # ── Analytics ──
        html.Div([
            html.Section(kpis, id="kpi-strip", className="analytics"),
            html.Section([
                _chart_card("Neighborhoods per hospital",
                            "Check the load balance between centers.",
                            "cluster-count-graph"),
                _chart_card("Coverage quality",
                            "Average vs maximum distance per hospital.",
                            "coverage-graph"),
                _chart_card("Distance distribution",
                            "How many neighborhoods have to travel further.",
                            "distance-graph", wide=True),
            ], className="charts-grid"),
        ], id="results-container", style=results_style),

        # ── Pretrained model ──
        html.Section([
            html.H2("Pretrained model"),
            html.P(
                "Look up the centroids saved from the training notebook to compare "
                "them with the live simulation.",
                className="panel-hint",
            ),
            html.Button(PRETRAINED_LABEL, id="btn-pretrained", n_clicks=0),
            html.P(pre_error, id="pretrained-error", className="error-banner",
                   style=pre_error_style),
            html.Div(pre_card, id="pretrained-card", className="pretrained-card",
                     style=pre_style),
        ], className="pretrained-section"),
    ], className="app-shell")


# Rebuilt on every page load so a refresh shows the current session.
app.layout = _layout


# ═══════════════════════════════════════════════════════════════════════
#  Callbacks
# ═══════════════════════════════════════════════════════════════════════

# ── CB1: Run simulation ──────────────────────────────────────────────

@app.callback(
    Output("city-map", "figure"),
    Output("legend", "children"),
    Output("summary-grid", "children"),
    Output("kpi-strip", "children"),
    Output("cluster-count-graph", "figure"),
    Output("coverage-graph", "figure"),
    Output("distance-graph", "figure"),
    Output("results-container", "style"),
    Output("empty-state", "style"),
    Output("error-banner", "children"),
    Output("error-banner", "style"),
    Output("iterations-chip", "children"),
    Input("btn-run", "n_clicks"),
    State("input-m", "value"),
    State("input-n", "value"),
    State("input-k", "value"),
    running=[
        (Output("btn-run", "disabled"), True, False),
        (Output("btn-run", "children"), RUN_BUSY_LABEL, RUN_LABEL),
    ],
    prevent_initial_call=True,
)
def run_simulation(n_clicks, m, n, k):
    try:
        params = SimulationParams.from_form(m, n, k)
    except ValueError as exc:
        _session.reject_params(str(exc))
    else:
        _session.run_simulation(params)
    return simulation_panels(_session.simulation)


# ── CB2: Pretrained model ────────────────────────────────────────────

@app.callback(
    Output("pretrained-card", "children"),
    Output("pretrained-card", "style"),
    Output("pretrained-error", "children"),
    Output("pretrained-error", "style"),
    Input("btn-pretrained", "n_clicks"),
    running=[
        (Output("btn-pretrained", "disabled"), True, False),
        (Output("btn-pretrained", "children"), PRETRAINED_BUSY_LABEL, PRETRAINED_LABEL),
    ],
    prevent_initial_call=True,
)
def fetch_pretrained(n_clicks):
    _session.fetch_pretrained()
    return pretrained_panel(_session.pretrained)


# ═══════════════════════════════════════════════════════════════════════
#  Entry point
# ═══════════════════════════════════════════════════════════════════════


def main() -> None:
    configure_logging()
    settings = get_server_settings()
    app.run(host=settings.host, debug=False, port=settings.port)


if __name__ == "__main__":
    main()
