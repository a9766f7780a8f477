"""Plotly figures for the signal dashboard (gauge + bubble matrix)."""

from __future__ import annotations

from typing import Optional, Sequence

import plotly.graph_objects as go

from app_core.analysis.signal_views import (
    BUBBLE_SIZE,
    ChartPoint,
    SignalCounts,
    gauge_needle_value,
    gauge_segments,
)

NEEDLE_COLOR = "#1f2937"


def build_gauge_figure(counts: SignalCounts, selected_date: Optional[str] = None) -> go.Figure:
    """Half-dial gauge: red/gray/green bands sized by the day's mix, needle at the sentiment value."""
    needle = gauge_needle_value(counts)

    steps = []
    start = 0.0
    for offset, color in gauge_segments(counts):
        end = offset * 100.0
        steps.append({"range": [start, end], "color": color})
        start = end

    fig = go.Figure(
        go.Indicator(
            mode="gauge",
            value=needle,
            domain={"x": [0, 1], "y": [0, 1]},
            gauge={
                "shape": "angular",
                "axis": {"range": [0, 100], "visible": False},
                "bar": {"color": "rgba(0,0,0,0)", "thickness": 0},
                "steps": steps,
                "threshold": {
                    "line": {"color": NEEDLE_COLOR, "width": 6},
                    "thickness": 1.0,
                    "value": needle,
                },
            },
        )
    )
    fig.update_layout(
        title=f"Daily signals · {selected_date}" if selected_date else None,
        height=320,
        margin=dict(t=50, r=20, b=10, l=20),
        annotations=[
            dict(x=0.02, y=0.0, text="Sell", showarrow=False, xref="paper", yref="paper"),
            dict(x=0.5, y=0.95, text="Hold", showarrow=False, xref="paper", yref="paper"),
            dict(x=0.98, y=0.0, text="Buy", showarrow=False, xref="paper", yref="paper"),
        ],
    )
    return fig


def build_bubble_figure(
    points: Sequence[ChartPoint],
    date_labels: Sequence[str],
    signal_labels: Sequence[str],
    selected_date: Optional[str] = None,
) -> go.Figure:
    """
    Date x signal matrix, one bubble per cell colored by sell/buy/hold.
    customdata[0] carries the canonical date so a clicked point maps back to a selection.
    """
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=[p.x for p in points],
        y=[p.y for p in points],
        mode="markers",
        name="Signals",
        marker=dict(
            size=BUBBLE_SIZE ** 0.5,
            color=[p.color for p in points],
            opacity=0.8,
            line=dict(width=0),
        ),
        customdata=[[p.date, p.label, p.value] for p in points],
        hovertemplate="<b>%{customdata[1]}</b><br>Date: %{customdata[0]}<br>Signal: %{customdata[2]}<extra></extra>",
    ))

    if selected_date is not None and selected_date in {p.date for p in points}:
        sel_x = next(p.x for p in points if p.date == selected_date)
        fig.add_vrect(
            x0=sel_x - 0.5, x1=sel_x + 0.5,
            fillcolor="rgba(31,41,55,0.08)", line_width=0, layer="below",
        )

    n_dates = len(date_labels)
    n_signals = len(signal_labels)
    fig.update_layout(
        height=max(320, 40 * n_signals + 120),
        showlegend=False,
        hovermode="closest",
        clickmode="event+select",
        margin=dict(t=15, r=20, b=10, l=10),
        plot_bgcolor="rgba(0,0,0,0)",
        xaxis=dict(
            tickmode="array",
            tickvals=list(range(n_dates)),
            ticktext=list(date_labels),
            range=[-0.5, max(0, n_dates - 1) + 0.5],
            tickfont=dict(size=9),
            showgrid=False,
            zeroline=False,
        ),
        yaxis=dict(
            tickmode="array",
            tickvals=list(range(n_signals)),
            ticktext=list(signal_labels),
            range=[-0.5, max(0, n_signals - 1) + 0.5],
            tickfont=dict(size=11),
            showgrid=False,
            zeroline=False,
        ),
    )
    return fig


def clicked_date(event) -> Optional[str]:
    """
    Pull the canonical date out of a `st.plotly_chart(on_select=...)` event.
    Accepts the event object or its dict form; None when nothing was clicked.
    """
    if not event:
        return None
    selection = event.get("selection") if isinstance(event, dict) else getattr(event, "selection", None)
    if not selection:
        return None
    points = selection.get("points") if isinstance(selection, dict) else getattr(selection, "points", None)
    if not points:
        return None
    custom = points[0].get("customdata")
    if not custom:
        return None
    return custom[0]
