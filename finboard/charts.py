"""Plotly figures for the dashboard components, colored from theme tokens."""
import math
from typing import Sequence

import plotly.graph_objects as go

from finboard.aggregates import AssetCategoryTotal, SeriesPoint
from finboard.domain import Goal
from finboard.formatting import format_currency
from finboard.themes import Theme


def palette(theme: Theme) -> list:
    c = theme.colors
    return [
        c.primary.hex, c.secondary.hex, c.info.hex, c.warning.hex, c.success.hex,
        c.error.hex, c.primary_variant.hex, c.secondary_variant.hex, c.text_tertiary.hex,
    ]


def apply_theme_layout(fig: go.Figure, theme: Theme, title: str = "") -> go.Figure:
    c, t, s = theme.colors, theme.typography, theme.spacing
    layout = dict(
        paper_bgcolor=c.surface.rgba(),
        plot_bgcolor=c.surface.rgba(),
        font=dict(family=t.primary, size=t.body, color=c.text_secondary.hex),
        margin=dict(t=s.xxl if title else s.md, b=s.md, l=s.md, r=s.md),
        legend=dict(orientation="h", y=-0.15),
    )
    if title:
        layout["title"] = dict(text=title, font=dict(size=t.headline, color=c.text_primary.hex))
    fig.update_layout(**layout)
    return fig


def gauge_ratio(value, target) -> float:
    try:
        value, target = float(value), float(target)
    except (TypeError, ValueError):
        return 0.0
    if target <= 0 or not math.isfinite(value) or not math.isfinite(target):
        return 0.0
    return min(max(value / target, 0.0), 1.0)


def donut_gauge(value, target, theme: Theme, title: str = "") -> go.Figure:
    ratio = gauge_ratio(value, target)
    c = theme.colors
    fig = go.Figure(go.Pie(
        values=[ratio, 1 - ratio],
        hole=0.75,
        sort=False,
        direction="clockwise",
        textinfo="none",
        hoverinfo="skip",
        marker=dict(colors=[c.primary.hex, c.surface_variant.hex]),
        showlegend=False,
    ))
    fig.add_annotation(
        text=f"{ratio * 100:.0f}%<br><span style='font-size:{theme.typography.caption:g}px'>"
             f"{format_currency(value, 0)} of {format_currency(target, 0)}</span>",
        showarrow=False,
        font=dict(size=theme.typography.title2, color=c.text_primary.hex),
    )
    return apply_theme_layout(fig, theme, title)


def income_expense_chart(income: Sequence[SeriesPoint], expenses: Sequence[SeriesPoint],
                         theme: Theme, title: str = "Income vs Expenses") -> go.Figure:
    c = theme.colors
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=[d for d, _ in income], y=[float(v) for _, v in income],
        mode="lines", name="Income", line=dict(color=c.success.hex, width=2),
    ))
    fig.add_trace(go.Scatter(
        x=[d for d, _ in expenses], y=[float(v) for _, v in expenses],
        mode="lines", name="Expenses", line=dict(color=c.error.hex, width=2),
    ))
    fig.update_xaxes(gridcolor=c.border_variant.hex)
    fig.update_yaxes(gridcolor=c.border_variant.hex, tickprefix="$")
    return apply_theme_layout(fig, theme, title)


def assets_pie(aggregated: Sequence[AssetCategoryTotal], theme: Theme,
               title: str = "Asset Allocation") -> go.Figure:
    fig = go.Figure(go.Pie(
        labels=[row.category.value for row in aggregated],
        values=[float(row.total_value) for row in aggregated],
        hole=0.45,
        sort=False,
        marker=dict(colors=palette(theme)),
    ))
    return apply_theme_layout(fig, theme, title)


def goals_bar(goals: Sequence[Goal], theme: Theme, title: str = "Goal Progress") -> go.Figure:
    c = theme.colors
    fig = go.Figure(go.Bar(
        x=[g.progress_percentage for g in goals],
        y=[g.name for g in goals],
        orientation="h",
        marker=dict(color=[c.success.hex if g.is_completed else c.primary.hex for g in goals]),
    ))
    fig.update_xaxes(range=[0, 100], ticksuffix="%", gridcolor=c.border_variant.hex)
    return apply_theme_layout(fig, theme, title)
