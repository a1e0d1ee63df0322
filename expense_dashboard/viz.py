"""Visualization utilities for the Expense Dashboard."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

import pandas as pd
import plotly.express as px
import plotly.graph_objects as go

from . import utils


def _empty_figure(message: str) -> go.Figure:
    fig = go.Figure()
    fig.add_annotation(
        text=message,
        showarrow=False,
        x=0.5,
        y=0.5,
        xref="paper",
        yref="paper",
        font=dict(size=14, color="#6c757d"),
    )
    fig.update_layout(margin=dict(l=0, r=0, t=20, b=20))
    return fig


def plot_category_breakdown(
    buckets: Iterable[Mapping[str, object]],
    *,
    currency_symbol: str = "$",
) -> go.Figure:
    """Horizontal bars per category, sized by each bucket's ``width``."""

    data = list(buckets)
    if not data or not any(float(item["amount"]) > 0 for item in data):  # type: ignore[arg-type]
        return _empty_figure("No category spend to display.")

    df = pd.DataFrame(data)
    df["category"] = df["category"].map(lambda value: getattr(value, "value", value))
    df["text"] = [
        f"{utils.format_currency(amount, currency_symbol)} · {percentage:.1f}%"
        for amount, percentage in zip(df["amount"], df["percentage"])
    ]

    fig = px.bar(
        df,
        x="width",
        y="category",
        orientation="h",
        text="text",
        title="Category breakdown",
        labels={"width": "Relative to largest category", "category": "Category"},
    )
    fig.update_traces(marker_color="#10b981", textposition="outside", cliponaxis=False)
    fig.update_layout(margin=dict(l=0, r=0, t=40, b=0), xaxis_range=[0, 115])
    fig.update_yaxes(categoryorder="array", categoryarray=list(reversed(df["category"].tolist())))
    return fig


def plot_monthly_trend(
    points: Iterable[Mapping[str, object]],
    *,
    currency_symbol: str = "$",
) -> go.Figure:
    data = list(points)
    if not data:
        return _empty_figure("Not enough data to chart trends yet.")

    df = pd.DataFrame(data)
    fig = px.bar(
        df,
        x="label",
        y="amount",
        title="Monthly trend",
        labels={"label": "Month", "amount": "Spend"},
    )
    fig.update_traces(
        marker_color="#0ea5e9",
        hovertemplate="%{x}<br>" + currency_symbol + "%{y:,.2f}<extra></extra>",
    )
    fig.update_layout(margin=dict(l=0, r=0, t=40, b=0))
    fig.update_xaxes(categoryorder="array", categoryarray=df["label"].tolist())
    return fig
