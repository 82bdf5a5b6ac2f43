# MIT License
"""Plotly figure builders for the modelling dashboard.

Keeping the plotting code separate from the page logic keeps styling
consistent across pages.
"""

from __future__ import annotations
from typing import Iterable, Optional, Sequence
import plotly.graph_objects as go

from .series import ResultsStore


def fig_results(results: ResultsStore, years: Sequence[int], names: Optional[Iterable[str]] = None) -> go.Figure:
    """Create a line chart of result series per year.

    Parameters
    ----------
    results:
        Store holding the series.
    years:
        Year axis, one entry per horizon position.
    names:
        Series to draw.  Defaults to every series in store order.

    Returns
    -------
    plotly.graph_objects.Figure
        One trace per series.
    """
    fig = go.Figure()
    for name in names if names is not None else results.names():
        fig.add_scatter(x=list(years), y=results[name], mode="lines+markers", name=name)
    fig.update_layout(
        title="Model Results",
        xaxis_title="Year",
        yaxis_title="Value",
        template="plotly_white",
    )
    return fig
