"""
Static display configuration for the dashboard charts.

These are constants consumed by the views when building figures; nothing
here is computed from the data.
"""
from __future__ import annotations

from typing import Any, Dict

SURVIVED_COLOUR = "#41B883"
DIED_COLOUR = "#E46651"

SURVIVAL_SPLIT_COLOURS = [SURVIVED_COLOUR, DIED_COLOUR]
CLASS_SURVIVAL_COLOUR = "#f87979"
SEX_SURVIVAL_COLOURS = ["#36A2EB", "#FF6384"]
BODY_RECOVERY_COLOURS = ["#FF9F40", "#C9CBCF"]

GRID_COLOUR = "#f5f5f5"
TICK_FONT_SIZE = 11
LEGEND_FONT_SIZE = 12

RATE_AXIS_MAX = 100
RATE_SERIES_LABEL = "Survival Rate (%)"

FIGURE_HEIGHT = 360
FIGURE_MARGIN = dict(l=40, r=20, t=50, b=40)

# Doughnut charts: legend below the plot
DOUGHNUT_LEGEND: Dict[str, Any] = {
    "orientation": "h",
    "x": 0.5,
    "xanchor": "center",
    "y": -0.1,
    "yanchor": "top",
    "font": {"size": LEGEND_FONT_SIZE},
}

# Grouped bar charts: legend above the plot
BAR_LEGEND: Dict[str, Any] = {
    "orientation": "h",
    "x": 0.0,
    "xanchor": "left",
    "y": 1.02,
    "yanchor": "bottom",
    "font": {"size": LEGEND_FONT_SIZE},
}

DOUGHNUT_HOLE = 0.5


def rate_axes(fig) -> None:
    """Shared axis styling for the percentage bar charts."""
    fig.update_xaxes(showgrid=False, tickfont={"size": TICK_FONT_SIZE})
    fig.update_yaxes(
        range=[0, RATE_AXIS_MAX],
        gridcolor=GRID_COLOUR,
        tickfont={"size": TICK_FONT_SIZE},
        title_text=RATE_SERIES_LABEL,
    )


def count_axes(fig) -> None:
    """Shared axis styling for count bar charts (y starts at zero, no fixed max)."""
    fig.update_xaxes(showgrid=False, tickfont={"size": TICK_FONT_SIZE})
    fig.update_yaxes(
        rangemode="tozero",
        gridcolor=GRID_COLOUR,
        tickfont={"size": TICK_FONT_SIZE},
    )
