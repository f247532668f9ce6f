from __future__ import annotations

from typing import Tuple

import plotly.graph_objects as go

from titanic_dash.core.aggregates import CategoryRate
from titanic_dash.core.base_view import BaseView
from titanic_dash.views import chart_config as cc


class SexSurvivalView(BaseView):
    """
    Bar chart: survival rate for female and male passengers.

    Both bars are always drawn; a category without passengers has a NaN rate
    and shows up as a gap labelled "no data".
    """

    id = "sex_survival"
    label = "Survival Rate by Sex"

    def compute_data(self) -> Tuple[CategoryRate, ...]:
        return self.aggregator.survival_rate_by_sex()

    def render_figure(self, data: Tuple[CategoryRate, ...]) -> go.Figure:
        if not data:
            return self.empty_figure("No data to show")

        fig = go.Figure(
            go.Bar(
                x=[c.label for c in data],
                y=[c.rate for c in data],
                text=[f"{c.rate:.1f}%" if c.has_data else "no data" for c in data],
                textposition="outside",
                name=cc.RATE_SERIES_LABEL,
                marker_color=cc.SEX_SURVIVAL_COLOURS[: len(data)],
            )
        )
        fig.update_layout(
            title=self.label,
            height=cc.FIGURE_HEIGHT,
            margin=cc.FIGURE_MARGIN,
            showlegend=False,
        )
        cc.rate_axes(fig)
        return fig
