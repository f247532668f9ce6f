from __future__ import annotations

from typing import Tuple

import plotly.graph_objects as go

from titanic_dash.core.aggregates import TierRate
from titanic_dash.core.base_view import BaseView
from titanic_dash.views import chart_config as cc


class ClassSurvivalView(BaseView):
    """
    Bar chart: survival rate per ticket class, classes in ascending order.
    """

    id = "class_survival"
    label = "Survival Rate by Class"

    def compute_data(self) -> Tuple[TierRate, ...]:
        return self.aggregator.survival_rate_by_class_tier()

    def render_figure(self, data: Tuple[TierRate, ...]) -> go.Figure:
        if not data:
            return self.empty_figure("No data to show")

        fig = go.Figure(
            go.Bar(
                x=[t.label for t in data],
                y=[t.rate for t in data],
                name=cc.RATE_SERIES_LABEL,
                marker_color=cc.CLASS_SURVIVAL_COLOUR,
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
