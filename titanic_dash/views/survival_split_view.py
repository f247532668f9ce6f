from __future__ import annotations

import plotly.graph_objects as go

from titanic_dash.core.aggregates import SurvivalSplit
from titanic_dash.core.base_view import BaseView
from titanic_dash.views import chart_config as cc


class SurvivalSplitView(BaseView):
    """
    Doughnut of survivors vs non-survivors.
    """

    id = "survival_split"
    label = "Survival Overview"

    def compute_data(self) -> SurvivalSplit:
        return self.aggregator.survival_split()

    def render_figure(self, data: SurvivalSplit) -> go.Figure:
        if data is None or data.total == 0:
            return self.empty_figure("No data to show")

        fig = go.Figure(
            go.Pie(
                labels=list(data.labels),
                values=data.values,
                hole=cc.DOUGHNUT_HOLE,
                marker={"colors": cc.SURVIVAL_SPLIT_COLOURS},
                sort=False,
            )
        )
        fig.update_layout(
            title=self.label,
            height=cc.FIGURE_HEIGHT,
            margin=cc.FIGURE_MARGIN,
            showlegend=True,
            legend=cc.DOUGHNUT_LEGEND,
        )
        return fig
