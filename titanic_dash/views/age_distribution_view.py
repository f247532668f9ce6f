from __future__ import annotations

from typing import Tuple

import plotly.graph_objects as go

from titanic_dash.core.aggregates import AgeBin
from titanic_dash.core.base_view import BaseView
from titanic_dash.views import chart_config as cc


class AgeDistributionView(BaseView):
    """
    Grouped bars of survivors and deaths per ten-year age band.
    """

    id = "age_distribution"
    label = "Outcome by Age Group"

    def compute_data(self) -> Tuple[AgeBin, ...]:
        return self.aggregator.age_binned_outcome()

    def render_figure(self, data: Tuple[AgeBin, ...]) -> go.Figure:
        if not data:
            return self.empty_figure("No data to show")

        labels = [b.label for b in data]
        fig = go.Figure()
        fig.add_bar(
            x=labels,
            y=[b.survived for b in data],
            name="Survived",
            marker_color=cc.SURVIVED_COLOUR,
        )
        fig.add_bar(
            x=labels,
            y=[b.died for b in data],
            name="Died",
            marker_color=cc.DIED_COLOUR,
        )
        fig.update_layout(
            title=self.label,
            barmode="group",
            height=cc.FIGURE_HEIGHT,
            margin=cc.FIGURE_MARGIN,
            showlegend=True,
            legend=cc.BAR_LEGEND,
            xaxis_title="Age (years)",
            yaxis_title="Passengers",
        )
        cc.count_axes(fig)
        return fig
