from __future__ import annotations

import plotly.graph_objects as go

from titanic_dash.core.aggregates import RecoveryOutcome
from titanic_dash.core.base_view import BaseView
from titanic_dash.views import chart_config as cc


class BodyRecoveryView(BaseView):
    """
    Doughnut over passengers who died: body recovered vs not recovered.
    """

    id = "body_recovery"
    label = "Body Recovery"

    def compute_data(self) -> RecoveryOutcome:
        return self.aggregator.recovery_outcome()

    def render_figure(self, data: RecoveryOutcome) -> go.Figure:
        if data is None or sum(data.values) == 0:
            return self.empty_figure("No data to show")

        fig = go.Figure(
            go.Pie(
                labels=list(data.labels),
                values=data.values,
                hole=cc.DOUGHNUT_HOLE,
                marker={"colors": cc.BODY_RECOVERY_COLOURS},
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
