from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import plotly.graph_objs as go

if TYPE_CHECKING:
    from titanic_dash.services.dataset_service import DatasetAggregator

logger = logging.getLogger(__name__)


class BaseView(ABC):
    """
    Abstract base class for all chart views.

    Defines the contract that every view in the app must follow
    - expose an 'id' - used internally and in dashboard config
    - expose a 'label' - used as the chart title
    - implement 'compute_data' - read the derived aggregate from the aggregator
    - implement 'render_figure' - build the Plotly figure from that aggregate
    """

    id: str = None
    label: str = None

    def __init__(self, aggregator: DatasetAggregator):
        self.aggregator = aggregator

    @abstractmethod
    def compute_data(self) -> Any:
        """
        Compute the data for this chart from the current dataset snapshot
        :return: data: the aggregate (empty/neutral when there are no records)
        """
        raise NotImplementedError()

    @abstractmethod
    def render_figure(self, data: Any) -> go.Figure:
        """
        Render the figure given the computed data
        :param data: the data provided by {@link compute_data()}
        :return: the Plotly figure
        """
        raise NotImplementedError()

    # ------------------------------------------------------------------
    # Common helpers for all views
    # ------------------------------------------------------------------
    def timed_compute(self) -> Any:
        """
        compute_data() with its duration logged.
        """
        start = time.perf_counter()
        data = self.compute_data()
        logger.debug(
            "view_compute",
            extra={"view_id": self.id, "elapsed_ms": round((time.perf_counter() - start) * 1000, 2)},
        )
        return data

    def figure(self) -> go.Figure:
        return self.render_figure(self.timed_compute())

    @staticmethod
    def empty_figure(message: str) -> go.Figure:
        """
        Standardised 'no data' figure used by all views.
        """
        fig = go.Figure()
        fig.update_layout(
            title=message,
            xaxis={"visible": False},
            yaxis={"visible": False},
        )
        return fig
