from __future__ import annotations

import math
from typing import cast

import plotly.graph_objs as go
import pytest

from titanic_dash.core.record import Record
from titanic_dash.core.view_registry import ViewRegistry
from titanic_dash.services.dataset_service import DatasetAggregator
from titanic_dash.views import (
    AgeDistributionView,
    BodyRecoveryView,
    ClassSurvivalView,
    SexSurvivalView,
    SurvivalSplitView,
)
from titanic_dash.views import chart_config as cc


class _StaticSource:
    def __init__(self, rows):
        self.rows = rows

    def fetch(self):
        return self.rows


def _loaded_aggregator(rows) -> DatasetAggregator:
    agg = DatasetAggregator()
    agg.load(_StaticSource(rows)).result(timeout=5)
    agg.shutdown()
    return agg


def _sample_aggregator() -> DatasetAggregator:
    return _loaded_aggregator(
        [
            {"outcome": 1, "class_tier": 1, "sex": "female", "age": 29, "body_recovered": None},
            {"outcome": 0, "class_tier": 3, "sex": "male", "age": 22, "body_recovered": 7},
            {"outcome": 0, "class_tier": 3, "sex": "male", "age": 45, "body_recovered": None},
        ]
    )


ALL_VIEWS = [SurvivalSplitView, ClassSurvivalView, SexSurvivalView, AgeDistributionView, BodyRecoveryView]


@pytest.mark.parametrize("view_cls", ALL_VIEWS)
def test_views_render_no_data_figure_while_loading(view_cls):
    view = view_cls(DatasetAggregator())

    fig = view.figure()

    assert isinstance(fig, go.Figure)
    assert fig.layout.title.text == "No data to show"
    assert len(fig.data) == 0


@pytest.mark.parametrize("view_cls", ALL_VIEWS)
def test_views_have_ids_and_labels(view_cls):
    assert view_cls.id
    assert view_cls.label


def test_survival_split_doughnut():
    view = SurvivalSplitView(_sample_aggregator())

    fig = cast(go.Figure, view.figure())

    pie = fig.data[0]
    assert pie.type == "pie"
    assert list(pie.labels) == ["Survived", "Did Not Survive"]
    assert list(pie.values) == [1, 2]
    assert pie.hole == cc.DOUGHNUT_HOLE
    assert fig.layout.legend.orientation == "h"


def test_class_survival_bars_follow_tier_order():
    view = ClassSurvivalView(_sample_aggregator())

    fig = view.figure()

    bar = fig.data[0]
    assert list(bar.x) == ["Class 1", "Class 3"]
    assert list(bar.y) == [100.0, 0.0]
    assert tuple(fig.layout.yaxis.range) == (0, cc.RATE_AXIS_MAX)
    assert fig.layout.showlegend is False


def test_sex_survival_marks_missing_category():
    agg = _loaded_aggregator([{"outcome": 1, "sex": "male"}])
    view = SexSurvivalView(agg)

    fig = view.figure()

    bar = fig.data[0]
    assert list(bar.x) == ["Female", "Male"]
    assert math.isnan(bar.y[0])
    assert bar.y[1] == 100.0
    assert list(bar.text) == ["no data", "100.0%"]


def test_age_distribution_grouped_bars():
    view = AgeDistributionView(_sample_aggregator())

    fig = view.figure()

    assert [t.name for t in fig.data] == ["Survived", "Died"]
    assert len(fig.data[0].x) == 8
    assert sum(fig.data[0].y) == 1
    assert sum(fig.data[1].y) == 2
    assert fig.layout.barmode == "group"


def test_body_recovery_doughnut():
    view = BodyRecoveryView(_sample_aggregator())

    fig = view.figure()

    pie = fig.data[0]
    assert list(pie.labels) == ["Body Found", "Body Not Found"]
    assert list(pie.values) == [1, 1]


def test_chart_config_constants_well_formed():
    for colour in (
        cc.SURVIVAL_SPLIT_COLOURS
        + cc.SEX_SURVIVAL_COLOURS
        + cc.BODY_RECOVERY_COLOURS
        + [cc.CLASS_SURVIVAL_COLOUR, cc.GRID_COLOUR]
    ):
        assert colour.startswith("#") and len(colour) in (4, 7)
    assert cc.DOUGHNUT_LEGEND["yanchor"] == "top"
    assert cc.BAR_LEGEND["yanchor"] == "bottom"


def test_registry_creates_views_and_rejects_duplicates():
    registry = ViewRegistry()
    for view_cls in ALL_VIEWS:
        registry.register(view_cls)

    assert registry.ids() == [v.id for v in ALL_VIEWS]
    assert isinstance(registry.create("class_survival", DatasetAggregator()), ClassSurvivalView)

    with pytest.raises(ValueError):
        registry.register(ClassSurvivalView)
    with pytest.raises(KeyError):
        registry.create("nope", DatasetAggregator())
    with pytest.raises(TypeError):
        registry.register(object)
