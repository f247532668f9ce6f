from __future__ import annotations

import threading
from typing import Any, Dict, List

from titanic_dash.core.aggregates import SurvivalSplit, TierRate
from titanic_dash.core.dataset import Dataset
from titanic_dash.core.exceptions import TableLoadError
from titanic_dash.core.record import Record
from titanic_dash.core.table_loader import CsvTableSource
from titanic_dash.services.dataset_service import DatasetAggregator
from titanic_dash.services.storage import InMemoryStorage, StateStore


class ListSource:
    """In-memory TableSource."""

    def __init__(self, rows: List[Dict[str, Any]]):
        self.rows = rows
        self.calls = 0

    def fetch(self) -> List[Dict[str, Any]]:
        self.calls += 1
        return list(self.rows)


class GatedSource(ListSource):
    """Blocks in fetch() until the gate is opened."""

    def __init__(self, rows: List[Dict[str, Any]]):
        super().__init__(rows)
        self.gate = threading.Event()

    def fetch(self) -> List[Dict[str, Any]]:
        self.gate.wait(timeout=5)
        return super().fetch()


class FailingSource:
    def fetch(self):
        raise TableLoadError("unreadable")


REFERENCE_ROWS = [
    {"outcome": 1, "class_tier": 1, "sex": "female", "age": 29, "body_recovered": None},
    {"outcome": 0, "class_tier": 3, "sex": "male", "age": 22, "body_recovered": 7},
]


def test_starts_empty_and_loading():
    agg = DatasetAggregator()

    assert agg.is_loading is True
    assert agg.records == ()
    assert agg.survival_split() == SurvivalSplit(0, 0)
    assert agg.survival_rate_by_sex() == ()


def test_load_populates_records_and_views():
    agg = DatasetAggregator()

    dataset = agg.load(ListSource(REFERENCE_ROWS)).result(timeout=5)

    assert agg.is_loading is False
    assert dataset is agg.dataset
    assert len(agg.records) == 2
    assert agg.survival_split() == SurvivalSplit(survived=1, not_survived=1)
    assert agg.survival_rate_by_class_tier() == (TierRate(1, 100.0), TierRate(3, 0.0))
    assert agg.recovery_outcome().values == [1, 0]
    agg.shutdown()


def test_load_drops_rows_without_outcome_and_keeps_order():
    rows = [
        {"outcome": 0, "class_tier": 2},
        {"outcome": None, "class_tier": 1},
        {"outcome": 1, "class_tier": 3},
    ]
    agg = DatasetAggregator()
    agg.load(ListSource(rows)).result(timeout=5)

    assert [r.class_tier for r in agg.records] == [2, 3]
    agg.shutdown()


def test_failed_load_leaves_empty_dataset_and_clears_flag():
    agg = DatasetAggregator()

    future = agg.load(FailingSource())
    dataset = future.result(timeout=5)

    assert future.exception() is None
    assert dataset.is_loading is False
    assert agg.is_loading is False
    assert agg.records == ()
    assert agg.survival_split() == SurvivalSplit(0, 0)
    agg.shutdown()


def test_missing_csv_is_a_soft_failure(tmp_path):
    agg = DatasetAggregator()
    agg.load(CsvTableSource(tmp_path / "missing.csv")).result(timeout=5)

    assert agg.is_loading is False
    assert agg.records == ()
    agg.shutdown()


def test_on_complete_called_once_on_success_and_failure():
    for source in (ListSource(REFERENCE_ROWS), FailingSource()):
        seen: List[Dataset] = []
        agg = DatasetAggregator()
        agg.load(source, on_complete=seen.append).result(timeout=5)

        assert len(seen) == 1
        assert seen[0].is_loading is False
        agg.shutdown()


def test_observer_errors_do_not_escape():
    def boom(_dataset):
        raise RuntimeError("observer bug")

    agg = DatasetAggregator()
    future = agg.load(ListSource(REFERENCE_ROWS), on_complete=boom)

    assert future.exception(timeout=5) is None
    assert len(agg.records) == 2
    agg.shutdown()


def test_second_load_is_ignored():
    first = ListSource(REFERENCE_ROWS)
    second = ListSource([{"outcome": 1}] * 5)
    agg = DatasetAggregator()

    agg.load(first).result(timeout=5)
    agg.load(second).result(timeout=5)

    assert second.calls == 0
    assert len(agg.records) == 2
    agg.shutdown()


def test_overlapping_load_still_notifies_its_observer():
    source = GatedSource(REFERENCE_ROWS)
    seen: List[str] = []
    second_done = threading.Event()

    def second(_dataset):
        seen.append("second")
        second_done.set()

    agg = DatasetAggregator()
    first_future = agg.load(source, on_complete=lambda _d: seen.append("first"))
    second_future = agg.load(ListSource([{"outcome": 1}]), on_complete=second)
    source.gate.set()

    assert second_future is first_future
    first_future.result(timeout=5)
    assert second_done.wait(timeout=5)
    assert sorted(seen) == ["first", "second"]
    assert source.calls == 1
    assert len(agg.records) == 2
    agg.shutdown()


def test_loaded_snapshot_is_saved_to_session_store_and_restored():
    store = StateStore(InMemoryStorage(), "dataset.json")
    agg = DatasetAggregator(store=store)
    agg.load(ListSource(REFERENCE_ROWS)).result(timeout=5)
    agg.shutdown()

    restored = DatasetAggregator(store=store)

    assert restored.is_loading is False
    assert restored.records == (
        Record(outcome=True, class_tier=1, sex="female", age=29.0),
        Record(outcome=False, class_tier=3, sex="male", age=22.0, body_recovered=7),
    )

    source = ListSource(REFERENCE_ROWS)
    restored.load(source).result(timeout=5)
    assert source.calls == 0


def test_views_are_idempotent_after_load():
    agg = DatasetAggregator()
    agg.load(ListSource(REFERENCE_ROWS)).result(timeout=5)

    assert agg.survival_split() == agg.survival_split()
    assert agg.survival_rate_by_class_tier() == agg.survival_rate_by_class_tier()
    assert agg.survival_rate_by_sex() == agg.survival_rate_by_sex()
    assert agg.age_binned_outcome() == agg.age_binned_outcome()
    assert agg.recovery_outcome() == agg.recovery_outcome()
    agg.shutdown()
