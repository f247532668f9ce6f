from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional, Tuple

from titanic_dash.core import aggregates
from titanic_dash.core.aggregates import (
    AgeBin,
    CategoryRate,
    RecoveryOutcome,
    SurvivalSplit,
    TierRate,
)
from titanic_dash.core.dataset import Dataset
from titanic_dash.core.record import Record, records_from_rows
from titanic_dash.core.table_loader import TableSource
from titanic_dash.services.storage import StateStore

logger = logging.getLogger(__name__)

LoadObserver = Callable[[Dataset], None]


class DatasetAggregator:
    """
    Owns the passenger dataset and exposes its derived views.

    Lifecycle:
    - starts as an empty, loading snapshot (or whatever the session store holds)
    - load() fetches rows in the background and swaps in a loaded snapshot
      exactly once, on success or failure
    - after that the snapshot never changes

    Derived views are recomputed on each call from the current snapshot.
    """

    def __init__(self, store: Optional[StateStore] = None):
        self._store = store
        self._executor: Optional[ThreadPoolExecutor] = None
        self._load_future: Optional[Future] = None

        restored = Dataset.from_dict(store.load()) if store is not None else None
        if restored is not None and not restored.is_loading:
            logger.info(
                "Dataset restored from session store",
                extra={"n_records": len(restored)},
            )
            self._dataset = restored
        else:
            self._dataset = Dataset.loading()

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    @property
    def dataset(self) -> Dataset:
        return self._dataset

    @property
    def records(self) -> Tuple[Record, ...]:
        return self._dataset.records

    @property
    def is_loading(self) -> bool:
        return self._dataset.is_loading

    # ------------------------------------------------------------------
    # Load
    # ------------------------------------------------------------------
    def load(self, source: TableSource, on_complete: Optional[LoadObserver] = None) -> Future:
        """
        Start loading rows from source without blocking.

        The returned Future resolves (never with an exception) once the
        snapshot has been replaced. on_complete receives the new snapshot.
        Calling load again after the dataset is loaded, or while a load is
        in flight, does not fetch again; its on_complete still receives the
        snapshot once the first load has finished.
        """
        if self._load_future is not None:
            logger.info("Dataset load already issued; ignoring", extra={"source": repr(source)})
            if on_complete is not None:
                self._load_future.add_done_callback(lambda f: self._notify(on_complete, f.result()))
            return self._load_future

        if not self._dataset.is_loading:
            logger.info("Dataset already loaded; ignoring load", extra={"source": repr(source)})
            done: Future = Future()
            done.set_result(self._dataset)
            if on_complete is not None:
                self._notify(on_complete, self._dataset)
            return done

        logger.info("Dataset load started", extra={"source": repr(source)})
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="dataset-load")
        self._load_future = self._executor.submit(self._run_load, source, on_complete)
        return self._load_future

    def _run_load(self, source: TableSource, on_complete: Optional[LoadObserver]) -> Dataset:
        try:
            rows = source.fetch()
            records, dropped = records_from_rows(rows)
        except Exception:
            logger.exception("Dataset load failed", extra={"source": repr(source)})
            self._complete(Dataset.loaded(()), on_complete)
            return self._dataset

        if dropped:
            logger.debug(
                "Dropped rows without an outcome",
                extra={"n_dropped": dropped},
            )
        logger.info(
            "Dataset load finished",
            extra={
                "source": repr(source),
                "n_rows": len(records) + dropped,
                "n_records": len(records),
                "n_dropped": dropped,
            },
        )
        self._complete(Dataset.loaded(records), on_complete)
        return self._dataset

    def _complete(self, dataset: Dataset, on_complete: Optional[LoadObserver]) -> None:
        self._dataset = dataset
        if self._store is not None:
            self._store.save(dataset.to_dict())
        if on_complete is not None:
            self._notify(on_complete, dataset)

    @staticmethod
    def _notify(on_complete: LoadObserver, dataset: Dataset) -> None:
        try:
            on_complete(dataset)
        except Exception:
            logger.exception("Dataset load observer failed")

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------
    def survival_split(self) -> SurvivalSplit:
        return aggregates.survival_split(self._dataset)

    def survival_rate_by_class_tier(self) -> Tuple[TierRate, ...]:
        return aggregates.survival_rate_by_class_tier(self._dataset)

    def survival_rate_by_sex(self) -> Tuple[CategoryRate, ...]:
        return aggregates.survival_rate_by_sex(self._dataset)

    def age_binned_outcome(self) -> Tuple[AgeBin, ...]:
        return aggregates.age_binned_outcome(self._dataset)

    def recovery_outcome(self) -> RecoveryOutcome:
        return aggregates.recovery_outcome(self._dataset)
