from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import pandas as pd

from titanic_dash.core.record import Record

FRAME_COLUMNS = ["outcome", "class_tier", "sex", "age", "body_recovered"]


@dataclass(frozen=True)
class Dataset:
    """
    Immutable snapshot of the passenger record set.

    A Dataset starts empty with is_loading=True and is replaced (never mutated)
    once the load finishes. Readers holding a snapshot always see a consistent
    pair of (records, is_loading).
    """
    records: Tuple[Record, ...] = field(default_factory=tuple)
    is_loading: bool = True

    @classmethod
    def loading(cls) -> "Dataset":
        return cls(records=(), is_loading=True)

    @classmethod
    def loaded(cls, records) -> "Dataset":
        return cls(records=tuple(records), is_loading=False)

    @property
    def is_empty(self) -> bool:
        return not self.records

    def __len__(self) -> int:
        return len(self.records)

    def to_frame(self) -> pd.DataFrame:
        """
        Column-oriented view of the records, one row per record, source order kept.

        Missing values are NaN in numeric columns and None in 'sex'.
        """
        if not self.records:
            return pd.DataFrame(columns=FRAME_COLUMNS)

        df = pd.DataFrame.from_records(
            [r.to_dict() for r in self.records],
            columns=FRAME_COLUMNS,
        )
        df["outcome"] = df["outcome"].astype(bool)
        df["age"] = pd.to_numeric(df["age"], errors="coerce")
        df["class_tier"] = pd.to_numeric(df["class_tier"], errors="coerce")
        df["body_recovered"] = pd.to_numeric(df["body_recovered"], errors="coerce")
        return df

    # ------------------------------------------------------------------
    # Serialisation (session-scope persistence)
    # ------------------------------------------------------------------
    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_loading": self.is_loading,
            "records": [r.to_dict() for r in self.records],
        }

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["Dataset"]:
        """
        Rebuild a Dataset from a dict produced by to_dict.
        Returns None if data is None.
        """
        if data is None:
            return None
        records = tuple(Record.from_dict(r) for r in data.get("records", []))
        return cls(records=records, is_loading=bool(data.get("is_loading", True)))
