from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Literal, Optional, Tuple

Sex = Literal["female", "male"]

SEX_CATEGORIES: Tuple[Sex, ...] = ("female", "male")


@dataclass(frozen=True)
class Record:
    """
    One validated passenger row.

    - outcome: True if the passenger survived
    - class_tier: ticket class (1, 2, 3); None if missing
    - sex: "female" / "male"; None if missing or unrecognised
    - age: age in years; None if missing
    - body_recovered: body identification number; None if the body was not recovered
    """
    outcome: bool
    class_tier: Optional[int] = None
    sex: Optional[Sex] = None
    age: Optional[float] = None
    body_recovered: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "outcome": self.outcome,
            "class_tier": self.class_tier,
            "sex": self.sex,
            "age": self.age,
            "body_recovered": self.body_recovered,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Record":
        return cls(
            outcome=bool(data["outcome"]),
            class_tier=data.get("class_tier"),
            sex=data.get("sex"),
            age=data.get("age"),
            body_recovered=data.get("body_recovered"),
        )


# -------------------------------------------------------------------------
# Coercion helpers (loosely typed row values -> Record fields)
# -------------------------------------------------------------------------

def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def _as_float(value: Any) -> Optional[float]:
    if _is_missing(value):
        return None
    try:
        out = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(out) or math.isinf(out):
        return None
    return out


def _as_int(value: Any) -> Optional[int]:
    out = _as_float(value)
    if out is None:
        return None
    return int(out)


def _as_outcome(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    out = _as_float(value)
    if out == 1:
        return True
    if out == 0:
        return False
    return None


def _as_sex(value: Any) -> Optional[Sex]:
    if _is_missing(value):
        return None
    s = str(value).strip().lower()
    if s in SEX_CATEGORIES:
        return s  # type: ignore[return-value]
    return None


def record_from_row(row: Dict[str, Any]) -> Optional[Record]:
    """
    Build a Record from a row keyed by record field names.

    Returns None when the row has no usable outcome; every other field
    degrades to None when it cannot be coerced.
    """
    outcome = _as_outcome(row.get("outcome"))
    if outcome is None:
        return None

    return Record(
        outcome=outcome,
        class_tier=_as_int(row.get("class_tier")),
        sex=_as_sex(row.get("sex")),
        age=_as_float(row.get("age")),
        body_recovered=_as_int(row.get("body_recovered")),
    )


def records_from_rows(rows: Iterable[Dict[str, Any]]) -> Tuple[List[Record], int]:
    """
    Validate rows in source order.
    :return: (records, number of rows dropped for a missing outcome)
    """
    records: List[Record] = []
    dropped = 0
    for row in rows:
        rec = record_from_row(row)
        if rec is None:
            dropped += 1
            continue
        records.append(rec)
    return records, dropped
