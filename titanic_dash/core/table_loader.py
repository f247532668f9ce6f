from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

import numpy as np
import pandas as pd

from titanic_dash.config.model import ColumnMapping
from titanic_dash.core.exceptions import TableLoadError

logger = logging.getLogger(__name__)


class TableSource(Protocol):
    """
    Anything that can produce the raw rows for the aggregator.

    fetch() returns rows keyed by record field names ("outcome", "class_tier",
    "sex", "age", "body_recovered") in source order, or raises on failure.
    """

    def fetch(self) -> List[Dict[str, Any]]:
        ...


class CsvTableSource:
    """
    Reads a CSV file with a header row.

    Scalars are type-inferred by pandas; empty cells come back as None.
    Source columns are renamed to record fields via the ColumnMapping;
    columns the mapping does not mention are dropped.
    """

    def __init__(self, path: Path | str, columns: Optional[ColumnMapping] = None):
        self.path = Path(path)
        self.columns = columns or ColumnMapping()

    def __repr__(self) -> str:
        return f"CsvTableSource({str(self.path)!r})"

    def fetch(self) -> List[Dict[str, Any]]:
        if not self.path.is_file():
            raise TableLoadError(f"CSV file not found at {self.path}")

        try:
            df = pd.read_csv(self.path)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError, OSError) as e:
            raise TableLoadError(f"Failed to parse {self.path}: {e}") from e

        rename = {src: field for field, src in self.columns.as_dict().items()}
        missing = [src for src in rename if src not in df.columns]
        if missing:
            logger.warning(
                "Source columns missing from CSV; values will be treated as absent",
                extra={"path": str(self.path), "missing_columns": missing},
            )

        present = [src for src in rename if src in df.columns]
        df = df[present].rename(columns=rename)

        # NaN -> None so downstream validation sees "absent"
        df = df.astype(object).where(pd.notna(df), None)
        rows = df.to_dict(orient="records")

        logger.info(
            "CSV source read",
            extra={"path": str(self.path), "n_rows": len(rows), "columns": list(df.columns)},
        )
        return [{k: _to_python(v) for k, v in row.items()} for row in rows]


def _to_python(value: Any) -> Any:
    if isinstance(value, np.generic):
        return value.item()
    return value
