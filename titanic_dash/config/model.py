from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class ColumnMapping:
    """
    Source column names for each record field.
    """
    outcome: str = "survived"
    class_tier: str = "pclass"
    sex: str = "sex"
    age: str = "age"
    body_recovered: str = "body"

    def as_dict(self) -> Dict[str, str]:
        """field name -> source column"""
        return {
            "outcome": self.outcome,
            "class_tier": self.class_tier,
            "sex": self.sex,
            "age": self.age,
            "body_recovered": self.body_recovered,
        }


@dataclass(frozen=True)
class DashboardConfig:
    """
    One dashboard tab: the charts it shows and the annotations attached to it.
    """
    id: str
    label: str
    views: List[str] = field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: Dict[str, Any]) -> "DashboardConfig":
        return cls(
            id=str(raw["id"]),
            label=str(raw.get("label", raw["id"])),
            views=[str(v) for v in raw.get("views", [])],
        )


DEFAULT_DASHBOARDS: List[DashboardConfig] = [
    DashboardConfig(
        id="survival",
        label="Survival",
        views=["survival_split", "class_survival", "sex_survival"],
    ),
    DashboardConfig(
        id="demographics",
        label="Demographics",
        views=["age_distribution"],
    ),
    DashboardConfig(
        id="recovery",
        label="Recovery",
        views=["body_recovery"],
    ),
]


@dataclass
class GlobalConfig:
    ui_title: str
    subtitle: str
    data_file: Path
    storage_root: Path
    columns: ColumnMapping = field(default_factory=ColumnMapping)
    dashboards: List[DashboardConfig] = field(default_factory=lambda: list(DEFAULT_DASHBOARDS))
    source_path: Optional[Path] = None

    def dashboard(self, dashboard_id: str) -> Optional[DashboardConfig]:
        return next((d for d in self.dashboards if d.id == dashboard_id), None)
