"""
Derived statistical views over a Dataset snapshot.

Every function here is pure: it reads the snapshot, builds a DataFrame and
returns frozen result objects. Nothing is cached, so calling a function twice
on the same snapshot returns equal values.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

import pandas as pd

from titanic_dash.core.dataset import Dataset
from titanic_dash.core.record import SEX_CATEGORIES

# Rate reported for a category with no records ("no data", not zero)
NO_DATA = math.nan

AGE_BIN_EDGES = [0, 10, 20, 30, 40, 50, 60, 70, 80]
AGE_BIN_LABELS = ["0-10", "11-20", "21-30", "31-40", "41-50", "51-60", "61-70", "71-80"]


# -------------------------------------------------------------------------
# Result types
# -------------------------------------------------------------------------

@dataclass(frozen=True)
class SurvivalSplit:
    survived: int = 0
    not_survived: int = 0

    labels = ("Survived", "Did Not Survive")

    @property
    def values(self) -> List[int]:
        return [self.survived, self.not_survived]

    @property
    def total(self) -> int:
        return self.survived + self.not_survived


@dataclass(frozen=True)
class TierRate:
    tier: int
    rate: float

    @property
    def label(self) -> str:
        return f"Class {self.tier}"


@dataclass(frozen=True, eq=False)
class CategoryRate:
    category: str
    rate: float

    @property
    def label(self) -> str:
        return self.category.capitalize()

    @property
    def has_data(self) -> bool:
        return not math.isnan(self.rate)

    # NaN rates compare equal to each other
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CategoryRate):
            return NotImplemented
        if self.category != other.category:
            return False
        if not self.has_data or not other.has_data:
            return self.has_data == other.has_data
        return self.rate == other.rate

    def __hash__(self) -> int:
        return hash((self.category, self.rate if self.has_data else None))


@dataclass(frozen=True)
class AgeBin:
    label: str
    low: int
    high: int
    survived: int = 0
    died: int = 0

    @property
    def total(self) -> int:
        return self.survived + self.died


@dataclass(frozen=True)
class RecoveryOutcome:
    body_found: int = 0
    body_not_found: int = 0

    labels = ("Body Found", "Body Not Found")

    @property
    def values(self) -> List[int]:
        return [self.body_found, self.body_not_found]


# -------------------------------------------------------------------------
# Views
# -------------------------------------------------------------------------

def survival_split(dataset: Dataset) -> SurvivalSplit:
    """Count of survivors vs non-survivors."""
    if dataset.is_empty:
        return SurvivalSplit()

    df = dataset.to_frame()
    survived = int(df["outcome"].sum())
    return SurvivalSplit(survived=survived, not_survived=len(df) - survived)


def survival_rate_by_class_tier(dataset: Dataset) -> Tuple[TierRate, ...]:
    """
    Survival percentage per ticket class, ascending by class.

    Only classes that occur in the data are returned, so no group is empty.
    """
    if dataset.is_empty:
        return ()

    df = dataset.to_frame().dropna(subset=["class_tier"])
    if df.empty:
        return ()

    grouped = (
        df.groupby("class_tier", sort=True)["outcome"]
        .agg(["sum", "count"])
        .sort_index()
    )
    return tuple(
        TierRate(tier=int(tier), rate=100.0 * int(row["sum"]) / int(row["count"]))
        for tier, row in grouped.iterrows()
    )


def survival_rate_by_sex(dataset: Dataset) -> Tuple[CategoryRate, ...]:
    """
    Survival percentage for 'female' then 'male'.

    Both categories are always present so chart labels stay fixed. A category
    with no records gets NO_DATA (NaN) as its rate.
    """
    if dataset.is_empty:
        return ()

    df = dataset.to_frame()
    out: List[CategoryRate] = []
    for category in SEX_CATEGORIES:
        subset = df.loc[df["sex"] == category, "outcome"]
        total = len(subset)
        if total == 0:
            out.append(CategoryRate(category=category, rate=NO_DATA))
            continue
        out.append(CategoryRate(category=category, rate=100.0 * int(subset.sum()) / total))
    return tuple(out)


def age_binned_outcome(dataset: Dataset) -> Tuple[AgeBin, ...]:
    """
    Survived / died counts in eight ten-year age bins from 0 to 80.

    A record lands in the first bin whose upper edge is >= its age; ages that
    are missing, negative or above 80 are left out.
    """
    if dataset.is_empty:
        return ()

    df = dataset.to_frame()
    binned = pd.cut(
        df["age"],
        bins=AGE_BIN_EDGES,
        labels=AGE_BIN_LABELS,
        right=True,
        include_lowest=True,
    )
    in_range = binned.notna() & df["age"].between(0, 80)
    survived_counts = binned[in_range & df["outcome"]].value_counts()
    died_counts = binned[in_range & ~df["outcome"]].value_counts()

    bins: List[AgeBin] = []
    for i, label in enumerate(AGE_BIN_LABELS):
        low = AGE_BIN_EDGES[i] + (1 if i > 0 else 0)
        bins.append(
            AgeBin(
                label=label,
                low=low,
                high=AGE_BIN_EDGES[i + 1],
                survived=int(survived_counts.get(label, 0)),
                died=int(died_counts.get(label, 0)),
            )
        )
    return tuple(bins)


def recovery_outcome(dataset: Dataset) -> RecoveryOutcome:
    """Among non-survivors: bodies recovered vs not recovered."""
    if dataset.is_empty:
        return RecoveryOutcome()

    df = dataset.to_frame()
    died = df.loc[~df["outcome"]]
    found = int(died["body_recovered"].notna().sum())
    return RecoveryOutcome(body_found=found, body_not_found=len(died) - found)
