from __future__ import annotations

import math

from titanic_dash.core import aggregates
from titanic_dash.core.aggregates import AGE_BIN_LABELS, SurvivalSplit, TierRate
from titanic_dash.core.dataset import Dataset
from titanic_dash.core.record import Record


def _dataset(*records: Record) -> Dataset:
    return Dataset.loaded(records)


def _two_passengers() -> Dataset:
    """
    The reference pair:
    - first class woman, 29, survived
    - third class man, 22, died, body 7 recovered
    """
    return _dataset(
        Record(outcome=True, class_tier=1, sex="female", age=29, body_recovered=None),
        Record(outcome=False, class_tier=3, sex="male", age=22, body_recovered=7),
    )


def _mixed() -> Dataset:
    return _dataset(
        Record(outcome=True, class_tier=2, sex="female", age=5),
        Record(outcome=False, class_tier=1, sex="male", age=10),
        Record(outcome=False, class_tier=3, sex="male", age=10.5, body_recovered=12),
        Record(outcome=True, class_tier=3, sex="male", age=0),
        Record(outcome=False, class_tier=2, sex="female", age=80),
        Record(outcome=True, class_tier=1, sex="female", age=None),
        Record(outcome=False, class_tier=3, sex=None, age=81),
        Record(outcome=False, class_tier=None, sex="male", age=-1),
    )


# ---------------------------------------------------------------------------
# Reference scenario
# ---------------------------------------------------------------------------

def test_two_passenger_scenario():
    ds = _two_passengers()

    assert aggregates.survival_split(ds) == SurvivalSplit(survived=1, not_survived=1)
    assert aggregates.survival_rate_by_class_tier(ds) == (
        TierRate(tier=1, rate=100),
        TierRate(tier=3, rate=0),
    )


# ---------------------------------------------------------------------------
# Empty dataset -> neutral shapes
# ---------------------------------------------------------------------------

def test_empty_dataset_gives_neutral_shapes():
    for ds in (Dataset.loading(), Dataset.loaded(())):
        assert aggregates.survival_split(ds) == SurvivalSplit(0, 0)
        assert aggregates.survival_rate_by_class_tier(ds) == ()
        assert aggregates.survival_rate_by_sex(ds) == ()
        assert aggregates.age_binned_outcome(ds) == ()
        assert aggregates.recovery_outcome(ds).values == [0, 0]


# ---------------------------------------------------------------------------
# Survival split
# ---------------------------------------------------------------------------

def test_survival_split_sums_to_record_count():
    ds = _mixed()
    split = aggregates.survival_split(ds)

    assert split.survived == 3
    assert split.not_survived == 5
    assert split.survived + split.not_survived == len(ds)
    assert split.labels == ("Survived", "Did Not Survive")


# ---------------------------------------------------------------------------
# Class tiers
# ---------------------------------------------------------------------------

def test_class_tiers_sorted_ascending_and_only_present():
    ds = _mixed()
    tiers = aggregates.survival_rate_by_class_tier(ds)

    assert [t.tier for t in tiers] == [1, 2, 3]
    rates = {t.tier: t.rate for t in tiers}
    assert rates[1] == 50.0
    assert rates[2] == 50.0
    assert math.isclose(rates[3], 100.0 / 3)
    assert [t.label for t in tiers] == ["Class 1", "Class 2", "Class 3"]


def test_class_tiers_ordering_is_numeric_not_lexicographic():
    ds = _dataset(
        Record(outcome=True, class_tier=10),
        Record(outcome=False, class_tier=2),
        Record(outcome=True, class_tier=1),
    )
    assert [t.tier for t in aggregates.survival_rate_by_class_tier(ds)] == [1, 2, 10]


def test_class_tiers_skip_records_without_a_tier():
    ds = _dataset(Record(outcome=True, class_tier=None))
    assert aggregates.survival_rate_by_class_tier(ds) == ()


# ---------------------------------------------------------------------------
# Sex
# ---------------------------------------------------------------------------

def test_sex_rates_fixed_order():
    ds = _mixed()
    rates = aggregates.survival_rate_by_sex(ds)

    assert [r.category for r in rates] == ["female", "male"]
    assert [r.label for r in rates] == ["Female", "Male"]
    # female: 2 of 3 survived; male: 1 of 4 survived
    assert math.isclose(rates[0].rate, 200.0 / 3)
    assert rates[1].rate == 25.0


def test_sex_category_without_records_is_nan():
    ds = _dataset(Record(outcome=True, sex="male"), Record(outcome=False, sex="male"))
    female, male = aggregates.survival_rate_by_sex(ds)

    assert female.category == "female"
    assert math.isnan(female.rate)
    assert female.has_data is False
    assert male.rate == 50.0


# ---------------------------------------------------------------------------
# Age bins
# ---------------------------------------------------------------------------

def test_age_bins_edges_and_exclusions():
    bins = aggregates.age_binned_outcome(_mixed())

    assert [b.label for b in bins] == AGE_BIN_LABELS
    by_label = {b.label: b for b in bins}

    # 0 and 5 survived, 10 died -> first bin (inclusive upper edge)
    assert (by_label["0-10"].survived, by_label["0-10"].died) == (2, 1)
    # 10.5 falls past the first edge
    assert (by_label["11-20"].survived, by_label["11-20"].died) == (0, 1)
    # 80 is the last included age
    assert (by_label["71-80"].survived, by_label["71-80"].died) == (0, 1)

    # None, 81 and -1 are excluded
    assert sum(b.total for b in bins) == len(_mixed()) - 3


def test_age_bins_total_equals_records_when_all_ages_in_range():
    ds = _two_passengers()
    bins = aggregates.age_binned_outcome(ds)
    assert sum(b.total for b in bins) == len(ds)


def test_age_bins_when_no_ages_known():
    ds = _dataset(Record(outcome=True), Record(outcome=False))
    bins = aggregates.age_binned_outcome(ds)

    assert len(bins) == 8
    assert all(b.total == 0 for b in bins)


def test_age_bin_bounds():
    bins = aggregates.age_binned_outcome(_two_passengers())
    assert [(b.low, b.high) for b in bins] == [
        (0, 10), (11, 20), (21, 30), (31, 40), (41, 50), (51, 60), (61, 70), (71, 80),
    ]


# ---------------------------------------------------------------------------
# Recovery
# ---------------------------------------------------------------------------

def test_recovery_counts_only_non_survivors():
    ds = _dataset(
        Record(outcome=False, body_recovered=12),
        Record(outcome=False, body_recovered=None),
        Record(outcome=False, body_recovered=None),
        Record(outcome=True, body_recovered=99),
    )
    outcome = aggregates.recovery_outcome(ds)

    assert outcome.body_found == 1
    assert outcome.body_not_found == 2
    assert outcome.labels == ("Body Found", "Body Not Found")


# ---------------------------------------------------------------------------
# Idempotence
# ---------------------------------------------------------------------------

def test_views_are_idempotent():
    ds = _dataset(
        Record(outcome=True, class_tier=1, sex="male", age=40),
        Record(outcome=False, class_tier=2, sex="male", age=None, body_recovered=3),
    )
    for fn in (
        aggregates.survival_split,
        aggregates.survival_rate_by_class_tier,
        aggregates.survival_rate_by_sex,
        aggregates.age_binned_outcome,
        aggregates.recovery_outcome,
    ):
        assert fn(ds) == fn(ds)
