from __future__ import annotations

from titanic_dash.core.annotation import Annotation, AnnotationIdGenerator, annotation_or_none


def _frozen_clock(value_ns: int):
    return lambda: value_ns


def test_ids_within_one_tick_do_not_collide():
    gen = AnnotationIdGenerator(clock=_frozen_clock(1_700_000_000_000_000_000))

    ids = [gen.next_id() for _ in range(5)]

    assert len(set(ids)) == 5
    assert [int(i) for i in ids] == sorted(int(i) for i in ids)


def test_ids_are_derived_from_clock_microseconds():
    gen = AnnotationIdGenerator(clock=_frozen_clock(1_700_000_000_123_456_789))
    assert gen.next_id() == "1700000000123456"


def test_ids_stay_increasing_when_clock_steps_back():
    ticks = iter([2_000_000, 1_000_000])
    gen = AnnotationIdGenerator(clock=lambda: next(ticks))

    first = int(gen.next_id())
    second = int(gen.next_id())

    assert second > first


def test_seed_resumes_above_existing_ids():
    gen = AnnotationIdGenerator(clock=_frozen_clock(1_000))
    gen.seed(["5", "not-a-number", "42"])

    assert gen.next_id() == "43"


def test_new_annotation_starts_viewing_with_mirrored_draft():
    a = Annotation.create(annotation_id="1", dashboard_id="survival", text="hello")

    assert a.is_editing is False
    assert a.draft_text == "hello"
    assert a.created_at


def test_from_dict_restores_invariant_when_not_editing():
    a = Annotation.from_dict(
        {
            "id": "1",
            "dashboard_id": "survival",
            "text": "saved",
            "is_editing": False,
            "draft_text": "stale",
        }
    )
    assert a.draft_text == "saved"


def test_from_dict_keeps_draft_while_editing():
    a = Annotation.from_dict(
        {"id": "1", "dashboard_id": "d", "text": "saved", "is_editing": True, "draft_text": "wip"}
    )
    assert a.draft_text == "wip"


def test_annotation_or_none_rejects_bad_items():
    assert annotation_or_none(None) is None
    assert annotation_or_none("oops") is None
    assert annotation_or_none({"text": "no id"}) is None
