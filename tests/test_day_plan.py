"""Tests for boardprep.planner.day_plan."""
import pytest

from boardprep.models.schema import Block, Chapter, Routine
from boardprep.models.state import StudyState
from boardprep.planner.day_plan import (
    compute_priorities,
    find_revision_exam,
    generate_day_plan,
    get_day_plan,
)
from boardprep.planner.queue import build_subject_queue
from boardprep.tools.catalog import default_subjects, get_catalog
from boardprep.tools.timeutil import time_to_min


def _default_state(**kwargs) -> StudyState:
    return StudyState(subjects=default_subjects(), **kwargs)


def _assert_contiguous(blocks: list[Block], start: str, end: str) -> None:
    assert blocks[0].start == start
    assert blocks[-1].end == end
    for prev, block in zip(blocks, blocks[1:]):
        assert block.start == prev.end, f"{prev} -> {block}"
    for block in blocks:
        assert time_to_min(block.end) > time_to_min(block.start), block


def _by_label(blocks: list[Block], label: str) -> Block:
    return next(b for b in blocks if b.label == label)


@pytest.mark.parametrize("date", ["2026-01-10", "2026-02-18", "2026-03-07", "2026-03-19", "2026-05-01"])
def test_regular_day_covers_wake_to_sleep(date: str) -> None:
    blocks = generate_day_plan(date, _default_state())

    _assert_contiguous(blocks, "06:00", "24:00")
    assert blocks[-1].type == "sleep"
    assert blocks[-1].start == "22:30"


@pytest.mark.parametrize("routine", [
    {"wake": "05:30", "breakfast": "07:00", "lunch": "12:30", "snack": "16:30", "dinner": "19:45", "sleep": "21:45"},
    {"wake": "07:10", "breakfast": "07:25", "lunch": "11:55", "snack": "15:05", "dinner": "19:00", "sleep": "23:50"},
    {"wake": "06:00", "breakfast": "06:10", "lunch": "06:20", "snack": "17:00", "dinner": "20:30", "sleep": "22:30"},
])
def test_coverage_holds_for_other_routines(routine: dict) -> None:
    state = _default_state(routine=Routine(**routine))
    for date in ("2026-01-10", "2026-03-09", "2026-03-23"):
        blocks = generate_day_plan(date, state)
        _assert_contiguous(blocks, routine["wake"], "24:00")


def test_fixed_blocks_at_routine_times() -> None:
    blocks = generate_day_plan("2026-01-10", _default_state())

    assert _by_label(blocks, "Wake Up + Fresh Up + Light Exercise").start == "06:00"
    assert _by_label(blocks, "BREAKFAST").start == "08:00"
    assert _by_label(blocks, "LUNCH + Rest").start == "13:00"
    assert _by_label(blocks, "Evening Break / Snack").start == "17:00"
    dinner = _by_label(blocks, "DINNER")
    assert (dinner.start, dinner.end) == ("20:30", "21:15")


def test_overrunning_block_pushes_next_anchor() -> None:
    state = _default_state(routine=Routine(breakfast="06:10"))
    blocks = generate_day_plan("2026-01-10", state)

    breakfast = _by_label(blocks, "BREAKFAST")
    assert (breakfast.start, breakfast.end) == ("06:30", "07:00")


def test_post_dinner_sessions_are_light() -> None:
    blocks = generate_day_plan("2026-01-10", _default_state())

    evening = [b for b in blocks if b.type == "study" and b.start >= "21:15"]
    assert evening
    assert all(b.label.startswith("Light Revision — ") for b in evening)
    assert all(time_to_min(b.end) - time_to_min(b.start) <= 50 for b in evening)

    daytime = [b for b in blocks if b.type == "study" and b.start < "21:15"]
    assert not any(b.label.startswith("Light Revision") for b in daytime)


def test_rotation_spans_all_qualifying_subjects() -> None:
    blocks = generate_day_plan("2026-01-10", _default_state())
    studied = {b.subject_key for b in blocks if b.type == "study"}
    assert {"physics", "chemistry", "biology", "geography"} <= studied


def test_no_study_when_nothing_qualifies() -> None:
    blocks = generate_day_plan("2026-05-01", _default_state())
    assert not [b for b in blocks if b.type == "study"]
    assert any(b.label == "Free Time" for b in blocks)


def test_generation_is_deterministic() -> None:
    state = _default_state(subject_ratings={"physics": "weak", "biology": "strong"})
    assert generate_day_plan("2026-02-01", state) == generate_day_plan("2026-02-01", state)


def test_due_revision_appears_in_plan() -> None:
    subjects = default_subjects()
    subjects["physics"].append(Chapter(
        name="Optics",
        status="needs_revision",
        revision_date="2026-01-08",
        revision_intervals=[2, 5],
    ))
    blocks = generate_day_plan("2026-01-10", StudyState(subjects=subjects))

    revision = [b for b in blocks if b.label == "Physics — Optics (Revision)"]
    assert len(revision) == 1
    assert revision[0].subject_key == "physics"


def test_revision_day_favours_upcoming_exam() -> None:
    state = _default_state()
    catalog = get_catalog()

    revision_exam = find_revision_exam("2026-03-07", catalog)
    assert revision_exam.key == "physics"

    priorities = compute_priorities("2026-03-07", state, catalog, revision_exam)
    assert priorities[0][0] == "physics"

    queue = build_subject_queue(priorities, revision_exam.key)
    assert queue.count("physics") == max(queue.count(key) for key in set(queue))

    blocks = generate_day_plan("2026-03-07", state)
    first_study = next(b for b in blocks if b.type == "study")
    assert first_study.subject_key == "physics"


def test_exam_day_sequence() -> None:
    blocks = generate_day_plan("2026-03-09", _default_state())

    assert [(b.start, b.end, b.label) for b in blocks] == [
        ("06:00", "06:30", "Wake Up + Fresh Up"),
        ("06:30", "07:30", "Quick Review — Physics"),
        ("07:30", "08:00", "Get Ready"),
        ("08:00", "08:30", "BREAKFAST"),
        ("08:30", "09:00", "Relax + Prepare for Exam"),
        ("09:00", "12:00", "EXAM — Physics"),
        ("12:00", "13:00", "Rest After Exam"),
        ("13:00", "13:45", "LUNCH + Rest"),
        ("13:45", "17:00", "Rest / Light Activity"),
        ("17:00", "17:30", "Snack Break"),
        ("17:30", "20:30", "Light Study — Chemistry"),
        ("20:30", "21:15", "DINNER"),
        ("21:15", "22:30", "Relax + Early Sleep"),
        ("22:30", "24:00", "SLEEP"),
    ]
    exam = _by_label(blocks, "EXAM — Physics")
    assert exam.subject_key == "physics"
    assert time_to_min(exam.end) - time_to_min(exam.start) == 180


def test_exam_starts_an_hour_after_breakfast() -> None:
    state = _default_state(routine=Routine(breakfast="07:15"))
    exam = next(b for b in generate_day_plan("2026-03-02", state) if b.label.startswith("EXAM"))
    assert (exam.start, exam.end) == ("08:15", "11:15")


def test_exam_pushes_lunch_later() -> None:
    state = _default_state(routine=Routine(breakfast="10:00", lunch="12:30"))
    blocks = generate_day_plan("2026-03-09", state)

    exam = _by_label(blocks, "EXAM — Physics")
    lunch = _by_label(blocks, "LUNCH + Rest")
    assert (exam.start, exam.end) == ("11:00", "14:00")
    assert (lunch.start, lunch.end) == ("14:00", "14:45")
    _assert_contiguous(blocks, "06:00", "24:00")


def test_late_dinner_is_cut_at_sleep() -> None:
    state = _default_state(routine=Routine(dinner="23:30", sleep="23:50"))
    blocks = generate_day_plan("2026-01-10", state)

    _assert_contiguous(blocks, "06:00", "24:00")
    assert [(b.start, b.end, b.label) for b in blocks[-2:]] == [
        ("23:30", "23:50", "DINNER"),
        ("23:50", "24:00", "SLEEP"),
    ]


def test_chained_late_anchors_still_end_in_sleep() -> None:
    state = _default_state(routine=Routine(lunch="22:00", snack="22:05", dinner="22:10", sleep="23:00"))
    blocks = generate_day_plan("2026-01-10", state)

    _assert_contiguous(blocks, "06:00", "24:00")
    assert (blocks[-1].start, blocks[-1].end, blocks[-1].type) == ("23:00", "24:00", "sleep")
    assert all(time_to_min(b.end) <= time_to_min("23:00") for b in blocks[:-1])


def test_exam_day_late_dinner_is_cut_at_sleep() -> None:
    state = _default_state(routine=Routine(dinner="23:30", sleep="23:50"))
    blocks = generate_day_plan("2026-03-09", state)

    _assert_contiguous(blocks, "06:00", "24:00")
    assert [(b.start, b.end, b.label) for b in blocks[-3:]] == [
        ("17:30", "23:30", "Light Study — Chemistry"),
        ("23:30", "23:50", "DINNER"),
        ("23:50", "24:00", "SLEEP"),
    ]


def test_last_exam_day_has_free_evening() -> None:
    blocks = generate_day_plan("2026-03-23", _default_state())

    assert _by_label(blocks, "EXAM — Computer Application").start == "09:00"
    free = _by_label(blocks, "Free Time")
    assert (free.start, free.end, free.type) == ("17:30", "20:30", "break")
    assert not any(b.label.startswith("Light Study") for b in blocks)


def test_custom_plan_shadows_generation() -> None:
    custom = [
        Block(start="09:00", end="10:00", label="Mock paper", type="study", subject_key="math"),
        Block(start="10:00", end="10:15", label="Tea", type="break"),
    ]
    state = StudyState(subjects={}, custom_plans={"2026-03-01": custom})

    assert get_day_plan("2026-03-01", state) == custom


def test_empty_custom_plan_falls_back_to_generation() -> None:
    state = _default_state(custom_plans={"2026-01-10": []})
    assert get_day_plan("2026-01-10", state) == generate_day_plan("2026-01-10", state)
