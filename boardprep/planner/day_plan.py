"""
Day-plan generator: a full wake-to-sleep schedule for one date.

Exam days follow a fixed sequence around the paper. Every other day lays the
routine anchors (wake, meals, sleep) and fills the free gaps between them with
priority-weighted study sessions.
"""

import logging

from boardprep.models.schema import Block, Exam
from boardprep.models.state import StudyState
from boardprep.planner.gap_filler import fill_gap_with_study
from boardprep.planner.priority import (
    REVISION_DUE_BOOST,
    REVISION_EXAM_BOOST,
    get_subject_priority,
)
from boardprep.planner.queue import build_subject_queue
from boardprep.planner.revision import get_revision_due_chapters
from boardprep.tools.catalog import ExamCatalog, catalog_for_state
from boardprep.tools.timeutil import days_between, min_to_time

logger = logging.getLogger(__name__)

DAY_END = 1440
SLEEP_DURATION = 480
EXAM_DURATION = 180

#(routine field, duration, label, type) laid at their routine times on regular days
FIXED_BLOCKS = [
    ("wake", 30, "Wake Up + Fresh Up + Light Exercise", "break"),
    ("breakfast", 30, "BREAKFAST", "meal"),
    ("lunch", 45, "LUNCH + Rest", "meal"),
    ("snack", 30, "Evening Break / Snack", "meal"),
    ("dinner", 45, "DINNER", "meal"),
]

DINNER_DURATION = 45


class _DayBuilder:
    """Appends contiguous blocks, tracking where the day has got to.

    Every block before sleep is cut off at the routine's sleep time, so an
    overrunning meal is shortened instead of pushing sleep out of the day.
    """

    def __init__(self, start: int, sleep_at: int):
        self.blocks: list[Block] = []
        self.cursor = start
        self.sleep_at = sleep_at

    def add(self, start: int, end: int, label: str, kind: str, subject_key: str | None = None):
        end = min(end, DAY_END if kind == "sleep" else self.sleep_at)
        if end > start:
            self.blocks.append(Block(
                start=min_to_time(start),
                end=min_to_time(end),
                label=label,
                type=kind,
                subject_key=subject_key,
            ))
        self.cursor = max(self.cursor, end)

    def fill_until(self, until: int, label: str, kind: str, subject_key: str | None = None):
        self.add(self.cursor, until, label, kind, subject_key)

    def anchor(self, nominal: int) -> int:
        #an anchor that has already passed starts right after the previous block
        return min(max(nominal, self.cursor), self.sleep_at)

    def sleep(self):
        start = self.anchor(self.sleep_at)
        self.add(start, start + SLEEP_DURATION, "SLEEP", "sleep")


def _exam_day_plan(exam: Exam, state: StudyState, catalog: ExamCatalog, date_string: str) -> list[Block]:
    m = state.routine.minutes()
    day = _DayBuilder(m["wake"], m["sleep"])

    day.add(m["wake"], m["wake"] + 30, "Wake Up + Fresh Up", "break")
    day.fill_until(min(m["wake"] + 90, m["breakfast"]), f"Quick Review — {catalog.label(exam.key)}", "study", exam.key)

    breakfast = day.anchor(m["breakfast"])
    day.fill_until(breakfast, "Get Ready", "break")
    day.add(breakfast, breakfast + 30, "BREAKFAST", "meal")
    day.add(breakfast + 30, breakfast + 60, "Relax + Prepare for Exam", "break")

    exam_start = breakfast + 60
    day.add(exam_start, exam_start + EXAM_DURATION, f"EXAM — {exam.subject}", "study", exam.key)

    #the paper may push lunch later
    lunch = day.anchor(m["lunch"])
    day.fill_until(lunch, "Rest After Exam", "break")
    day.add(lunch, lunch + 45, "LUNCH + Rest", "meal")

    snack = day.anchor(m["snack"])
    day.fill_until(snack, "Rest / Light Activity", "break")
    day.add(snack, snack + 30, "Snack Break", "meal")

    dinner = day.anchor(m["dinner"])
    next_exam = catalog.next_exam_after(date_string)
    if next_exam:
        day.fill_until(dinner, f"Light Study — {catalog.label(next_exam.key)}", "study", next_exam.key)
    else:
        day.fill_until(dinner, "Free Time", "break")
    day.add(dinner, dinner + DINNER_DURATION, "DINNER", "meal")

    sleep = day.anchor(m["sleep"])
    day.fill_until(sleep, "Relax + Early Sleep", "break")
    day.sleep()

    logger.info(f"{date_string}: exam day for {exam.key}, {len(day.blocks)} blocks")
    return day.blocks


def find_revision_exam(date_string: str, catalog: ExamCatalog) -> Exam | None:
    """The exam falling 1-2 days after the date, if any."""
    return next((e for e in catalog.exams if 1 <= days_between(date_string, e.date) <= 2), None)


def compute_priorities(
    date_string: str,
    state: StudyState,
    catalog: ExamCatalog,
    revision_exam: Exam | None = None,
) -> list[tuple[str, float]]:
    """Boosted priority for every catalog subject worth studying, highest first."""
    revision_subjects = {r.subject_key for r in get_revision_due_chapters(date_string, state.subjects)}

    priorities = []
    for key in catalog.subject_keys:
        priority = get_subject_priority(key, date_string, state, catalog)
        if key in revision_subjects:
            priority += REVISION_DUE_BOOST
        if revision_exam and key == revision_exam.key:
            priority += REVISION_EXAM_BOOST
        if priority > 0:
            priorities.append((key, priority))

    priorities.sort(key=lambda kp: kp[1], reverse=True)
    return priorities


def _regular_day_plan(date_string: str, state: StudyState, catalog: ExamCatalog) -> list[Block]:
    m = state.routine.minutes()

    revision_exam = find_revision_exam(date_string, catalog)
    priorities = compute_priorities(date_string, state, catalog, revision_exam)
    queue = build_subject_queue(priorities, revision_exam.key if revision_exam else None)

    light_from = m["dinner"] + DINNER_DURATION
    day = _DayBuilder(m["wake"], m["sleep"])
    gaps = []

    for field, duration, label, kind in sorted(FIXED_BLOCKS, key=lambda fb: m[fb[0]]):
        start = day.anchor(m[field])
        if start > day.cursor:
            gaps.append((day.cursor, start, day.cursor >= light_from))
        day.add(start, start + duration, label, kind)

    sleep = day.anchor(m["sleep"])
    if sleep > day.cursor:
        gaps.append((day.cursor, sleep, day.cursor >= light_from))
    day.sleep()

    #queue position carries across gaps so the rotation never restarts
    revision_due = get_revision_due_chapters(date_string, state.subjects)
    chapter_counters: dict[str, int] = {}
    offset = 0
    for gap_start, gap_end, is_light in gaps:
        offset += fill_gap_with_study(
            day.blocks,
            gap_start,
            gap_end,
            queue,
            offset,
            revision_due,
            state.subjects,
            catalog.labels,
            is_light,
            chapter_counters,
        )

    blocks = sorted(day.blocks, key=lambda b: b.start)
    logger.info(
        f"{date_string}: {len(blocks)} blocks, {offset} study sessions across {len(gaps)} gaps"
        + (f", revision exam {revision_exam.key}" if revision_exam else "")
    )
    return blocks


def generate_day_plan(date_string: str, state: StudyState, catalog: ExamCatalog | None = None) -> list[Block]:
    """Generate the schedule for a date from the state snapshot.

    The result depends only on the date and the snapshot, never on the
    current time.
    """
    catalog = catalog or catalog_for_state(state)

    exam_today = catalog.exam_on(date_string)
    if exam_today:
        return _exam_day_plan(exam_today, state, catalog, date_string)
    return _regular_day_plan(date_string, state, catalog)


def get_day_plan(date_string: str, state: StudyState, catalog: ExamCatalog | None = None) -> list[Block]:
    #a non-empty custom plan fully shadows generation
    custom = state.custom_plans.get(date_string)
    if custom:
        return list(custom)
    return generate_day_plan(date_string, state, catalog)
