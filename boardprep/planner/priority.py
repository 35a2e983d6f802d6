"""
Subject priority scoring.

A priority is a relative urgency score for one subject on one date, built from
exam proximity, self-rated confidence, chapter backlog and the difficulty of
what is left. Only comparisons between scores are meaningful.
"""

from boardprep.models.state import StudyState
from boardprep.tools.catalog import ExamCatalog, catalog_for_state
from boardprep.tools.timeutil import days_between

WEAKNESS = {"weak": 1.0, "medium": 0.5, "strong": 0.2}

WEIGHT_WEAKNESS = 0.30
WEIGHT_URGENCY = 0.35
WEIGHT_CHAPTER_LOAD = 0.20
WEIGHT_DIFFICULTY = 0.15

#subjects without recorded chapters stay minimally visible
EMPTY_SUBJECT_PRIORITY = 0.1

REVISION_DUE_BOOST = 0.3
REVISION_EXAM_BOOST = 0.4


def urgency(days_until: int) -> float:
    #saturates within 10 days of the exam
    return min(1.0, 10 / max(days_until, 1))


def get_subject_priority(
    subject_key: str,
    target_date: str,
    state: StudyState,
    catalog: ExamCatalog | None = None,
) -> float:
    catalog = catalog or catalog_for_state(state)

    exam = catalog.exam_for(subject_key)
    if exam is None:
        return 0.0

    days_until = days_between(target_date, exam.date)
    if days_until < 0:
        return 0.0

    chapters = state.subjects.get(subject_key) or []
    if not chapters:
        return EMPTY_SUBJECT_PRIORITY

    incomplete = [c for c in chapters if not c.is_complete]
    if not incomplete:
        return 0.0

    weakness = WEAKNESS[state.subject_ratings.get(subject_key, "medium")]
    chapter_load = len(incomplete) / len(chapters)
    difficulty = sum(c.difficulty for c in incomplete) / len(incomplete) / 5

    return (
        WEIGHT_WEAKNESS * weakness
        + WEIGHT_URGENCY * urgency(days_until)
        + WEIGHT_CHAPTER_LOAD * chapter_load
        + WEIGHT_DIFFICULTY * difficulty
    )
