"""
Study-balance checks for a day plan.
"""

import logging

from boardprep.models.schema import Block
from boardprep.models.state import StudyState
from boardprep.tools.catalog import ExamCatalog, catalog_for_state
from boardprep.tools.timeutil import FormatError, days_between, today

logger = logging.getLogger(__name__)

DOMINANT_SHARE = 0.5
MIN_DISTINCT_SUBJECTS = 3
UPCOMING_WINDOW_DAYS = 10
NEGLECT_WINDOW_DAYS = 7


def study_minutes_by_subject(blocks: list[Block]) -> dict[str, int]:
    minutes: dict[str, int] = {}
    for block in blocks:
        if block.type != "study" or not block.subject_key:
            continue
        try:
            duration = block.duration_minutes
        except FormatError:
            logger.debug(f"Skipping block with unreadable times: {block.start}-{block.end}")
            continue
        minutes[block.subject_key] = minutes.get(block.subject_key, 0) + duration
    return minutes


def analyze_study_balance(
    blocks: list[Block],
    state: StudyState,
    reference_date: str | None = None,
    catalog: ExamCatalog | None = None,
) -> list[str] | None:
    """Warnings about a lopsided plan or near exams left out of it.

    Returns None when the plan has no study time or nothing to warn about.
    """
    subject_minutes = study_minutes_by_subject(blocks)
    total = sum(subject_minutes.values())
    if total <= 0:
        return None

    catalog = catalog or catalog_for_state(state)
    warnings = []

    for key, minutes in subject_minutes.items():
        share = minutes / total
        if share > DOMINANT_SHARE and len(subject_minutes) < MIN_DISTINCT_SUBJECTS:
            warnings.append(
                f"You're spending {int(share * 100 + 0.5)}% of study time on {catalog.label(key)}. "
                f"Consider diversifying."
            )

    td = reference_date or today()
    for exam in catalog.exams:
        days = days_between(td, exam.date)
        if not 0 < days <= UPCOMING_WINDOW_DAYS:
            continue
        incomplete = sum(1 for c in state.subjects.get(exam.key) or [] if not c.is_complete)
        if incomplete > 0 and not subject_minutes.get(exam.key) and days <= NEGLECT_WINDOW_DAYS:
            warnings.append(
                f"{catalog.label(exam.key)} exam in {days} days with {incomplete} "
                f"chapter{'s' if incomplete > 1 else ''} left, but it's not in today's plan!"
            )

    return warnings or None
