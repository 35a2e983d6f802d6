"""
Spaced-repetition revision lookup.
"""

from boardprep.models.schema import Chapter, RevisionDue
from boardprep.tools.timeutil import add_days


def revision_due_date(chapter: Chapter) -> str | None:
    """Date of the chapter's next pending revision, or None if none is pending."""
    if chapter.status != "needs_revision" or not chapter.revision_date or not chapter.revision_intervals:
        return None
    if chapter.revisions_completed >= len(chapter.revision_intervals):
        return None
    return add_days(chapter.revision_date, chapter.revision_intervals[chapter.revisions_completed])


def get_revision_due_chapters(date_string: str, subjects: dict[str, list[Chapter]]) -> list[RevisionDue]:
    #subject insertion order, then chapter order
    due = []
    for subject_key, chapters in subjects.items():
        for idx, chapter in enumerate(chapters or []):
            if revision_due_date(chapter) == date_string:
                due.append(RevisionDue(
                    subject_key=subject_key,
                    chapter_index=idx,
                    chapter_name=chapter.name,
                    interval=chapter.revision_intervals[chapter.revisions_completed],
                ))
    return due
