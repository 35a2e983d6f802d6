"""
State snapshot read by the planner.

Supplied and stored by the persistence collaborator; the planner only reads it.
"""

from pydantic import field_validator

from boardprep.models.schema import (
    Block,
    CamelModel,
    Chapter,
    Rating,
    Routine,
    StudyLogEntry,
    TimerSession,
)


class StudyState(CamelModel):
    subjects: dict[str, list[Chapter]] = {}
    subject_ratings: dict[str, Rating] = {}
    routine: Routine = Routine()
    custom_plans: dict[str, list[Block]] = {}
    study_log: dict[str, StudyLogEntry] = {}
    timer_sessions: list[TimerSession] = []

    #language / elective selectors resolve the exam catalog
    selected_language: str = "kannada"
    selected_elective: str = "computer"

    #profile fields, only used for the coach context
    name: str = "Student"
    target_percent: int = 90
    study_hours: float = 8.0
    prep_level: str = "somewhat"
    streak: int = 0

    @field_validator("routine", mode="before")
    @classmethod
    def _default_routine(cls, value):
        return {} if value is None else value
