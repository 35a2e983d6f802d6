"""
Schema definitions for data models.

All models are JSON-serializable. Field names are snake_case in Python and
camelCase on the wire (the persistence collaborator stores e.g.
"revisionDate", "subjectKey"); both spellings are accepted on input.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from boardprep.tools.timeutil import parse_date, time_to_min

ChapterStatus = Literal["not_started", "in_progress", "completed", "needs_revision"]
BlockType = Literal["study", "meal", "break", "sleep"]
Rating = Literal["weak", "medium", "strong"]

DEFAULT_ROUTINE = {
    "wake": "06:00",
    "breakfast": "08:00",
    "lunch": "13:00",
    "snack": "17:00",
    "dinner": "20:30",
    "sleep": "22:30",
}


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Chapter(CamelModel):
    """A syllabus unit tracked through its status lifecycle."""
    name: str
    status: ChapterStatus = "not_started"
    difficulty: int = Field(default=3, ge=1, le=5)
    revision_date: Optional[str] = None
    revision_intervals: Optional[list[int]] = None
    revisions_completed: int = Field(default=0, ge=0)

    @field_validator("revision_date")
    @classmethod
    def _check_revision_date(cls, value: Optional[str]) -> Optional[str]:
        if value:
            parse_date(value)
        return value or None

    @model_validator(mode="after")
    def _check_revisions(self) -> "Chapter":
        if self.revision_intervals is not None and self.revisions_completed > len(self.revision_intervals):
            raise ValueError("revisionsCompleted exceeds the number of revision intervals")
        return self

    @property
    def is_complete(self) -> bool:
        return self.status == "completed"


class Exam(CamelModel):
    model_config = ConfigDict(frozen=True)

    date: str
    subject: str  #display name, e.g. "English Language Paper 1"
    key: str
    duration: str


class Routine(CamelModel):
    """Daily anchors. Blank or missing fields take the default time."""
    wake: str = DEFAULT_ROUTINE["wake"]
    breakfast: str = DEFAULT_ROUTINE["breakfast"]
    lunch: str = DEFAULT_ROUTINE["lunch"]
    snack: str = DEFAULT_ROUTINE["snack"]
    dinner: str = DEFAULT_ROUTINE["dinner"]
    sleep: str = DEFAULT_ROUTINE["sleep"]

    @field_validator("wake", "breakfast", "lunch", "snack", "dinner", "sleep", mode="before")
    @classmethod
    def _default_blank(cls, value, info):
        if value is None or (isinstance(value, str) and not value.strip()):
            return DEFAULT_ROUTINE[info.field_name]
        return value

    @field_validator("wake", "breakfast", "lunch", "snack", "dinner", "sleep")
    @classmethod
    def _check_time(cls, value: str) -> str:
        time_to_min(value)
        return value.strip()

    @model_validator(mode="after")
    def _check_order(self):
        #anchors run wake -> breakfast -> lunch -> snack -> dinner -> sleep within one day
        m = self.minutes()
        names = list(DEFAULT_ROUTINE)
        for earlier, later in zip(names, names[1:]):
            if m[earlier] >= m[later]:
                raise ValueError(f"Routine {later} ({getattr(self, later)}) must be after {earlier} ({getattr(self, earlier)})")
        if m["sleep"] >= 24 * 60:
            raise ValueError(f"Routine sleep ({self.sleep}) must be before midnight")
        return self

    def minutes(self) -> dict[str, int]:
        return {name: time_to_min(getattr(self, name)) for name in DEFAULT_ROUTINE}


class Block(CamelModel):
    start: str
    end: str
    label: str
    type: BlockType
    subject_key: Optional[str] = None

    @property
    def duration_minutes(self) -> int:
        return time_to_min(self.end) - time_to_min(self.start)


class StudyLogEntry(CamelModel):
    hours: float = 0.0
    sessions: int = 0


class TimerSession(CamelModel):
    date: str
    subject: str
    chapter: Optional[str] = None
    minutes: int = 0


# one per chapter due for spaced-repetition review on a given date
class RevisionDue(CamelModel):
    subject_key: str
    chapter_index: int
    chapter_name: str
    interval: int


# parsed [PLAN_CHANGE] directive from a chat reply
class PlanChange(CamelModel):
    action: Literal["add", "remove", "replace"]
    start: str
    end: str
    subject: Optional[str] = None
    label: str = "Study block"
