"""
Board exam catalog: exam dates, subject labels and default chapter lists.

The catalog depends on the student's second-language and elective choice;
everything else is shared.
"""

import logging

from pydantic import BaseModel

from boardprep.config import settings
from boardprep.models.schema import Chapter, Exam

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when an exam catalog is inconsistent."""


#(date, exam display name, key, duration) -- language/elective slots filled per student
_CORE_EXAMS = [
    ("2026-02-17", "English Language Paper 1", "english_lang", "2hrs"),
    ("2026-02-20", "English Literature Paper 2", "english_lit", "2hrs"),
    ("2026-03-02", "Mathematics", "math", "3hrs"),
    ("2026-03-06", None, "<language>", "3hrs"),
    ("2026-03-09", "Physics", "physics", "2hrs"),
    ("2026-03-11", "Chemistry", "chemistry", "2hrs"),
    ("2026-03-13", "Biology", "biology", "2hrs"),
    ("2026-03-16", "History & Civics", "history", "2hrs"),
    ("2026-03-18", "Geography", "geography", "2hrs"),
    ("2026-03-23", None, "<elective>", "2hrs"),
]

LANGUAGES = {
    "kannada": "Kannada",
    "hindi": "Hindi",
    "french": "French",
}

ELECTIVES = {
    "computer": "Computer Application",
    "economics": "Economic Applications",
    "physical_education": "Physical Education",
}

SUBJECT_LABELS = {
    "english_lang": "English Language",
    "english_lit": "English Literature",
    "math": "Mathematics",
    "physics": "Physics",
    "chemistry": "Chemistry",
    "biology": "Biology",
    "history": "History & Civics",
    "geography": "Geography",
    **LANGUAGES,
    **ELECTIVES,
}


def _chapters(*entries: tuple[str, int]) -> list[dict]:
    return [{"name": name, "status": "not_started", "difficulty": difficulty} for name, difficulty in entries]


DEFAULT_CHAPTERS = {
    "physics": _chapters(
        ("Force", 3),
        ("Work, Power & Energy", 3),
        ("Machines", 3),
        ("Refraction of Light at Plane Surfaces", 4),
        ("Refraction Through a Lens", 4),
        ("Spectrum", 2),
        ("Sound", 3),
        ("Current Electricity", 4),
        ("Electrical Power and Household Circuits", 3),
        ("Magnetic Effects of Current", 3),
        ("Calorimetry", 3),
        ("Radioactivity and Nuclear Energy", 3),
    ),
    "chemistry": _chapters(
        ("The Periodic Table", 3),
        ("Chemical Bonding", 4),
        ("Acids, Bases and Salts", 3),
        ("Analytical Chemistry", 3),
        ("Electrolysis", 4),
        ("Electro Metallurgy", 3),
        ("Study of Compounds - HCl", 3),
        ("Study of Compounds - NH3", 3),
        ("Study of Compounds - HNO3", 3),
        ("Study of Compounds - H2SO4", 3),
        ("Organic Chemistry", 4),
    ),
    "biology": _chapters(
        ("Structure of Chromosomes", 3),
        ("Genetics & Cell Division", 4),
        ("Photosynthesis", 3),
        ("Transpiration", 3),
        ("Chemical Coordination in Plants", 3),
        ("Circulatory System", 4),
        ("Excretory System", 3),
        ("Nervous System", 4),
        ("Endocrine System", 3),
        ("Reproductive System", 3),
        ("Health & Hygiene", 2),
        ("Pollution", 2),
        ("Population", 2),
        ("Human Evolution", 3),
    ),
    "geography": _chapters(
        ("Climate", 3),
        ("Soil", 2),
        ("Natural Vegetation", 3),
        ("Water Resources", 3),
        ("Transport", 2),
        ("Agriculture Unit 1 - Types & Major Crops", 3),
        ("Agriculture Unit 2 - Climatic & Soil Conditions", 3),
        ("Agriculture Unit 3 - Tools, Techniques, Changes", 2),
        ("Agriculture Unit 4 - Problems & Government Measures", 2),
        ("Industries - Types, Examples, Factors", 3),
        ("Mineral Resources", 3),
        ("Conventional Energy", 2),
        ("Non-Conventional Energy", 2),
    ),
}


class ExamCatalog(BaseModel):
    """Exams and display labels for one language/elective selection."""
    exams: list[Exam]
    labels: dict[str, str]

    def check(self) -> "ExamCatalog":
        """Reject duplicate exam keys and exams without a label."""
        keys = [exam.key for exam in self.exams]
        duplicates = sorted({k for k in keys if keys.count(k) > 1})
        if duplicates:
            raise CatalogError(f"Duplicate exam keys in catalog: {', '.join(duplicates)}")
        missing = [k for k in keys if k not in self.labels]
        if missing:
            raise CatalogError(f"No label for exam keys: {', '.join(missing)}")
        return self

    def label(self, key: str) -> str:
        #missing labels fall back to the raw key
        return self.labels.get(key, key)

    def exam_for(self, key: str) -> Exam | None:
        return next((exam for exam in self.exams if exam.key == key), None)

    def exam_on(self, date: str) -> Exam | None:
        return next((exam for exam in self.exams if exam.date == date), None)

    def next_exam_after(self, date: str) -> Exam | None:
        later = [exam for exam in self.exams if exam.date > date]
        return min(later, key=lambda exam: exam.date) if later else None

    @property
    def subject_keys(self) -> list[str]:
        return list(self.labels)


def _resolve(choice: str | None, options: dict[str, str], default: str, kind: str) -> str:
    if choice in options:
        return choice
    logger.warning(f"Unknown {kind} '{choice}', falling back to '{default}'")
    return default


def get_catalog(language: str | None = None, elective: str | None = None) -> ExamCatalog:
    """Build the exam catalog for a language/elective selection.

    Unknown selections are logged and replaced by the configured defaults.
    """
    language = _resolve(language or settings.default_language, LANGUAGES, "kannada", "language")
    elective = _resolve(elective or settings.default_elective, ELECTIVES, "computer", "elective")

    exams = []
    labels = {}
    for date, subject, key, duration in _CORE_EXAMS:
        if key == "<language>":
            key, subject = language, LANGUAGES[language]
        elif key == "<elective>":
            key, subject = elective, ELECTIVES[elective]
        exams.append(Exam(date=date, subject=subject, key=key, duration=duration))
        labels[key] = SUBJECT_LABELS[key]

    return ExamCatalog(exams=exams, labels=labels).check()


def catalog_for_state(state) -> ExamCatalog:
    return get_catalog(state.selected_language, state.selected_elective)


def default_subjects(language: str | None = None, elective: str | None = None) -> dict[str, list[Chapter]]:
    """Fresh chapter lists for every subject in the catalog."""
    catalog = get_catalog(language, elective)
    return {
        key: [Chapter(**chapter) for chapter in DEFAULT_CHAPTERS.get(key, [])]
        for key in catalog.subject_keys
    }
