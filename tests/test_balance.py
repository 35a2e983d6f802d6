"""Tests for boardprep.planner.balance."""
from boardprep.models.schema import Block, Chapter
from boardprep.models.state import StudyState
from boardprep.planner.balance import analyze_study_balance

STATE = StudyState(subjects={
    "physics": [Chapter(name="Force"), Chapter(name="Sound"), Chapter(name="Spectrum", status="completed")],
    "chemistry": [Chapter(name="Bonding")],
})


def _study(start: str, end: str, subject: str) -> Block:
    return Block(start=start, end=end, label=subject, type="study", subject_key=subject)


def test_no_study_blocks_returns_none() -> None:
    blocks = [
        Block(start="06:00", end="06:30", label="Wake", type="break"),
        Block(start="08:00", end="08:30", label="BREAKFAST", type="meal"),
        Block(start="22:30", end="24:00", label="SLEEP", type="sleep"),
    ]
    assert analyze_study_balance(blocks, STATE, reference_date="2026-03-05") is None
    assert analyze_study_balance([], STATE, reference_date="2026-03-05") is None


def test_dominant_subject_warning() -> None:
    blocks = [_study("08:00", "10:00", "physics"), _study("10:00", "10:30", "chemistry")]
    warnings = analyze_study_balance(blocks, STATE, reference_date="2026-01-10")
    assert warnings == ["You're spending 80% of study time on Physics. Consider diversifying."]


def test_three_subjects_are_balanced_enough() -> None:
    blocks = [
        _study("08:00", "11:00", "physics"),
        _study("11:00", "11:30", "chemistry"),
        _study("11:30", "12:00", "biology"),
    ]
    assert analyze_study_balance(blocks, STATE, reference_date="2026-01-10") is None


def test_neglected_near_exam_warning() -> None:
    blocks = [_study("08:00", "09:00", "chemistry")]
    warnings = analyze_study_balance(blocks, STATE, reference_date="2026-03-05")

    assert "Physics exam in 4 days with 2 chapters left, but it's not in today's plan!" in warnings
    assert "You're spending 100% of study time on Chemistry. Consider diversifying." in warnings


def test_exam_more_than_a_week_out_is_not_flagged() -> None:
    blocks = [_study("08:00", "09:00", "chemistry"), _study("09:00", "10:00", "biology")]
    assert analyze_study_balance(blocks, STATE, reference_date="2026-03-01") is None


def test_singular_chapter_wording() -> None:
    blocks = [_study("08:00", "09:00", "physics"), _study("09:00", "10:00", "biology")]
    warnings = analyze_study_balance(blocks, STATE, reference_date="2026-03-06")
    assert warnings == ["Chemistry exam in 5 days with 1 chapter left, but it's not in today's plan!"]


def test_unreadable_block_times_are_skipped() -> None:
    blocks = [_study("08:00", "late", "physics"), _study("09:00", "10:00", "chemistry"), _study("10:00", "11:00", "biology")]
    assert analyze_study_balance(blocks, STATE, reference_date="2026-01-10") is None
