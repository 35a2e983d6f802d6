"""
Context and prompts for the chat coach.

The chat transport itself lives outside this package; these builders only
produce the text it is primed with, including the plan-change directive
format that `boardprep.tools.plan_changes` parses back.
"""

from boardprep.models.state import StudyState
from boardprep.tools.catalog import ExamCatalog, catalog_for_state
from boardprep.tools.timeutil import add_days, days_between, today

RECENT_DAYS = 7

PLAN_CHANGE_FORMAT = """[PLAN_CHANGE]
action: add|remove|replace
start: HH:MM
end: HH:MM
subject: subject_key
label: Description of the block
[/PLAN_CHANGE]"""


def _exam_status(days: int) -> str:
    if days < 0:
        return "DONE"
    if days == 0:
        return "TODAY"
    return f"{days} days left"


def build_student_context(
    state: StudyState,
    reference_date: str | None = None,
    catalog: ExamCatalog | None = None,
) -> str:
    catalog = catalog or catalog_for_state(state)
    td = reference_date or today()

    lines = [
        f"Student: {state.name or 'Student'}",
        f"Target: {state.target_percent}%",
        f"Daily study target: {state.study_hours:g} hours",
        f"Prep level: {state.prep_level}",
        f"Current streak: {state.streak} days",
        f"Today: {td}",
        "",
        "=== EXAM SCHEDULE ===",
    ]
    for exam in catalog.exams:
        status = _exam_status(days_between(td, exam.date))
        lines.append(f"{catalog.label(exam.key)}: {exam.date} ({status}) — {exam.duration}")
    lines.append("")

    lines.append("=== SUBJECT STATUS ===")
    for key in catalog.subject_keys:
        rating = state.subject_ratings.get(key, "medium")
        chapters = state.subjects.get(key) or []
        counts = {s: sum(1 for c in chapters if c.status == s)
                  for s in ("completed", "in_progress", "needs_revision", "not_started")}
        lines.append(
            f"{catalog.label(key)}: confidence={rating}, chapters={len(chapters)} "
            f"(done={counts['completed']}, in_progress={counts['in_progress']}, "
            f"needs_revision={counts['needs_revision']}, not_started={counts['not_started']})"
        )
    lines.append("")

    lines.append(f"=== RECENT STUDY (last {RECENT_DAYS} days) ===")
    for back in range(RECENT_DAYS - 1, -1, -1):
        day = add_days(td, -back)
        entry = state.study_log.get(day)
        if entry:
            lines.append(f"{day}: {entry.hours:.1f}h, {entry.sessions} sessions")
        else:
            lines.append(f"{day}: no study")
    lines.append("")

    todays_sessions = [s for s in state.timer_sessions if s.date == td]
    if todays_sessions:
        lines.append("=== TODAY'S TIMER SESSIONS ===")
        for s in todays_sessions:
            lines.append(f"{catalog.label(s.subject)} — {s.chapter or 'general'}: {s.minutes} min")
        lines.append("")

    r = state.routine
    lines.append("=== DAILY ROUTINE ===")
    lines.append(
        f"Wake: {r.wake}, Breakfast: {r.breakfast}, Lunch: {r.lunch}, "
        f"Snack: {r.snack}, Dinner: {r.dinner}, Sleep: {r.sleep}"
    )

    return "\n".join(lines)


def build_system_prompt(
    state: StudyState,
    reference_date: str | None = None,
    catalog: ExamCatalog | None = None,
) -> str:
    context = build_student_context(state, reference_date, catalog)

    return f"""You are an AI Study Coach for a Class 10 student preparing for their board exams. You have access to their complete study data below.

{context}

=== YOUR COACHING GUIDELINES ===

1. Be warm, supportive, but FIRMLY HONEST. Don't sugarcoat when the student is falling behind.
2. When the student wants to study strong subjects over weak ones, PUSH BACK. Cite specific data: exam dates, chapter counts, confidence ratings.
3. Celebrate real achievements with specific numbers.
4. Reference actual exam dates and days remaining.
5. Keep responses concise. Use bullet points.
6. When suggesting plan changes, output them in this exact format:

{PLAN_CHANGE_FORMAT}

7. Only suggest plan changes when the student explicitly asks to modify their plan.
8. Never be preachy or lecture-like.
9. Use the student's name naturally in conversation."""


def build_daily_briefing_prompt(
    state: StudyState,
    reference_date: str | None = None,
    catalog: ExamCatalog | None = None,
) -> str:
    context = build_student_context(state, reference_date, catalog)

    return f"""You are an AI Study Coach for a Class 10 student. Generate a brief daily briefing based on their data.

{context}

Generate a SHORT daily briefing (max 150 words) with these sections:
- A warm 1-line greeting using their name
- **Progress Snapshot**: Key stats from yesterday/this week (hours studied, chapters completed)
- **Today's Focus**: 2-3 specific subjects/chapters they should prioritize today and why
- **Motivation**: A brief, genuine motivational line tied to their actual progress

Keep it punchy and actionable. Use bold for headers. Don't use plan change tags here."""
