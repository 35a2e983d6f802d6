"""
Gap filler: turns a free stretch of the day into study sessions and breaks.
"""

import logging

from boardprep.models.schema import Block, Chapter, RevisionDue
from boardprep.tools.timeutil import min_to_time

logger = logging.getLogger(__name__)

MIN_SESSION = 25
IDEAL_SESSION = 50
MAX_SESSION = 60
LIGHT_SESSION = 40  #post-dinner sessions: ideal and cap

#a remainder this close to the cap is used whole instead of leaving a sliver
SLIVER_ALLOWANCE = 10

SHORT_BREAK = 10
LONG_BREAK = 15
LONG_BREAK_EVERY = 3

LIGHT_PREFIX = "Light Revision — "


def _pick_chapter(
    subject_key: str,
    revision_due: list[RevisionDue],
    subjects: dict[str, list[Chapter]],
    chapter_counters: dict[str, int],
) -> str:
    #a due revision is used once per day, then dropped from the shared list
    for idx, due in enumerate(revision_due):
        if due.subject_key == subject_key:
            del revision_due[idx]
            return f"{due.chapter_name} (Revision)"

    incomplete = [c for c in subjects.get(subject_key) or [] if not c.is_complete]
    if not incomplete:
        return "Revision"

    count = chapter_counters.get(subject_key, 0)
    chapter_counters[subject_key] = count + 1
    return incomplete[count % len(incomplete)].name


def fill_gap_with_study(
    blocks: list[Block],
    gap_start: int,
    gap_end: int,
    subject_queue: list[str],
    queue_offset: int,
    revision_due: list[RevisionDue],
    subjects: dict[str, list[Chapter]],
    labels: dict[str, str],
    is_light: bool = False,
    chapter_counters: dict[str, int] | None = None,
) -> int:
    """Fill [gap_start, gap_end) with alternating study sessions and breaks.

    Blocks are appended to `blocks` in place. `revision_due` and
    `chapter_counters` are shared across the whole day and updated as
    chapters are used. Whatever is left once no further session fits
    becomes a free-time block, so the gap is always fully covered.

    Returns:
        Number of study sessions placed, used to advance the queue offset.
    """
    if chapter_counters is None:
        chapter_counters = {}

    ideal = LIGHT_SESSION if is_light else IDEAL_SESSION
    cap = LIGHT_SESSION if is_light else MAX_SESSION

    cursor = gap_start
    sessions = 0
    breaks = 0

    while subject_queue and gap_end - cursor >= MIN_SESSION:
        remaining = gap_end - cursor
        length = remaining if remaining <= cap + SLIVER_ALLOWANCE else ideal

        subject_key = subject_queue[(queue_offset + sessions) % len(subject_queue)]
        chapter = _pick_chapter(subject_key, revision_due, subjects, chapter_counters)
        label = f"{labels.get(subject_key, subject_key)} — {chapter}"
        if is_light:
            label = LIGHT_PREFIX + label

        blocks.append(Block(
            start=min_to_time(cursor),
            end=min_to_time(cursor + length),
            label=label,
            type="study",
            subject_key=subject_key,
        ))
        cursor += length
        sessions += 1

        remaining = gap_end - cursor
        if remaining < MIN_SESSION:
            break

        long_break = (breaks + 1) % LONG_BREAK_EVERY == 0
        #never eat into the next session's minimum length
        break_len = min(LONG_BREAK if long_break else SHORT_BREAK, remaining - MIN_SESSION)
        if break_len > 0:
            blocks.append(Block(
                start=min_to_time(cursor),
                end=min_to_time(cursor + break_len),
                label="Break + Stretch" if long_break else "Short Break",
                type="break",
            ))
            cursor += break_len
            breaks += 1

    if cursor < gap_end:
        blocks.append(Block(
            start=min_to_time(cursor),
            end=min_to_time(gap_end),
            label="Free Time",
            type="break",
        ))

    logger.debug(
        f"Gap {min_to_time(gap_start)}-{min_to_time(gap_end)}: "
        f"{sessions} sessions, {breaks} breaks{' (light)' if is_light else ''}"
    )
    return sessions
