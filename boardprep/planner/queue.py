"""
Subject queue: a repeating, interleaved sequence of subject keys.

Each subject gets a number of slots per cycle proportional to its priority.
Slots are dealt out in rounds, one per subject per round, subjects ordered by
how many slots they still have, so a subject only repeats back-to-back once it
is the last one with slots left.
"""

import math

REVISION_EXAM_SLOT_FACTOR = 1.4


def build_subject_queue(
    priorities: list[tuple[str, float]],
    revision_exam_key: str | None = None,
) -> list[str]:
    """Build the subject rotation for a day.

    Args:
        priorities: (subject_key, priority) pairs, highest priority first.
        revision_exam_key: Subject whose exam is 1-2 days away, if any.

    Returns:
        Subject keys to be consumed cyclically (index modulo length).
    """
    if not priorities:
        return []
    if len(priorities) == 1:
        return [priorities[0][0]]

    total = sum(p for _, p in priorities)
    if total <= 0:
        return [key for key, _ in priorities]

    cycle = max(10, 3 * len(priorities))
    remaining = {}
    for key, priority in priorities:
        if priority <= 0:
            remaining[key] = 0
            continue
        slots = max(1, math.floor(priority / total * cycle + 0.5))
        if key == revision_exam_key:
            slots = math.ceil(round(slots * REVISION_EXAM_SLOT_FACTOR, 9))
        remaining[key] = slots

    order = [key for key, _ in priorities]
    queue = []
    while any(remaining.values()):
        #stable sort keeps the priority order on ties
        round_keys = sorted(
            (key for key in order if remaining[key] > 0),
            key=lambda key: -remaining[key],
        )
        for key in round_keys:
            queue.append(key)
            remaining[key] -= 1

    return queue
