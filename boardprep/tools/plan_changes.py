"""
Plan-change directives embedded in chat replies.

The coach emits blocks of the form

    [PLAN_CHANGE]
    action: add|remove|replace
    start: HH:MM
    end: HH:MM
    subject: <key>
    label: <text>
    [/PLAN_CHANGE]

inside otherwise free-form prose. Extraction is best effort: a block without
an action, start or end is skipped, never reported.
"""

import logging
import re

from boardprep.models.schema import Block, PlanChange
from boardprep.models.state import StudyState
from boardprep.planner.day_plan import get_day_plan
from boardprep.tools.catalog import ExamCatalog

logger = logging.getLogger(__name__)

_REGION_RE = re.compile(r"\[PLAN_CHANGE\](.*?)\[/PLAN_CHANGE\]", re.DOTALL)
#keys may share a line: "action: add start: 14:00 end: 14:30"
_ACTION_RE = re.compile(r"\baction:[ \t]*(add|remove|replace)\b", re.IGNORECASE)
_START_RE = re.compile(r"\bstart:[ \t]*(\d{2}:\d{2})")
_END_RE = re.compile(r"\bend:[ \t]*(\d{2}:\d{2})")
_SUBJECT_RE = re.compile(r"\bsubject:[ \t]*(\S+)")
_LABEL_RE = re.compile(r"\blabel:[ \t]*(.*?)(?=[ \t]+(?:action|start|end|subject|label):|$)", re.MULTILINE)

DEFAULT_LABEL = "Study block"


def parse_plan_changes(text: str) -> list[PlanChange]:
    changes = []

    for region in _REGION_RE.findall(text):
        action = _ACTION_RE.search(region)
        start = _START_RE.search(region)
        end = _END_RE.search(region)
        if not (action and start and end):
            logger.debug(f"Dropping incomplete plan change: {region.strip()!r}")
            continue

        subject = _SUBJECT_RE.search(region)
        label = _LABEL_RE.search(region)
        changes.append(PlanChange(
            action=action.group(1).lower(),
            start=start.group(1),
            end=end.group(1),
            subject=subject.group(1) if subject else None,
            label=(label.group(1).strip() if label else "") or DEFAULT_LABEL,
        ))

    return changes


def strip_plan_change_tags(text: str) -> str:
    """Remove directive blocks so only the prose is shown."""
    return _REGION_RE.sub("", text).strip()


def apply_plan_changes(current_blocks: list[Block], changes: list[PlanChange]) -> list[Block]:
    """Apply directives in order and return a new list sorted by start."""
    blocks = list(current_blocks)

    for change in changes:
        if change.action == "add":
            blocks.append(Block(
                start=change.start,
                end=change.end,
                label=change.label,
                type="study",
                subject_key=change.subject,
            ))
        elif change.action == "remove":
            blocks = [b for b in blocks if not (b.start == change.start and b.end == change.end)]
        elif change.action == "replace":
            blocks = [
                b.model_copy(update={
                    "label": change.label,
                    "subject_key": change.subject or b.subject_key,
                })
                if b.start == change.start and b.end == change.end else b
                for b in blocks
            ]
        logger.debug(f"Applied {change.action} {change.start}-{change.end}")

    #HH:MM sorts lexically in time order
    blocks.sort(key=lambda b: b.start)
    return blocks


def patch_day_plan(
    date_string: str,
    state: StudyState,
    reply_text: str,
    catalog: ExamCatalog | None = None,
) -> tuple[str, StudyState]:
    """Apply a chat reply's directives to the day's plan.

    Returns the reply with directives stripped, and a new state whose custom
    plan for the date holds the patched blocks. The input state is untouched;
    without directives it is returned as is.
    """
    clean_text = strip_plan_change_tags(reply_text)
    changes = parse_plan_changes(reply_text)
    if not changes:
        return clean_text, state

    patched = apply_plan_changes(get_day_plan(date_string, state, catalog), changes)
    logger.info(f"{date_string}: applied {len(changes)} plan changes, {len(patched)} blocks")

    custom_plans = {**state.custom_plans, date_string: patched}
    return clean_text, state.model_copy(update={"custom_plans": custom_plans})
