"""
Markdown rendering of a day plan.
"""

from boardprep.models.schema import Block
from boardprep.tools.timeutil import FormatError, parse_date


def render_day_plan(
    date_string: str,
    blocks: list[Block],
    labels: dict[str, str],
    warnings: list[str] | None = None,
) -> str:
    day_name = parse_date(date_string).strftime("%A, %B %d")
    study_blocks = [b for b in blocks if b.type == "study"]

    try:
        study_total = sum(b.duration_minutes for b in study_blocks)
    except FormatError:
        study_total = None

    lines = [f"# Day Plan: {day_name}", ""]
    if study_total is not None:
        lines.append(f"Study time: {study_total // 60}h {study_total % 60}m across {len(study_blocks)} sessions")
        lines.append("")

    if warnings:
        lines.append("## Balance Warnings")
        lines.append("")
        for warning in warnings:
            lines.append(f"- {warning}")
        lines.append("")

    lines.append("## Schedule")
    lines.append("")
    for block in blocks:
        line = f"- **{block.start}–{block.end}** {block.label}"
        if block.subject_key:
            line += f" _({labels.get(block.subject_key, block.subject_key)})_"
        lines.append(line)
    lines.append("")

    return "\n".join(lines)
