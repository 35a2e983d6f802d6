"""
Main entry point for the board-exam study planner.

Reads the state snapshot kept by the dashboard, prints the day plan, and
applies plan-change directives from a coach reply.

    python main.py init --language hindi --elective economics
    python main.py plan 2026-03-01
    python main.py apply 2026-03-01 reply.txt
    python main.py context --briefing
"""

import argparse
import logging
import os
import sys

from pydantic import ValidationError

from boardprep.config import settings
from boardprep.models.state import StudyState
from boardprep.planner.balance import analyze_study_balance
from boardprep.planner.day_plan import get_day_plan
from boardprep.tools.catalog import catalog_for_state, default_subjects
from boardprep.tools.coach_context import build_daily_briefing_prompt, build_system_prompt
from boardprep.tools.plan_changes import patch_day_plan
from boardprep.tools.render import render_day_plan
from boardprep.tools.state_io import load_state, save_state
from boardprep.tools.timeutil import today

logger = logging.getLogger("boardprep")


def cmd_init(args) -> int:
    if os.path.exists(args.state) and not args.force:
        print(f"  State already exists: {args.state} (use --force to overwrite)")
        return 1

    state = StudyState(
        subjects=default_subjects(args.language, args.elective),
        selected_language=args.language or settings.default_language,
        selected_elective=args.elective or settings.default_elective,
    )
    save_state(state, args.state)
    print(f"  Created {args.state} with {len(state.subjects)} subjects")
    return 0


def cmd_plan(args) -> int:
    state = load_state(args.state)
    catalog = catalog_for_state(state)
    date = args.date or today()

    blocks = get_day_plan(date, state, catalog)
    warnings = analyze_study_balance(blocks, state, catalog=catalog)
    markdown = render_day_plan(date, blocks, catalog.labels, warnings)

    os.makedirs(settings.plan_output_dir, exist_ok=True)
    output_path = os.path.join(settings.plan_output_dir, f"{date}.md")
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(markdown)

    print(markdown)
    print(f"  Plan written to: {output_path}")
    return 0


def cmd_apply(args) -> int:
    state = load_state(args.state)
    with open(args.reply, encoding="utf-8") as f:
        reply = f.read()

    clean_text, new_state = patch_day_plan(args.date, state, reply)
    print(clean_text)

    if new_state is state:
        print("\n  No plan changes found.")
        return 0

    save_state(new_state, args.state)
    print(f"\n  Updated plan for {args.date} ({len(new_state.custom_plans[args.date])} blocks)")
    return 0


def cmd_context(args) -> int:
    state = load_state(args.state)
    builder = build_daily_briefing_prompt if args.briefing else build_system_prompt
    print(builder(state, args.date))
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Board-exam study planner")
    parser.add_argument("--state", default=settings.state_path, help="Path to the state JSON file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("init", help="Create a state file with the default syllabus")
    p.add_argument("--language", default=None)
    p.add_argument("--elective", default=None)
    p.add_argument("--force", action="store_true")
    p.set_defaults(func=cmd_init)

    p = sub.add_parser("plan", help="Print the plan for a date (default: today)")
    p.add_argument("date", nargs="?")
    p.set_defaults(func=cmd_plan)

    p = sub.add_parser("apply", help="Apply [PLAN_CHANGE] directives from a coach reply")
    p.add_argument("date")
    p.add_argument("reply", help="File holding the reply text")
    p.set_defaults(func=cmd_apply)

    p = sub.add_parser("context", help="Print the coach system prompt")
    p.add_argument("--date", default=None)
    p.add_argument("--briefing", action="store_true", help="Daily briefing prompt instead")
    p.set_defaults(func=cmd_context)

    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(name)s | %(message)s",
    )

    try:
        return args.func(args)
    except FileNotFoundError as e:
        logger.error(f"File not found: {e.filename}")
        print(f"  ERROR: {e.filename} not found. Run: python main.py init")
    except ValidationError as e:
        logger.error(f"Invalid state file: {e}")
        print(f"  ERROR: {args.state} is not a valid state file")
    except ValueError as e:
        logger.error(str(e))
        print(f"  ERROR: {e}")
    return 1


if __name__ == "__main__":
    sys.exit(main())
