"""
Load and save the study state snapshot as JSON.
"""

import json
import logging
from pathlib import Path

from boardprep.models.state import StudyState

logger = logging.getLogger(__name__)


def load_state(path: str) -> StudyState:
    #raises FileNotFoundError / pydantic.ValidationError, callers decide
    with open(path, encoding="utf-8") as f:
        state = StudyState.model_validate(json.load(f))

    logger.info(f"Loaded state from {path}: {len(state.subjects)} subjects, {len(state.custom_plans)} custom plans")
    return state


def save_state(state: StudyState, path: str) -> None:
    Path(path).parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w", encoding="utf-8") as f:
        json.dump(state.model_dump(mode="json", by_alias=True, exclude_none=True), f, indent=2)

    logger.info(f"Saved state to {path}")
