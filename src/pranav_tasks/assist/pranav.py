# src/pranav_tasks/assist/pranav.py

"""
Pranav AI: the three assist calls behind the task list.

Each call builds a prompt, asks the LLM and turns the answer into a domain
value. None of them raise. Failures are logged and replaced by a fixed
default:

- decompose        -> [] ("no breakdown available")
- suggest_priority -> Medium (note: an unrecognised *answer* gives Low)
- motivate         -> "You got this! - Pranav AI" ("Keep crushing it!" on empty text)
"""

from __future__ import annotations

import json
import logging
from typing import Any, Final

from ..core.models import Priority, SmartAddPlan
from ..core.persona import (
    PRANAV_SYSTEM_INSTRUCTION,
    SIGNATURE,
    breakdown_prompt,
    motivation_prompt,
    priority_prompt,
)
from ..core.ports import LLMClient

logger = logging.getLogger(__name__)

MOTIVATION_FAILURE: Final[str] = f"You got this! {SIGNATURE}"
MOTIVATION_EMPTY: Final[str] = f"Keep crushing it! {SIGNATURE}"

SUBTASKS_RESPONSE_FORMAT: Final[dict[str, Any]] = {
    "type": "json_schema",
    "json_schema": {
        "name": "subtasks",
        "schema": {
            "type": "array",
            "items": {"type": "string"},
        },
    },
}


def _extract_json_array(raw: str) -> str:
    raw = raw.strip()
    if raw.startswith("[") and raw.endswith("]"):
        return raw
    first = raw.find("[")
    last = raw.rfind("]")
    if first != -1 and last != -1 and last > first:
        return raw[first : last + 1]
    return raw


def parse_subtasks(raw: str) -> list[str]:
    """
    Parse the model's array-of-strings answer.

    Raises ValueError when the answer is not a JSON array.
    Non-string and blank items are dropped.
    """
    raw = (raw or "").strip()
    if not raw:
        return []
    data = json.loads(_extract_json_array(raw))
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array, got {type(data).__name__}")
    return [item.strip() for item in data if isinstance(item, str) and item.strip()]


def parse_priority(raw: str) -> Priority:
    """Exact one-word match; anything else is Low."""
    text = (raw or "").strip()
    if text == Priority.HIGH.value:
        return Priority.HIGH
    if text == Priority.MEDIUM.value:
        return Priority.MEDIUM
    return Priority.LOW


class PranavAssistant:
    def __init__(self, llm: LLMClient, *, system_instruction: str = PRANAV_SYSTEM_INSTRUCTION) -> None:
        self._llm = llm
        self._system_instruction = system_instruction

    def _complete(self, prompt: str, *, response_format: dict[str, Any] | None = None) -> str:
        raw = ""
        for piece in self._llm.stream_chat(
            [{"role": "user", "content": prompt}],
            self._system_instruction,
            response_format=response_format,
        ):
            raw += piece
        return raw

    def decompose(self, task_text: str) -> list[str]:
        """Break a task into 3-5 subtasks. [] means no breakdown is available."""
        try:
            raw = self._complete(breakdown_prompt(task_text), response_format=SUBTASKS_RESPONSE_FORMAT)
            subtasks = parse_subtasks(raw)
        except Exception:
            logger.exception("Pranav AI failed to break down task.")
            return []
        logger.debug("Breakdown produced %d subtasks", len(subtasks))
        return subtasks

    def suggest_priority(self, task_text: str) -> Priority:
        try:
            raw = self._complete(priority_prompt(task_text))
        except Exception:
            logger.exception("Pranav AI failed to prioritize.")
            return Priority.MEDIUM
        return parse_priority(raw)

    def motivate(self, pending_count: int) -> str:
        try:
            raw = self._complete(motivation_prompt(pending_count))
        except Exception as e:
            logger.info("Pranav AI motivation unavailable (%s)", e.__class__.__name__)
            return MOTIVATION_FAILURE
        if not raw.strip():
            return MOTIVATION_EMPTY
        return raw

    def organize(self, task_text: str) -> SmartAddPlan:
        """Priority first, then the breakdown: the two requests behind a smart add."""
        priority = self.suggest_priority(task_text)
        subtasks = self.decompose(task_text)
        return SmartAddPlan(priority=priority, subtasks=tuple(subtasks))
