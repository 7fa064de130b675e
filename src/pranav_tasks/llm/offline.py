# src/pranav_tasks/llm/offline.py

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from ..core.ports import ChatMessage


class OfflineLLMClient:
    """
    LLM client used when no external API is configured.

    Every request fails fast with the configuration error, so the assistant
    degrades to its fallback values (no breakdown, Medium priority, the
    stock motivational line) exactly as it would on a network failure.
    """

    def __init__(self, reason: str = "LLM API key is not set. Set PRANAV_API_KEY in your .env.") -> None:
        self.reason = reason

    def stream_chat(
        self,
        messages: list[ChatMessage],
        system_prompt: str,
        *,
        response_format: dict[str, Any] | None = None,
    ) -> Iterable[str]:
        raise RuntimeError(self.reason)
