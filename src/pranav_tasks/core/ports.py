# src/pranav_tasks/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The store, the assistant and the view depend on Protocols instead of concrete
implementations, so storage and LLM providers stay swappable and tests can
use in-memory fakes.
"""

from typing import Any, Iterable, Protocol

from .models import Priority, SmartAddPlan

ChatMessage = dict[str, str]
# OpenAI-style chat messages: {"role": "...", "content": "..."}.


class LLMClient(Protocol):
    """Streaming chat completion client (OpenAI/OpenRouter-compatible)."""

    def stream_chat(
        self,
        messages: list[ChatMessage],
        system_prompt: str,
        *,
        response_format: dict[str, Any] | None = None,
    ) -> Iterable[str]: ...


class KeyValueStorage(Protocol):
    """Durable string key-value storage (localStorage semantics)."""

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...
    def remove_item(self, key: str) -> None: ...


class Assistant(Protocol):
    """The AI assist calls the store and the view rely on. Implementations never raise."""

    def decompose(self, task_text: str) -> list[str]: ...
    def suggest_priority(self, task_text: str) -> Priority: ...
    def motivate(self, pending_count: int) -> str: ...
    def organize(self, task_text: str) -> SmartAddPlan: ...
