# src/pranav_tasks/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_store import TaskStore
from .ports import Assistant, KeyValueStorage, LLMClient


@dataclass
class AppState:
    # Settings object (config.Settings or a test SimpleNamespace)
    settings: Any

    llm: LLMClient
    assistant: Assistant
    storage: KeyValueStorage
    task_store: TaskStore
