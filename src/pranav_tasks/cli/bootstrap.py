# src/pranav_tasks/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (LLM/assistant/storage/tasks).
"""

from __future__ import annotations

import logging

from ..assist.pranav import PranavAssistant
from ..config import get_settings
from ..core.ports import LLMClient
from ..core.state import AppState
from ..llm.client import OpenRouterLLMClient, friendly_llm_error_message
from ..llm.offline import OfflineLLMClient
from ..storage.local_storage import LocalStorage
from ..tasks.task_store import DEFAULT_STORAGE_KEY, TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_path.parent.mkdir(parents=True, exist_ok=True)


def build_llm_client(settings) -> LLMClient:
    try:
        return OpenRouterLLMClient(settings)
    except RuntimeError as e:
        # Without a key every AI call falls back to its default value.
        logger.warning("%s Running without Pranav AI.", friendly_llm_error_message(e))
        return OfflineLLMClient(str(e))


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    llm_client = build_llm_client(settings)
    storage = LocalStorage(settings.storage_path)
    key = getattr(settings, "storage_key", None) or DEFAULT_STORAGE_KEY

    return AppState(
        settings=settings,
        llm=llm_client,
        assistant=PranavAssistant(llm_client),
        storage=storage,
        task_store=TaskStore(storage, key=key),
    )
