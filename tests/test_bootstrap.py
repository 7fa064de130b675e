# tests/test_bootstrap.py

from __future__ import annotations

from pranav_tasks.cli.bootstrap import create_initial_state
from pranav_tasks.core.models import Priority
from pranav_tasks.llm.client import OpenRouterLLMClient
from pranav_tasks.llm.offline import OfflineLLMClient


def test_without_key_runs_offline(settings) -> None:
    state = create_initial_state(settings=settings)

    assert isinstance(state.llm, OfflineLLMClient)
    assert settings.storage_path.exists()
    assert state.assistant.suggest_priority("anything") is Priority.MEDIUM


def test_with_key_uses_openrouter(settings) -> None:
    settings.api_key = "sk-test"
    state = create_initial_state(settings=settings)
    assert isinstance(state.llm, OpenRouterLLMClient)


def test_tasks_persist_across_restarts(settings) -> None:
    first = create_initial_state(settings=settings)
    first.task_store.add("Buy milk")

    second = create_initial_state(settings=settings)

    assert [t.text for t in second.task_store.tasks] == ["Buy milk"]
