# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from pranav_tasks.assist.pranav import PranavAssistant
from pranav_tasks.storage.local_storage import LocalStorage
from pranav_tasks.tasks.task_store import TaskStore
from pranav_tasks.ui.view import TaskView

from .fakes import FakeAssistant, FakeLLMClient, ImmediateExecutor, MemoryStorage


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the LLM client.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the developer's .env.
    """
    return SimpleNamespace(
        app_name="Pranav AI",
        log_level="WARNING",
        api_key=None,
        base_url="https://openrouter.example/api/v1",
        llm_models=["model-a", "model-b"],
        extra_headers={"X-Title": "Pranav AI"},
        llm_connect_timeout=1.0,
        llm_read_timeout=2.0,
        llm_first_token_timeout=2.0,
        data_dir=tmp_path / "data",
        storage_path=tmp_path / "data" / "local_storage.sqlite3",
        storage_key="pranav_tasks",
    )


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def sqlite_storage(tmp_path: Path) -> LocalStorage:
    return LocalStorage(tmp_path / "local_storage.sqlite3")


@pytest.fixture()
def store(storage: MemoryStorage) -> TaskStore:
    return TaskStore(storage)


@pytest.fixture()
def llm() -> FakeLLMClient:
    return FakeLLMClient()


@pytest.fixture()
def assistant(llm: FakeLLMClient) -> PranavAssistant:
    return PranavAssistant(llm)


@pytest.fixture()
def fake_assistant() -> FakeAssistant:
    return FakeAssistant()


@pytest.fixture()
def view(store: TaskStore, fake_assistant: FakeAssistant) -> TaskView:
    """View wired with an inline executor: AI results are ready at the next poll()."""
    return TaskView(store, fake_assistant, executor=ImmediateExecutor())
