# tests/test_view.py

from __future__ import annotations

import threading
import time

from pranav_tasks.core.models import FilterTab, Priority
from pranav_tasks.core.persona import WELCOME_MESSAGE
from pranav_tasks.tasks.task_store import TaskStore
from pranav_tasks.ui import render
from pranav_tasks.ui.view import TaskView

from .fakes import FakeAssistant, ImmediateExecutor, ManualExecutor


def _manual_view(store: TaskStore, assistant: FakeAssistant) -> tuple[TaskView, ManualExecutor]:
    executor = ManualExecutor()
    return TaskView(store, assistant, executor=executor), executor


def test_initial_presentational_state(view: TaskView) -> None:
    assert view.input_text == ""
    assert view.active_tab is FilterTab.ALL
    assert view.ai_busy is False
    assert view.show_stats is False
    assert view.motivation == WELCOME_MESSAGE


def test_add_clears_input(view: TaskView) -> None:
    view.input_text = "Buy milk"

    task = view.add()

    assert task is not None and task.text == "Buy milk"
    assert view.input_text == ""


def test_smart_add_applies_on_poll(store: TaskStore) -> None:
    assistant = FakeAssistant(priority=Priority.HIGH, subtasks=["Book flight", "Book hotel"])
    view, executor = _manual_view(store, assistant)

    future = view.smart_add("Plan trip")

    assert future is not None
    assert view.ai_busy is True
    assert view.input_text == "Plan trip"
    assert len(store) == 0

    executor.run_all()
    created = view.poll()

    assert view.ai_busy is False
    assert view.input_text == ""
    assert [t.text for t in created] == ["Book flight", "Book hotel"]
    assert all(t.priority is Priority.HIGH for t in store.tasks)


def test_busy_blocks_adds_but_not_toggle_or_delete(store: TaskStore) -> None:
    keep = store.add("keep")
    drop = store.add("drop")
    assert keep and drop
    view, executor = _manual_view(store, FakeAssistant())

    view.smart_add("Plan trip")

    assert view.add("while busy") is None
    assert view.smart_add("another") is None
    assert len(executor.queue) == 1

    assert view.toggle(keep.id) is not None
    assert view.delete(drop.id) is not None
    assert view.set_tab("completed") is True
    assert view.toggle_stats() is True
    assert [t.text for t in view.visible_tasks()] == ["keep"]

    executor.run_all()
    view.poll()
    assert view.add("after") is not None


def test_result_applied_even_if_input_changed(store: TaskStore) -> None:
    view, executor = _manual_view(store, FakeAssistant(priority=Priority.LOW))

    view.smart_add("Plan trip")
    view.input_text = "something else"
    executor.run_all()
    view.poll()

    assert [t.text for t in store.tasks] == ["Plan trip"]


def test_crashing_assistant_clears_busy(store: TaskStore) -> None:
    class Exploding(FakeAssistant):
        def organize(self, task_text: str):
            raise RuntimeError("unexpected")

    view = TaskView(store, Exploding(), executor=ImmediateExecutor())

    view.smart_add("Plan trip")
    assert view.poll() == []
    assert view.ai_busy is False
    assert len(store) == 0


def test_smart_add_blank_is_ignored(view: TaskView, fake_assistant: FakeAssistant) -> None:
    assert view.smart_add("   ") is None
    assert fake_assistant.calls == []


def test_motivation_only_when_tasks_pending(store: TaskStore) -> None:
    assistant = FakeAssistant(motivation="Crush it. - Pranav AI")
    view = TaskView(store, assistant, executor=ImmediateExecutor())

    assert view.start_motivation() is None
    assert view.motivation == WELCOME_MESSAGE

    store.add("one")
    store.add("two")
    view.start_motivation()
    view.poll()

    assert assistant.calls == [("motivate", 2)]
    assert view.motivation == "Crush it. - Pranav AI"


def test_wait_blocks_until_done(store: TaskStore) -> None:
    view = TaskView(store, FakeAssistant(subtasks=["a"]))
    try:
        view.smart_add("x")
        created = view.wait(timeout=5)
        assert [t.text for t in created] == ["a"]
        assert view.ai_busy is False
    finally:
        view.close()


def test_resolve_by_position_id_and_prefix(view: TaskView, store: TaskStore) -> None:
    older = store.add("older")
    newer = store.add("newer")
    assert older and newer

    assert view.resolve("1") == newer
    assert view.resolve("2") == older
    assert view.resolve("3") is None
    assert view.resolve("0") is None
    assert view.resolve(older.id) == older
    assert view.resolve(older.id[:12]) == older
    assert view.resolve("") is None

    store.toggle(older.id)
    view.set_tab("completed")
    assert view.resolve("1") == store.get(older.id)


def test_set_tab_rejects_unknown(view: TaskView) -> None:
    rev = view.revision
    assert view.set_tab("Archived") is False
    assert view.active_tab is FilterTab.ALL
    assert view.revision == rev
    assert view.set_tab(" Active ") is True
    assert view.active_tab is FilterTab.ACTIVE


def test_revision_bumps_on_changes(view: TaskView) -> None:
    rev = view.revision
    task = view.add("x")
    assert task is not None
    view.toggle("1")
    view.toggle_stats()
    assert view.revision == rev + 3


# ---- rendering ----


def test_render_screen_lists_tasks_and_tabs(view: TaskView, store: TaskStore) -> None:
    store.add("Buy milk")
    store.add("Pay rent", Priority.HIGH)

    screen = render.render_screen(view)

    assert "Pranav's Workspace" in screen
    assert f'"{WELCOME_MESSAGE}"' in screen
    assert "[All]" in screen
    assert " 1. [ ] Pay rent  (HIGH · " in screen
    assert " 2. [ ] Buy milk  (LOW · " in screen
    assert render.STATS_TITLE not in screen


def test_render_empty_states(view: TaskView) -> None:
    view.toggle_stats()
    screen = render.render_screen(view)

    assert render.EMPTY_LIST_MESSAGE in screen
    assert render.EMPTY_STATS_MESSAGE in screen


def test_render_stats_bars(store: TaskStore) -> None:
    store.add("a", Priority.HIGH)
    store.add("b", Priority.LOW)
    store.add("c", Priority.LOW)

    text = render.render_stats(store.stats())
    lines = text.splitlines()

    assert lines[0] == render.STATS_TITLE
    assert lines[1].strip().startswith("High")
    assert lines[1].rstrip().endswith("1 (33%)")
    assert lines[2].rstrip().endswith("2 (66%)")
    assert len(lines) == 3


def test_render_busy_header(store: TaskStore) -> None:
    view = TaskView(store, FakeAssistant(), executor=ManualExecutor())
    view.smart_add("x")
    assert "organizing" in render.render_header("Pranav AI", busy=view.ai_busy)


class _SlowMotivation(FakeAssistant):
    """motivate() blocks until released; organize() answers at once."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.release = threading.Event()

    def motivate(self, pending_count: int) -> str:
        self.release.wait(timeout=10)
        return super().motivate(pending_count)


def test_slow_motivation_does_not_hold_smart_add(store: TaskStore) -> None:
    store.add("pending")
    assistant = _SlowMotivation(subtasks=["a", "b"])
    view = TaskView(store, assistant)
    try:
        motivation = view.start_motivation()
        smart = view.smart_add("Plan trip")
        assert smart is not None

        smart.result(timeout=5)
        created = view.poll()

        assert [t.text for t in created] == ["a", "b"]
        assert view.ai_busy is False
        assert motivation is not None and not motivation.done()
    finally:
        assistant.release.set()
        view.close()


def test_close_does_not_wait_for_running_request(store: TaskStore) -> None:
    store.add("pending")
    assistant = _SlowMotivation()
    view = TaskView(store, assistant)
    try:
        view.start_motivation()

        t0 = time.monotonic()
        view.close()

        assert time.monotonic() - t0 < 1.0
    finally:
        assistant.release.set()
