# src/pranav_tasks/ui/view.py

"""
View state and intent dispatch.

TaskView holds only presentational state (input text, active tab, AI-busy
flag, stats visibility, last motivational message) and forwards intents to
the TaskStore and the assistant.

Threading model:
- the UI thread owns the store and every attribute of the view,
- AI requests run on a small worker pool and come back as Futures; the
  startup motivation fetch and a smart add each get their own worker,
- poll() applies finished results on the UI thread.

While a smart add is pending, add and smart add are refused; toggle,
delete, tab switches and the stats panel keep working. A pending request
cannot be cancelled: its result is applied when it arrives, even if the
input text has changed since.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor

from ..core.models import FilterTab, Priority, SmartAddPlan, StatsData, Task
from ..core.persona import WELCOME_MESSAGE
from ..core.ports import Assistant
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)

BUSY_NOTICE = "Pranav AI is still organizing your last task. Try again in a moment."

Notify = Callable[[str], None]


class TaskView:
    def __init__(
        self,
        store: TaskStore,
        assistant: Assistant,
        *,
        executor: Executor | None = None,
        notify: Notify | None = None,
    ) -> None:
        self.store = store
        self.assistant = assistant

        self.input_text = ""
        self.active_tab = FilterTab.ALL
        self.show_stats = False
        self.motivation = WELCOME_MESSAGE

        # bumped on every change that should trigger a re-render
        self.revision = 0

        self._own_executor = executor is None
        self._executor = executor or ThreadPoolExecutor(max_workers=2, thread_name_prefix="pranav-ai")
        self._notify = notify

        self._pending_smart: tuple[str, Future[SmartAddPlan]] | None = None
        self._pending_motivation: Future[str] | None = None

    # ---- derived state ----

    @property
    def ai_busy(self) -> bool:
        return self._pending_smart is not None

    def visible_tasks(self) -> list[Task]:
        return self.store.filter(self.active_tab)

    def stats(self) -> list[StatsData]:
        return self.store.stats()

    def _changed(self) -> None:
        self.revision += 1

    def refresh(self) -> None:
        """Ask the front-end to redraw without changing anything."""
        self._changed()

    # ---- intents ----

    def add(self, text: str | None = None, priority: Priority | None = None) -> Task | None:
        """Plain add. Refused (returns None) while the assistant is busy."""
        text = self.input_text if text is None else text
        if self.ai_busy:
            logger.debug("Add refused: AI busy")
            return None
        task = self.store.add(text, priority)
        if task is not None:
            self.input_text = ""
            self._changed()
        return task

    def smart_add(self, text: str | None = None) -> Future[SmartAddPlan] | None:
        """
        Submit a smart add ("Pranav AI Organize").

        Returns the pending Future, or None when the text is blank or a
        smart add is already running.
        """
        text = self.input_text if text is None else text
        if not text.strip() or self.ai_busy:
            return None

        self.input_text = text
        future = self._executor.submit(self.assistant.organize, text)
        self._pending_smart = (text, future)
        self._changed()
        if self._notify is not None:
            future.add_done_callback(lambda _f: self._emit("Pranav AI is done organizing. Press Enter to refresh."))
        logger.info("Smart add submitted len=%d", len(text))
        return future

    def start_motivation(self) -> Future[str] | None:
        """One-time startup fetch; skipped when nothing is pending."""
        pending = self.store.pending_count()
        if pending <= 0 or self._pending_motivation is not None:
            return None
        self._pending_motivation = self._executor.submit(self.assistant.motivate, pending)
        return self._pending_motivation

    def toggle(self, ref: str) -> Task | None:
        task = self.resolve(ref)
        if task is None or not self.store.toggle(task.id):
            return None
        self._changed()
        return self.store.get(task.id)

    def delete(self, ref: str) -> Task | None:
        task = self.resolve(ref)
        if task is None or not self.store.delete(task.id):
            return None
        self._changed()
        return task

    def clear_completed(self) -> int:
        removed = self.store.clear_completed()
        if removed:
            self._changed()
        return removed

    def set_tab(self, tab: FilterTab | str) -> bool:
        try:
            new_tab = FilterTab(str(tab).strip().lower())
        except ValueError:
            return False
        if new_tab is not self.active_tab:
            self.active_tab = new_tab
            self._changed()
        return True

    def toggle_stats(self) -> bool:
        self.show_stats = not self.show_stats
        self._changed()
        return self.show_stats

    # ---- results channel ----

    def poll(self) -> list[Task]:
        """
        Apply finished AI results on the calling (UI) thread.

        Returns the tasks created by a smart add that finished since the
        last poll (empty otherwise).
        """
        created: list[Task] = []

        if self._pending_smart is not None:
            text, future = self._pending_smart
            if future.done():
                self._pending_smart = None
                try:
                    plan = future.result()
                except Exception:
                    logger.exception("Pranav AI Error")
                else:
                    created = self.store.apply_plan(text, plan)
                    self.input_text = ""
                self._changed()

        if self._pending_motivation is not None and self._pending_motivation.done():
            future_m = self._pending_motivation
            self._pending_motivation = None
            try:
                self.motivation = future_m.result()
            except Exception:
                logger.exception("Motivation fetch crashed.")
            self._changed()

        return created

    def wait(self, timeout: float | None = None) -> list[Task]:
        """Block until pending AI work is finished, then poll()."""
        for future in (
            self._pending_smart[1] if self._pending_smart else None,
            self._pending_motivation,
        ):
            if future is None:
                continue
            try:
                future.exception(timeout=timeout)
            except TimeoutError:
                logger.info("Pranav AI still working after %.1fs", timeout or 0.0)
        return self.poll()

    # ---- lookup ----

    def resolve(self, ref: str) -> Task | None:
        """
        Find a task by its 1-based position in the visible list,
        by full id, or by a unique id prefix.
        """
        ref = (ref or "").strip()
        if not ref:
            return None

        if ref.isdigit():
            visible = self.visible_tasks()
            idx = int(ref)
            if 1 <= idx <= len(visible):
                return visible[idx - 1]
            return None

        exact = self.store.get(ref)
        if exact is not None:
            return exact

        matches = [t for t in self.store.tasks if t.id.startswith(ref)]
        if len(matches) == 1:
            return matches[0]
        return None

    def _emit(self, text: str) -> None:
        if self._notify is None:
            return
        try:
            self._notify(text)
        except Exception:
            logger.debug("notify callback failed.", exc_info=True)

    def close(self) -> None:
        """
        Drop queued AI work. A request already talking to the model is not
        interrupted; the interpreter still waits for it at exit, for at most
        the configured read timeout.
        """
        if self._own_executor:
            self._executor.shutdown(wait=False, cancel_futures=True)
