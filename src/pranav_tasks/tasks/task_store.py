# src/pranav_tasks/tasks/task_store.py

from __future__ import annotations

import json
import logging
from collections.abc import Iterator
from dataclasses import replace

from ..core.models import FilterTab, Priority, SmartAddPlan, StatsData, Task
from ..core.ports import Assistant, KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "pranav_tasks"

# Stats panel order; also the legend order.
STATS_ORDER: tuple[Priority, ...] = (Priority.HIGH, Priority.MEDIUM, Priority.LOW)


class TaskStore:
    """
    The task list: single source of truth.

    The list lives in memory, newest first. After every mutation the whole
    list is written back to one storage key as a JSON array of records;
    at construction it is read back from that key.

    Reading never fails: missing, unparseable or non-array data gives an
    empty list, and individual bad records are skipped.
    """

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key
        self._tasks: list[Task] = self.load()
        logger.info("TaskStore ready key=%s total=%d", self._key, len(self._tasks))

    # ---- persistence ----

    def load(self) -> list[Task]:
        try:
            raw = self._storage.get_item(self._key)
        except Exception:
            logger.exception("Failed to read tasks from storage key=%s", self._key)
            return []

        if not raw:
            return []

        try:
            data = json.loads(raw)
        except ValueError:
            logger.exception("Failed to load tasks: stored value is not JSON (key=%s)", self._key)
            return []

        if not isinstance(data, list):
            logger.error("Failed to load tasks: expected a JSON array, got %s", type(data).__name__)
            return []

        out: list[Task] = []
        seen: set[str] = set()
        for rec in data:
            if not isinstance(rec, dict):
                logger.warning("Skipping non-object task record: %r", rec)
                continue
            try:
                task = Task.from_record(rec)
            except ValueError:
                logger.warning("Skipping malformed task record: %r", rec)
                continue
            if task.id in seen:
                logger.warning("Skipping duplicate task id=%s", task.id)
                continue
            seen.add(task.id)
            out.append(task)
        return out

    def save(self) -> None:
        payload = json.dumps([t.to_record() for t in self._tasks], ensure_ascii=False)
        try:
            self._storage.set_item(self._key, payload)
        except Exception:
            # The in-memory list stays authoritative; the next mutation retries the write.
            logger.exception("Failed to save %d tasks to storage key=%s", len(self._tasks), self._key)

    # ---- read API ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(tuple(self._tasks))

    def get(self, task_id: str) -> Task | None:
        for t in self._tasks:
            if t.id == task_id:
                return t
        return None

    def pending_count(self) -> int:
        return sum(1 for t in self._tasks if not t.completed)

    def filter(self, tab: FilterTab | str) -> list[Task]:
        """Tasks visible under a tab. Pure projection: the store is not touched."""
        tab = FilterTab(tab)
        if tab is FilterTab.ACTIVE:
            return [t for t in self._tasks if not t.completed]
        if tab is FilterTab.COMPLETED:
            return [t for t in self._tasks if t.completed]
        return list(self._tasks)

    def stats(self) -> list[StatsData]:
        """Incomplete tasks per priority; priorities with no open tasks are left out."""
        counts = {p: 0 for p in STATS_ORDER}
        for t in self._tasks:
            if not t.completed:
                counts[t.priority] += 1
        return [StatsData(name=p.value, value=counts[p]) for p in STATS_ORDER if counts[p] > 0]

    # ---- mutations ----

    def add(self, text: str, priority: Priority | None = None) -> Task | None:
        text = (text or "").strip()
        if not text:
            return None

        task = Task(text=text, priority=priority or Priority.LOW)
        self._tasks.insert(0, task)
        self.save()
        logger.debug("Task added id=%s priority=%s", task.id, task.priority)
        return task

    def apply_plan(self, text: str, plan: SmartAddPlan) -> list[Task]:
        """
        Apply a smart-add plan.

        With subtasks, one task per subtask is prepended (in the order the
        assistant returned them) and the original text is dropped. Without,
        the original text is added with the suggested priority.
        """
        if not (text or "").strip():
            return []

        subtasks = [s.strip() for s in plan.subtasks if s and s.strip()]
        if not subtasks:
            task = self.add(text, plan.priority)
            return [task] if task is not None else []

        new_tasks = [Task(text=s, priority=plan.priority) for s in subtasks]
        self._tasks[0:0] = new_tasks
        self.save()
        logger.debug("Smart add: %d subtasks priority=%s", len(new_tasks), plan.priority)
        return new_tasks

    def smart_add(self, text: str, assistant: Assistant) -> list[Task]:
        """Ask the assistant for a priority and a breakdown, then apply the result."""
        if not (text or "").strip():
            return []
        return self.apply_plan(text, assistant.organize(text))

    def toggle(self, task_id: str) -> bool:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                self._tasks[i] = replace(t, completed=not t.completed)
                self.save()
                return True
        return False

    def delete(self, task_id: str) -> bool:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                del self._tasks[i]
                self.save()
                return True
        return False

    def clear_completed(self) -> int:
        kept = [t for t in self._tasks if not t.completed]
        removed = len(self._tasks) - len(kept)
        if removed:
            self._tasks = kept
            self.save()
        return removed
