# src/pranav_tasks/ui/render.py

from __future__ import annotations

from datetime import datetime

from ..core.models import FilterTab, Priority, StatsData, Task
from .view import TaskView

EMPTY_LIST_MESSAGE = "No tasks found via Pranav's search."
EMPTY_STATS_MESSAGE = "No active tasks to visualize."
STATS_TITLE = "Pranav's Workload Distribution"

BAR_WIDTH = 30

_PRIORITY_BADGE = {
    Priority.HIGH: "HIGH",
    Priority.MEDIUM: "MED",
    Priority.LOW: "LOW",
}


def format_created(created_at_ms: int) -> str:
    return datetime.fromtimestamp(created_at_ms / 1000).strftime("%Y-%m-%d")


def render_header(app_name: str, *, busy: bool = False) -> str:
    status = "Pranav AI is organizing..." if busy else f"Powered by {app_name}"
    return f"== Pranav's Workspace ==  ({status})"


def render_tabs(active: FilterTab) -> str:
    parts = []
    for tab in FilterTab:
        label = tab.value.capitalize()
        parts.append(f"[{label}]" if tab is active else f" {label} ")
    return " ".join(parts)


def render_task(index: int, task: Task) -> str:
    box = "[x]" if task.completed else "[ ]"
    return f"{index:>2}. {box} {task.text}  ({_PRIORITY_BADGE[task.priority]} · {format_created(task.created_at)})"


def render_task_list(tasks: list[Task]) -> str:
    if not tasks:
        return f"    {EMPTY_LIST_MESSAGE}"
    return "\n".join(render_task(i, t) for i, t in enumerate(tasks, start=1))


def render_stats(stats: list[StatsData]) -> str:
    lines = [STATS_TITLE]
    if not stats:
        lines.append(f"    {EMPTY_STATS_MESSAGE}")
        return "\n".join(lines)

    total = sum(s.value for s in stats)
    for s in stats:
        filled = max(1, round(BAR_WIDTH * s.value / total))
        lines.append(f"  {s.name:<6} {'#' * filled:<{BAR_WIDTH}} {s.value} ({s.value * 100 // total}%)")
    return "\n".join(lines)


def render_screen(view: TaskView, app_name: str = "Pranav AI") -> str:
    blocks = [
        render_header(app_name, busy=view.ai_busy),
        f'"{view.motivation.strip()}"',
    ]
    if view.show_stats:
        blocks.append(render_stats(view.stats()))
    blocks.append(render_tabs(view.active_tab))
    blocks.append(render_task_list(view.visible_tasks()))
    return "\n\n".join(blocks)
