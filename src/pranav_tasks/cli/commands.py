# src/pranav_tasks/cli/commands.py

from __future__ import annotations

from collections.abc import Callable

from ..core.models import FilterTab, Priority
from ..ui.view import BUSY_NOTICE, TaskView

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[TaskView, list[str], CommandEmitter | None], str]


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, view: TaskView, line: str, emit: CommandEmitter | None = None) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(view, args, emit)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  (plain text adds a task with Low priority)")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_priority_prefix(args: list[str]) -> tuple[Priority | None, list[str]]:
    """`/add !high Buy milk` -> (High, ["Buy", "milk"])."""
    if args and args[0].startswith("!"):
        wanted = args[0][1:].capitalize()
        for p in Priority:
            if p.value == wanted:
                return p, args[1:]
    return None, args


def cmd_help(view: TaskView, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_add(view: TaskView, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /add <text>          -> add with Low priority
    /add !high <text>    -> add with an explicit priority
    """
    priority, words = _parse_priority_prefix(args)
    text = " ".join(words)
    if not text.strip():
        return "Usage: /add [!high|!medium|!low] <task text>"
    if view.ai_busy:
        return BUSY_NOTICE
    task = view.add(text, priority)
    if task is None:
        return "Nothing added."
    return f"Added: {task.text} ({task.priority})"


def cmd_smart(view: TaskView, args: list[str], emit: CommandEmitter | None = None) -> str:
    text = " ".join(args)
    if not text.strip():
        return "Usage: /smart <task text>"
    if view.ai_busy:
        return BUSY_NOTICE
    view.smart_add(text)
    return "Pranav AI is organizing your task..."


def cmd_wait(view: TaskView, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not view.ai_busy:
        return "Pranav AI is idle."
    created = view.wait()
    if view.ai_busy:
        return "Pranav AI is still working."
    if not created:
        return "Pranav AI finished (nothing added)."
    return f"Pranav AI added {len(created)} task(s)."


def cmd_done(view: TaskView, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /done <number|id>"
    task = view.toggle(args[0])
    if task is None:
        return f"No task {args[0]!r} in this view."
    state = "done" if task.completed else "not done"
    return f"Marked {state}: {task.text}"


def cmd_delete(view: TaskView, args: list[str], emit: CommandEmitter | None = None) -> str:
    if not args:
        return "Usage: /del <number|id>"
    task = view.delete(args[0])
    if task is None:
        return f"No task {args[0]!r} in this view."
    return f"Deleted: {task.text}"


def cmd_clear(view: TaskView, args: list[str], emit: CommandEmitter | None = None) -> str:
    removed = view.clear_completed()
    return f"Removed {removed} completed task(s)."


def cmd_tab(view: TaskView, args: list[str], emit: CommandEmitter | None = None) -> str:
    choices = " | ".join(t.value for t in FilterTab)
    if not args:
        return f"Current tab: {view.active_tab}. Use /tab {choices}."
    if not view.set_tab(args[0]):
        return f"Unknown tab {args[0]!r}. Use /tab {choices}."
    return f"Showing: {view.active_tab}"


def cmd_stats(view: TaskView, args: list[str], emit: CommandEmitter | None = None) -> str:
    shown = view.toggle_stats()
    return "Stats panel shown." if shown else "Stats panel hidden."


def cmd_list(view: TaskView, args: list[str], emit: CommandEmitter | None = None) -> str:
    view.refresh()
    return ""


def cmd_status(view: TaskView, args: list[str], emit: CommandEmitter | None = None) -> str:
    store = view.store
    return (
        "Status:\n"
        f"  Tasks: {len(store)} ({store.pending_count()} pending)\n"
        f"  Tab: {view.active_tab}\n"
        f"  Pranav AI: {'busy' if view.ai_busy else 'idle'}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("add", cmd_add, help_text="Add a task: /add [!high|!medium|!low] <text>.", aliases=["a"])
registry.register(
    "smart",
    cmd_smart,
    help_text="Pranav AI Organize: suggest a priority and split into subtasks.",
    aliases=["ai", "organize"],
)
registry.register("wait", cmd_wait, help_text="Wait for Pranav AI to finish and apply the result.")
registry.register("done", cmd_done, help_text="Toggle done: /done <number|id>.", aliases=["toggle", "t"])
registry.register("del", cmd_delete, help_text="Delete a task: /del <number|id>.", aliases=["delete", "rm"])
registry.register("clear", cmd_clear, help_text="Remove all completed tasks.")
registry.register("tab", cmd_tab, help_text="Switch tab: /tab all | active | completed.")
registry.register("stats", cmd_stats, help_text="Show/hide the workload distribution.")
registry.register("list", cmd_list, help_text="Redraw the task list.", aliases=["ls"])
registry.register("status", cmd_status, help_text="Show task counts and assistant state.")
