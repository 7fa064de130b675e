# src/pranav_tasks/core/persona.py

from __future__ import annotations

from typing import Final

PRANAV_SYSTEM_INSTRUCTION: Final[str] = """
You are Pranav AI, a highly intelligent and efficient personal task manager assistant.
Your goal is to help the user, also named Pranav, organize their life.
You are concise, encouraging, and extremely organized.
Always refer to yourself as Pranav AI.
""".strip()

SIGNATURE: Final[str] = "- Pranav AI"

WELCOME_MESSAGE: Final[str] = "Welcome back, Pranav!"


def breakdown_prompt(task_text: str) -> str:
    return f'Break down the following task into 3-5 smaller, actionable subtasks: "{task_text}"'


def priority_prompt(task_text: str) -> str:
    return (
        f'Analyze the urgency and importance of this task: "{task_text}". '
        "Return only one of these values: High, Medium, Low."
    )


def motivation_prompt(pending_count: int) -> str:
    return (
        f"The user has {pending_count} tasks left. "
        f'Give a short, punchy, 1-sentence motivational quote signed "{SIGNATURE}".'
    )
