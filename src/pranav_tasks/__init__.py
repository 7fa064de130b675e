"""pranav-tasks: a console task list with Pranav AI assistance."""

__version__ = "0.1.0"
