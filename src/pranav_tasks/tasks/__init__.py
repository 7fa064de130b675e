"""
Task subsystem.

Components:
- task_store.py: the in-memory task list, mirrored to one LocalStorage key
"""
