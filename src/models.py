"""Data models for tasklog.

Tasks and log entries are plain strings; the only structured type is the
on-screen Row. Log entries are built from the two templates below.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Optional

TASK_ADDED_TEMPLATE = 'Task added: "{task}"'
TASK_REMOVED_TEMPLATE = 'Task removed: "{task}"'
EMPTY_TASK_WARNING = 'Please enter a task!'
UNSAVABLE_TASK_WARNING = 'This task contains characters that cannot be saved.'


def task_added_message(task: str) -> str:
    return TASK_ADDED_TEMPLATE.format(task=task)


def task_removed_message(task: str) -> str:
    return TASK_REMOVED_TEMPLATE.format(task=task)


def is_storable(text: str) -> bool:
    """True if text survives the UTF-8 store (lone surrogates do not)."""
    try:
        text.encode('utf-8')
    except UnicodeEncodeError:
        return False
    return True


@dataclass(eq=False)
class Row:
    """A single rendered list line.

    Fields:
        list_name: Which list holds the row ("tasks" or "logs").
        label: Text shown for the row (the task or the log entry).
        on_delete: Delete control bound at render time; receives the row.
    """
    list_name: str
    label: str
    on_delete: Optional[Callable[[Row], None]] = field(default=None, repr=False)

    def delete(self) -> None:
        """Activate the row's delete control."""
        if self.on_delete is not None:
            self.on_delete(self)
