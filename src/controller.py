"""Presentation controller: wires the surface to the two collections.

Every task mutation appends one derived entry to the log collection;
log deletions never produce further entries.
"""
import logging
from typing import List
from collection import LogCollection, TaskCollection
from display import LOGS, TASKS, TerminalSurface
from models import (Row, EMPTY_TASK_WARNING, UNSAVABLE_TASK_WARNING, is_storable,
                    task_added_message, task_removed_message)
from notifier import Subscription

logger = logging.getLogger(__name__)


class Controller:
    def __init__(self, tasks: TaskCollection, logs: LogCollection, surface: TerminalSurface):
        self.tasks = tasks
        self.logs = logs
        self.surface = surface
        self._subscriptions: List[Subscription] = []
        self._start()

    def _start(self) -> None:
        # restore before subscribing so existing tasks do not generate log entries
        for task in self.tasks:
            self.add_task_row(task)
        for log in self.logs:
            self.add_log_row(log)
        self.surface.on_submit(self.handle_submit)
        self._subscriptions.append(self.tasks.added.subscribe(self._on_task_added))
        self._subscriptions.append(self.tasks.removed.subscribe(self._on_task_removed))
        logger.debug('Restored %d task(s) and %d log entr(ies)', len(self.tasks), len(self.logs))

    def close(self) -> None:
        for sub in self._subscriptions:
            sub.dispose()
        self._subscriptions = []

    # -------------------- user gestures --------------------
    def handle_submit(self) -> None:
        task = self.surface.read_entry().strip()
        if not task:
            self.surface.alert(EMPTY_TASK_WARNING)
            return
        if not is_storable(task):
            self.surface.alert(UNSAVABLE_TASK_WARNING)
            return
        self.tasks.add(task)
        self.surface.clear_entry()

    # -------------------- collection reactions --------------------
    def _on_task_added(self, task: str) -> None:
        self.add_task_row(task)
        self._record(task_added_message(task))

    def _on_task_removed(self, task: str) -> None:
        self._record(task_removed_message(task))

    def _record(self, message: str) -> None:
        self.add_log_row(message)
        self.logs.add(message)

    # -------------------- rows --------------------
    def add_task_row(self, task: str) -> Row:
        def delete(row: Row) -> None:
            self.tasks.remove(task)
            self.surface.remove_row(row)
        return self.surface.append_row(TASKS, task, delete)

    def add_log_row(self, log: str) -> Row:
        def delete(row: Row) -> None:
            self.logs.remove(log)
            self.surface.remove_row(row)
        return self.surface.append_row(LOGS, log, delete)
