"""Persistent collections: ordered string lists mirrored to a storage key.

The Task collection ("tasks") broadcasts on its `added` / `removed`
notifiers; the Log collection ("logs") broadcasts nothing. Removal is a
value filter: every element equal to the given item goes.
"""
import json
import logging
from typing import Iterator, List, Tuple
from notifier import Notifier
from storage import Storage

logger = logging.getLogger(__name__)

TASKS_KEY = 'tasks'
LOGS_KEY = 'logs'


class PersistentCollection:
    def __init__(self, storage: Storage, key: str):
        self.storage = storage
        self.key = key
        self._items: List[str] = self.load()

    # -------------------- loading --------------------
    def load(self) -> List[str]:
        """Read the list stored under key; absent or corrupt -> empty list.

        A corrupt value is removed from storage so it is not read again.
        """
        raw = self.storage.get_item(self.key)
        if raw is None:
            return []
        try:
            parsed = json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning('Discarding corrupt %r value: %s', self.key, e)
            self.storage.remove_item(self.key)
            return []
        if not isinstance(parsed, list) or not all(isinstance(x, str) for x in parsed):
            logger.warning('Discarding %r value: expected a list of strings', self.key)
            self.storage.remove_item(self.key)
            return []
        logger.debug('Loaded %d item(s) from %r', len(parsed), self.key)
        return parsed

    # -------------------- queries --------------------
    @property
    def items(self) -> Tuple[str, ...]:
        return tuple(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    def __contains__(self, item: object) -> bool:
        return item in self._items

    # -------------------- mutation --------------------
    def add(self, item: str) -> None:
        self._replace(self._items + [item])
        logger.debug('Added %r to %r', item, self.key)
        self._after_add(item)

    def remove(self, item: str) -> None:
        before = len(self._items)
        self._replace([x for x in self._items if x != item])
        logger.debug('Removed %d occurrence(s) of %r from %r', before - len(self._items), item, self.key)
        self._after_remove(item)

    def persist(self) -> None:
        self._store(self._items)

    def _replace(self, items: List[str]) -> None:
        # memory only follows a successful write
        self._store(items)
        self._items = items

    def _store(self, items: List[str]) -> None:
        self.storage.set_item(self.key, json.dumps(items, ensure_ascii=False))

    # hooks for subclasses that broadcast
    def _after_add(self, item: str) -> None:
        pass

    def _after_remove(self, item: str) -> None:
        pass

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"{type(self).__name__}(key={self.key!r}, items={len(self._items)})"


class TaskCollection(PersistentCollection):
    def __init__(self, storage: Storage, key: str = TASKS_KEY):
        super().__init__(storage, key)
        self.added = Notifier('tasks.added')
        self.removed = Notifier('tasks.removed')

    def _after_add(self, item: str) -> None:
        self.added.notify(item)

    def _after_remove(self, item: str) -> None:
        self.removed.notify(item)


class LogCollection(PersistentCollection):
    def __init__(self, storage: Storage, key: str = LOGS_KEY):
        super().__init__(storage, key)
