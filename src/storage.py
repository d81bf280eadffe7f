"""Flat key-value persistence for tasklog.

Every key maps to a string (collections store their JSON array text under
"tasks" and "logs"). The whole map lives in one JSON object on disk and is
rewritten on each write. Missing file -> empty store. A corrupt file is
reported and treated as empty; the next write replaces it. Text that
cannot be encoded as UTF-8 raises UnicodeEncodeError before anything changes.
"""
import json
import logging
import os
from pathlib import Path
from typing import Dict, List, Optional, Union

logger = logging.getLogger(__name__)


class Storage:
    def __init__(self, path: Optional[Union[str, Path]]):
        """path=None keeps the map in memory only (nothing touches disk)."""
        self.path: Optional[Path] = Path(path) if path is not None else None
        self._data: Dict[str, str] = self._read()

    # -------------------- reading --------------------
    def _read(self) -> Dict[str, str]:
        if self.path is None or not self.path.exists():
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning('Ignoring unreadable store %s: %s', self.path, e)
            return {}
        if not isinstance(raw, dict):
            logger.warning('Ignoring store %s: expected a JSON object, got %s', self.path, type(raw).__name__)
            return {}
        data: Dict[str, str] = {}
        for key, value in raw.items():
            if isinstance(value, str):
                data[key] = value
            else:
                logger.warning('Dropping non-string value for key %r in %s', key, self.path)
        return data

    # -------------------- key-value api --------------------
    def get_item(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_item(self, key: str, value: str) -> None:
        data = dict(self._data)
        data[key] = value
        self._commit(data)

    def remove_item(self, key: str) -> None:
        if key in self._data:
            data = dict(self._data)
            del data[key]
            self._commit(data)

    def keys(self) -> List[str]:
        return list(self._data)

    # -------------------- writing --------------------
    def _commit(self, data: Dict[str, str]) -> None:
        """Write data, then adopt it; a failed write leaves the old map in place."""
        payload = json.dumps(data, indent=4, ensure_ascii=False).encode('utf-8')
        if self.path is not None:
            self._write(payload)
            logger.debug('Wrote %d key(s) to %s', len(data), self.path)
        self._data = data

    def _write(self, payload: bytes) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + '.tmp')
        try:
            with open(tmp, 'wb') as f:
                f.write(payload)
            os.replace(tmp, self.path)
        finally:
            if tmp.exists():
                tmp.unlink()

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Storage(path={self.path}, keys={self.keys()})"
