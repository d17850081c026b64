"""
draft_storage.py
================

Persistence for the team draft.  A :class:`JsonFileStore` is a small
key-value store kept in a single JSON file; :class:`DraftStorage` saves
and restores a :class:`draft_state.DraftState` (and the roster it was
built from) under fixed keys in that store.

A missing or corrupt store never stops the app: it is treated as "no
saved state" and a warning is logged.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, List, Optional

from draft_models import Participant
from draft_state import DraftState

logger = logging.getLogger(__name__)

STATE_KEY = "teamSelectorState"
ROSTER_KEY = "teamSelectorRoster"


class JsonFileStore:
    """Key-value store persisted as one JSON object on disk.

    Parameters
    ----------
    path : str
        Location of the JSON file.  Parent directories are created on the
        first write.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    def _read_all(self) -> Dict[str, Any]:
        if not os.path.isfile(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable store %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring store %s: top-level value is not an object", self.path)
            return {}
        return data

    def _write_all(self, data: Dict[str, Any]) -> None:
        os.makedirs(os.path.dirname(os.path.abspath(self.path)), exist_ok=True)
        tmp = self.path + ".tmp"
        with open(tmp, "w", encoding="utf-8") as fh:
            json.dump(data, fh, ensure_ascii=False, indent=2)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp, self.path)

    def get(self, key: str) -> Any:
        return self._read_all().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def delete(self, key: str) -> None:
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)


class DraftStorage:
    """Save/load adapter between a :class:`DraftState` and a key-value store."""

    def __init__(self, store: JsonFileStore, key: str = STATE_KEY, roster_key: str = ROSTER_KEY) -> None:
        self.store = store
        self.key = key
        self.roster_key = roster_key

    def save(self, state: DraftState) -> None:
        self.store.set(self.key, state.to_dict())

    def load(self) -> Optional[DraftState]:
        """Return the saved state, or None if there is none or it is corrupt."""
        payload = self.store.get(self.key)
        if payload is None:
            return None
        try:
            return DraftState.from_dict(payload)
        except ValueError as exc:
            logger.warning("Discarding corrupt saved draft state: %s", exc)
            return None

    def save_roster(self, participants: List[Participant]) -> None:
        self.store.set(self.roster_key, [p.to_dict() for p in participants])

    def load_roster(self) -> Optional[List[Participant]]:
        payload = self.store.get(self.roster_key)
        if payload is None:
            return None
        try:
            return [Participant.from_dict(p) for p in payload]
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Discarding corrupt saved roster: %s", exc)
            return None

    def clear(self) -> None:
        self.store.delete(self.key)
        self.store.delete(self.roster_key)
