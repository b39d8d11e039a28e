"""Persisted answers from previous runs.

The generators remember the last answers under two keys, ``projectSettings``
and ``componentSettings``, and offer them as defaults next time. The store is
a small key-value interface so the prompts never touch a global; the default
implementation keeps a JSON file in the working directory.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Protocol

PROJECT_SETTINGS_KEY = "projectSettings"
COMPONENT_SETTINGS_KEY = "componentSettings"


class SettingsStore(Protocol):
    """Minimal key-value interface used by the prompts."""

    def get(self, key: str) -> Any: ...

    def set(self, key: str, value: Any) -> None: ...


class MemorySettingsStore:
    """In-memory store, used for ``--yes`` runs and tests."""

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self.data: dict[str, Any] = dict(data or {})

    def get(self, key: str) -> Any:
        return self.data.get(key)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value


class JsonSettingsStore:
    """Stores settings in a pretty-printed JSON file.

    A missing or corrupted file reads as empty; it is rewritten on the next
    :meth:`set`.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> dict[str, Any]:
        if not self.path.is_file():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            # Corrupted settings -- start fresh.
            return {}
        return data if isinstance(data, dict) else {}

    def get(self, key: str) -> Any:
        return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(data, indent=2, ensure_ascii=False, default=str) + "\n",
            encoding="utf-8",
        )
