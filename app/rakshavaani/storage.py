"""Append-only history of completed results.

Writes are best-effort: a failing disk never fails the request that produced
the record. The pipeline never reads this file back.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rakshavaani.config import Settings
from rakshavaani.utils import utc_now


class HistoryStore:
    def __init__(self, settings: Settings):
        self._enabled = settings.history_enabled
        self._root = Path(settings.local_storage_dir)
        self._history_file = self._root / "logs" / "history.jsonl"

    @property
    def path(self) -> Path:
        return self._history_file

    async def record(self, kind: str, payload: dict[str, Any]) -> bool:
        if not self._enabled:
            return False

        envelope = {
            "timestamp": utc_now().isoformat(),
            "kind": kind,
            "payload": payload,
        }
        try:
            line = json.dumps(envelope, ensure_ascii=True, default=str)
            self._history_file.parent.mkdir(parents=True, exist_ok=True)
            with self._history_file.open("a", encoding="utf-8") as fp:
                fp.write(line + "\n")
        except (OSError, TypeError, ValueError) as exc:
            print(f"[rakshavaani] history_write_failed: {type(exc).__name__}: {exc}")
            return False
        return True
