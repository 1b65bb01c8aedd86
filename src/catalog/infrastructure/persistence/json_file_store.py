"""Shared file helpers for the JSON-backed repositories."""

from __future__ import annotations

import json
import os
from pathlib import Path


class JsonFileStore:
    """A JSON array on disk, rewritten atomically on every save."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    def load(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def persist(self, rows: list[dict]) -> None:
        tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(rows, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp_path, self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
