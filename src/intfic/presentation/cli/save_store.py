"""File-system helpers for save storage."""
from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict

from intfic.presentation.cli import config

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9 _.-]")


class SaveStore:
    """Keeps one save file per game name on disk."""

    def __init__(self, base_dir: Path | str | None = None) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else config.get_save_dir()

    def exists(self, name: str) -> bool:
        """Return True if a save for this game name is on disk."""
        return self._save_path(name).exists()

    def read(self, name: str) -> Dict[str, Any]:
        """Load and parse the payload stored for the game name."""
        text = self._save_path(name).read_text(encoding="utf-8")
        return json.loads(text)

    def write(self, name: str, payload: Dict[str, Any]) -> None:
        """Persist the payload, replacing any earlier save of the game."""
        self._base_dir.mkdir(parents=True, exist_ok=True)
        path = self._save_path(name)
        path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")

    def delete(self, name: str) -> None:
        """Delete the save for the game name if it exists."""
        try:
            self._save_path(name).unlink()
        except FileNotFoundError:
            return

    def _save_path(self, name: str) -> Path:
        safe_name = _UNSAFE_FILENAME_CHARS.sub("_", name).strip() or "default"
        return self._base_dir / f"{safe_name}.json"
