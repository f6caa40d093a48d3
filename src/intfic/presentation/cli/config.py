"""CLI configuration helpers for options persistence."""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

from intfic.core.config import StoryConfig

_DEFAULT_TEXT_MODE = "instant"
DEBUG_ENV_VAR = "INTFIC_DEBUG"


def get_user_data_dir() -> Path:
    """Return the per-user data directory."""
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            return Path(base) / "intfic"
        return Path.home() / "intfic"
    return Path.home() / ".local" / "share" / "intfic"


def get_default_config_path() -> Path:
    """Return the default per-user config path."""
    return get_user_data_dir() / "config.json"


def get_save_dir() -> Path:
    """Return the per-user save directory."""
    return get_user_data_dir() / "saves"


def debug_enabled() -> bool:
    """Return True only when INTFIC_DEBUG is explicitly set to '1'."""
    return os.getenv(DEBUG_ENV_VAR) == "1"


def _normalize_text_mode(value: object) -> str:
    return "typewriter" if value == "typewriter" else _DEFAULT_TEXT_MODE


def _default_config() -> Dict[str, Any]:
    return {"text_display_mode": _DEFAULT_TEXT_MODE, "debug": False}


def load_config(path: Path | None = None) -> Dict[str, Any]:
    """Load config from disk or return defaults."""
    config_path = path or get_default_config_path()
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return _default_config()
    if not isinstance(raw, dict):
        return _default_config()
    return {
        "text_display_mode": _normalize_text_mode(raw.get("text_display_mode")),
        "debug": raw.get("debug") is True,
    }


def save_config(config: Dict[str, Any], path: Path | None = None) -> None:
    """Persist config to disk."""
    config_path = path or get_default_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "text_display_mode": _normalize_text_mode(config.get("text_display_mode")),
        "debug": config.get("debug") is True,
    }
    config_path.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")


def build_story_config(options: Dict[str, Any]) -> StoryConfig:
    """Turn persisted options (plus the debug env var) into a StoryConfig."""
    return StoryConfig(
        debug=options.get("debug") is True or debug_enabled(),
        fast_mode=_normalize_text_mode(options.get("text_display_mode")) == "instant",
    )
