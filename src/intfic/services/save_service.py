"""Serialization helpers for manual save/load."""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Dict, Mapping

from intfic.domain.state import GameState
from intfic.services.errors import SaveLoadError

SavePayload = Dict[str, Any]


class SaveService:
    """Converts game state to/from a validated, versioned payload."""

    SAVE_VERSION = 1

    def serialize(self, state: GameState) -> SavePayload:
        """Return a JSON-serializable payload for disk persistence."""
        return {
            "save_version": self.SAVE_VERSION,
            "metadata": self._build_metadata(state),
            "state": {
                "name": state.name,
                "document": state.document,
                "block": state.block,
                "flags": dict(state.flags),
                "counters": dict(state.counters),
            },
        }

    def deserialize(self, payload: Mapping[str, Any]) -> GameState:
        """Rehydrate a GameState from a persisted payload."""
        if not isinstance(payload, Mapping):
            raise SaveLoadError("Save data must be a JSON object.")
        version = payload.get("save_version")
        if version != self.SAVE_VERSION:
            raise SaveLoadError(f"Unsupported save version: {version!r}.")
        state_payload = payload.get("state")
        if not isinstance(state_payload, Mapping):
            raise SaveLoadError("Save data is missing required sections.")

        state = GameState(name=self._require_str(state_payload.get("name"), "state.name"))
        state.document = self._require_str(state_payload.get("document"), "state.document")
        state.block = self._require_str(state_payload.get("block"), "state.block")
        state.flags = self._coerce_bool_dict(state_payload.get("flags"), "state.flags")
        state.counters = self._coerce_int_dict(state_payload.get("counters"), "state.counters")
        return state

    @staticmethod
    def _build_metadata(state: GameState) -> Dict[str, Any]:
        return {
            "name": state.name,
            "document": state.document,
            "block": state.block,
            "saved_at": datetime.now(timezone.utc).isoformat(),
        }

    @staticmethod
    def _require_str(value: Any, context: str) -> str:
        if not isinstance(value, str):
            raise SaveLoadError(f"{context} must be a string.")
        return value

    @staticmethod
    def _coerce_bool_dict(value: Any, context: str) -> Dict[str, bool]:
        return _typed_mapping(value, context, lambda entry: isinstance(entry, bool), "a boolean")

    @staticmethod
    def _coerce_int_dict(value: Any, context: str) -> Dict[str, int]:
        # bool is an int subclass but never a valid counter value
        return _typed_mapping(
            value,
            context,
            lambda entry: isinstance(entry, int) and not isinstance(entry, bool),
            "an integer",
        )


def _typed_mapping(value: Any, context: str, accepts: Callable[[Any], bool], expected: str) -> Dict[str, Any]:
    if not isinstance(value, Mapping):
        raise SaveLoadError(f"{context} must be an object.")
    for key, entry in value.items():
        if not isinstance(key, str):
            raise SaveLoadError(f"{context} keys must be strings.")
        if not accepts(entry):
            raise SaveLoadError(f"{context}.{key} must be {expected}.")
    return dict(value)
