"""
Answer input mode ("math" editor vs plain "text") and its persisted preference.

The mode is read once when the answer input is created and passed in; in math
mode the editor's LaTeX goes through latex_to_plain before submission.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from core.config import settings
from core.logger import logger
from services.latex_to_plain import latex_to_plain

InputMode = Literal["math", "text"]

INPUT_MODES = ("math", "text")
DEFAULT_INPUT_MODE: InputMode = "math"
INPUT_MODE_KEY = "answer_input_mode"


class PreferenceStore:
    """Small JSON key/value file for client preferences."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else settings.preferences_file

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable preferences file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed preferences file %s", self.path)
            return {}
        return data

    def get(self, key: str, default: Any = None) -> Any:
        return self._load().get(key, default)

    def set(self, key: str, value: Any) -> None:
        data = self._load()
        data[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.debug("Saved preference %s=%r to %s", key, value, self.path)


def load_input_mode(store: PreferenceStore) -> InputMode:
    """Stored input mode, or "math" when absent or not a known mode."""
    mode = store.get(INPUT_MODE_KEY)
    if mode in INPUT_MODES:
        return mode
    if mode is not None:
        logger.warning("Unknown input mode %r in preferences, using %s", mode, DEFAULT_INPUT_MODE)
    return DEFAULT_INPUT_MODE


def save_input_mode(store: PreferenceStore, mode: str) -> None:
    if mode not in INPUT_MODES:
        raise ValueError(f"Unknown input mode: {mode!r}")
    store.set(INPUT_MODE_KEY, mode)


class AnswerInput:
    """Turns what the student typed into the answer string sent for grading."""

    def __init__(self, mode: InputMode = DEFAULT_INPUT_MODE) -> None:
        if mode not in INPUT_MODES:
            raise ValueError(f"Unknown input mode: {mode!r}")
        self.mode = mode

    def prepare(self, raw: str) -> Optional[str]:
        """Submittable answer, or None when there is nothing to submit."""
        if not raw or not raw.strip():
            return None
        if self.mode == "math":
            answer = latex_to_plain(raw)
        else:
            answer = raw.strip()
        return answer or None

    def toggle(self) -> InputMode:
        self.mode = "text" if self.mode == "math" else "math"
        return self.mode
