"""Configuration management for the math tutor client."""
from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv


def _get_base_dir() -> Path:
    """Get base directory, handling both development and frozen executables."""
    if getattr(sys, 'frozen', False):
        # Frozen builds keep their data in the user's home directory
        if sys.platform == 'win32':
            appdata = os.getenv('APPDATA', os.path.expanduser('~'))
            return Path(appdata) / 'MathTutor'
        return Path.home() / '.math_tutor'
    return Path(__file__).resolve().parents[1]


# Load .env file from project root (only in development)
if not getattr(sys, 'frozen', False):
    env_path = _get_base_dir() / ".env"
    if env_path.exists():
        load_dotenv(env_path)


def _data_dir() -> Path:
    if env_dir := os.getenv("TUTOR_DATA_DIR"):
        return Path(env_dir)
    return _get_base_dir() / "data"


@dataclass
class Settings:
    """Application settings."""

    base_dir: Path = _get_base_dir()
    data_dir: Path = _data_dir()
    host: str = os.getenv("TUTOR_HOST", "127.0.0.1")
    port: int = int(os.getenv("TUTOR_PORT", "8000"))
    log_level: str = os.getenv("TUTOR_LOG_LEVEL", "INFO")
    api_url: str = os.getenv("TUTOR_API_URL", "http://127.0.0.1:8001/api")
    api_timeout: float = float(os.getenv("TUTOR_API_TIMEOUT", "10"))
    preferences_file: Path = field(init=False)

    def __post_init__(self) -> None:
        self.preferences_file = self.data_dir / "preferences.json"


settings = Settings()
