"""Pytest configuration for tests."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Add the project root to the Python path
# This allows imports like "from services.latex_to_plain ..." to work
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


@pytest.fixture
def prefs_path(tmp_path: Path) -> Path:
    return tmp_path / "prefs" / "preferences.json"
