import os
from pathlib import Path

import pytest

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

MAPS_DIR = Path(__file__).resolve().parents[1] / "maps"


@pytest.fixture
def maps_dir() -> Path:
    return MAPS_DIR
