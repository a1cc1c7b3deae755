"""
Pytest fixtures for sparkle shapes tests.
"""
import pytest
import sys
import os
from pathlib import Path
import tempfile
import shutil

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

# pygame must not open a real audio/video device during tests
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")


@pytest.fixture
def sample_rate():
    """Sample rate every sparkle is rendered at."""
    return 44100


@pytest.fixture
def temp_dir():
    """Create temporary directory for test outputs."""
    tmp = tempfile.mkdtemp()
    yield Path(tmp)
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def sounds_dir(temp_dir):
    """Sounds directory that does not exist yet."""
    return temp_dir / "sounds"


class FakeSound:
    """Stands in for pygame.mixer.Sound; counts play() calls."""

    def __init__(self, path):
        self.path = path
        self.plays = 0

    def play(self):
        self.plays += 1
        return "channel"


@pytest.fixture
def fake_sound_loader():
    return FakeSound
