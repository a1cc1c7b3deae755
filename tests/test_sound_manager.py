"""
Unit tests for SoundManager playback selection
"""

import random

from sound_manager import SoundManager
from sparkle_generator import SparkleGenerator


class EmptyGenerator:
    """Generator that never produces anything."""

    def __init__(self, sounds_dir):
        self.sounds_dir = sounds_dir
        self.calls = 0

    def ensure_fresh(self):
        self.calls += 1
        return False


class FirstChoice:
    def choice(self, seq):
        return seq[0]


class TestSoundManager:

    def test_generates_then_loads_all_sparkles(self, sounds_dir, fake_sound_loader):
        manager = SoundManager(SparkleGenerator(sounds_dir), loader=fake_sound_loader)
        assert len(manager) == 5
        assert [s.path.rsplit('/', 1)[-1] for s in manager.sounds] == [
            f"sparkle_{i}.wav" for i in range(5)
        ]

    def test_play_triggers_one_sound(self, sounds_dir, fake_sound_loader):
        manager = SoundManager(SparkleGenerator(sounds_dir), loader=fake_sound_loader,
                               rng=FirstChoice())
        assert manager.play() == "channel"
        assert [s.plays for s in manager.sounds] == [1, 0, 0, 0, 0]

    def test_play_is_random_over_bank(self, sounds_dir, fake_sound_loader):
        manager = SoundManager(SparkleGenerator(sounds_dir), loader=fake_sound_loader,
                               rng=random.Random(7))
        for _ in range(200):
            manager.play()
        plays = [s.plays for s in manager.sounds]
        assert sum(plays) == 200
        assert all(count > 0 for count in plays)

    def test_empty_bank_play_is_noop(self, temp_dir, fake_sound_loader):
        generator = EmptyGenerator(temp_dir)
        manager = SoundManager(generator, loader=fake_sound_loader)
        assert generator.calls == 1
        assert len(manager) == 0
        assert manager.play() is None
