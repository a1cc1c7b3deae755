"""Retro sparkle asset cache.

Renders one WAV per preset frequency into the sounds directory and records
the sound-design version in a marker file written after the last asset. A
directory whose marker matches ``ASSET_VERSION`` and which holds every asset
is left alone; anything else is wiped and regenerated.
"""
import logging
import os
import tempfile
from pathlib import Path

import numpy as np

from config import (ASSET_VERSION, GENERATION_SEED, SOUNDS_DIR,
                    SPARKLE_DURATION, SPARKLE_FREQUENCIES, VERSION_FILENAME)
from synth import SynthesisParameters, render_sparkle
from wav_codec import encode_wav

logger = logging.getLogger(__name__)

PRESETS = tuple(SynthesisParameters(frequency=float(freq), duration=SPARKLE_DURATION)
                for freq in SPARKLE_FREQUENCIES)


class SoundCacheError(Exception):
    """Raised when the sounds directory cannot be read or written."""


def asset_filename(index):
    return f"sparkle_{index}.wav"


class SparkleGenerator:
    """Keeps the sounds directory in sync with the current sound design."""

    def __init__(self, sounds_dir=None, presets=PRESETS, version=ASSET_VERSION):
        self.sounds_dir = Path(sounds_dir) if sounds_dir is not None else Path(SOUNDS_DIR)
        self.presets = tuple(presets)
        self.version = version

    @property
    def asset_paths(self):
        return {i: self.sounds_dir / asset_filename(i) for i in range(len(self.presets))}

    @property
    def version_path(self):
        return self.sounds_dir / VERSION_FILENAME

    def is_fresh(self):
        if not self.version_path.is_file():
            return False
        if not all(path.is_file() for path in self.asset_paths.values()):
            return False
        # undecodable marker bytes are just a mismatch
        marker = self.version_path.read_bytes().strip()
        return marker == str(self.version).encode('utf-8')

    def ensure_fresh(self):
        """Regenerate every asset unless the cache is current.

        Returns True when files were (re)written, False when the cache was
        already fresh.
        """
        try:
            self.sounds_dir.mkdir(parents=True, exist_ok=True)
            if self.is_fresh():
                logger.debug("sparkle cache at %s is fresh (v%s)", self.sounds_dir, self.version)
                return False
            logger.info("regenerating %d sparkle sounds in %s (v%s)",
                        len(self.presets), self.sounds_dir, self.version)
            self._clear()
            self._generate_all()
            self._publish(self.version_path, f"{self.version}\n".encode('utf-8'))
        except OSError as exc:
            logger.error("sparkle cache failure in %s: %s", self.sounds_dir, exc)
            raise SoundCacheError(f"cannot prepare sounds in {self.sounds_dir}: {exc}") from exc
        return True

    def invalidate(self):
        """Drop the version marker so the next ensure_fresh() regenerates."""
        try:
            self.version_path.unlink()
        except FileNotFoundError:
            pass

    # ---------- internals ----------
    def _clear(self):
        for path in list(self.sounds_dir.glob('*.wav')) + self._temp_files():
            try:
                path.unlink()
            except FileNotFoundError:
                pass
        self.invalidate()

    def _temp_files(self):
        # only leftovers of _publish; other temp files in the directory are not ours
        names = [asset_filename(i) for i in range(len(self.presets))] + [VERSION_FILENAME]
        return [p for name in names for p in self.sounds_dir.glob(f"{name}*.tmp")]

    def _generate_all(self):
        # one generator for the whole batch keeps output identical run to run
        rng = np.random.default_rng(GENERATION_SEED)
        for index, preset in enumerate(self.presets):
            samples = render_sparkle(preset.frequency, preset.duration, rng,
                                     sample_rate=preset.sample_rate)
            size = self._publish(self.asset_paths[index], encode_wav(samples, preset.sample_rate))
            logger.debug("wrote %s (%.0f Hz, %d bytes)", self.asset_paths[index].name,
                         preset.frequency, size)

    def _publish(self, path, data):
        fd, tmp = tempfile.mkstemp(dir=self.sounds_dir, prefix=path.name, suffix='.tmp')
        try:
            with os.fdopen(fd, 'wb') as f:
                f.write(data)
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        return len(data)
