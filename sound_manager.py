import logging
import random

import pygame

from config import AUDIO_BUFFER, BITSIZE, CHANNELS, SAMPLE_RATE
from sparkle_generator import SparkleGenerator

logger = logging.getLogger(__name__)


def init_mixer():
    if not pygame.mixer.get_init():
        pygame.mixer.pre_init(SAMPLE_RATE, BITSIZE, CHANNELS, AUDIO_BUFFER)
        pygame.mixer.init()
    return pygame.mixer.get_init()


class SoundManager:
    """Loads the generated sparkles and plays a random one on request."""

    def __init__(self, generator=None, loader=None, rng=None):
        self.generator = generator if generator is not None else SparkleGenerator()
        self.rng = rng if rng is not None else random
        if loader is None:
            init_mixer()
            loader = pygame.mixer.Sound

        self.generator.ensure_fresh()
        paths = sorted(self.generator.sounds_dir.glob('*.wav'))
        self.sounds = [loader(str(path)) for path in paths]
        logger.info("loaded %d sparkle sounds from %s", len(self.sounds),
                    self.generator.sounds_dir)

    def __len__(self):
        return len(self.sounds)

    def play(self):
        # fire and forget: returns the channel (or None when all are busy)
        if not self.sounds:
            return None
        return self.rng.choice(self.sounds).play()
