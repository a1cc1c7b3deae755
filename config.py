import os
from pathlib import Path

# ---------------------- Audio ----------------------
SAMPLE_RATE = 44100
BITSIZE = -16          # 16-bit signed
CHANNELS = 1
AUDIO_BUFFER = 512
INT16_MAX = 32767
INT16_MIN = -32768

# ---------------------- Sparkle voice ----------------------
ENV_DECAY_RATE = 35.0   # exp(-35t)
VOICE_AMPLITUDE = 0.08
SWEEP_RATE = 1.5        # pitch rises 150% per second
DETUNE = 1.01

# Echo settings - longer delays for retro feel
ECHO_DELAYS = (0.08, 0.18, 0.30)
ECHO_DECAYS = (0.5, 0.3, 0.15)
ECHO_TAIL = 0.1

# Retro effect settings
BIT_DEPTH = 6           # lower = more crunchy
MIN_BIT_DEPTH = 3
DOWNSAMPLE = 4          # sample-and-hold factor
NOISE_AMOUNT = 0.02
CLIP_THRESHOLD = 0.15
MASTER_CLIP_THRESHOLD = 0.12

# ---------------------- Asset cache ----------------------
SPARKLE_FREQUENCIES = (1800, 2200, 2800, 3200, 3800)
SPARKLE_DURATION = 0.1
ASSET_VERSION = 1       # bump whenever the sound design changes
GENERATION_SEED = 42
VERSION_FILENAME = '.version'
SOUNDS_DIR = Path(os.environ.get('SPARKLE_SOUNDS_DIR',
                                 Path(__file__).resolve().parent / 'sounds'))

# ---------------------- Scene ----------------------
FPS = 60
WINDOW_SIZE = (800, 600)
MAX_SPEED = 4.0         # cap velocity so collisions don't accumulate energy
SHAPE_COLOR_SPEED = 0.015
BACKGROUND_SPEED = 0.003

SHAPE_CIRCLE = 0
SHAPE_SQUARE = 1
SHAPE_TRIANGLE = 2
