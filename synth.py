import logging
from dataclasses import dataclass

import numpy as np
from config import *

logger = logging.getLogger(__name__)


class FormatInvariantError(ValueError):
    """Raised when a buffer or container would be malformed."""


@dataclass(frozen=True)
class SynthesisParameters:
    frequency: float
    duration: float
    sample_rate: int = SAMPLE_RATE


@dataclass(frozen=True)
class EffectParameters:
    echo_delays: tuple = ECHO_DELAYS
    echo_decays: tuple = ECHO_DECAYS
    bit_depth: int = BIT_DEPTH
    min_bit_depth: int = MIN_BIT_DEPTH
    downsample: int = DOWNSAMPLE
    noise_amount: float = NOISE_AMOUNT
    clip_threshold: float = CLIP_THRESHOLD
    master_clip_threshold: float = MASTER_CLIP_THRESHOLD
    tail: float = ECHO_TAIL

    def total_duration(self, duration):
        return duration + max(self.echo_delays, default=0.0) + self.tail


DEFAULT_EFFECTS = EffectParameters()

# ---------------------- Primitives ----------------------
def num_samples(duration, sample_rate=SAMPLE_RATE):
    n = int(round(sample_rate * duration))
    if n < 0:
        raise FormatInvariantError(f"negative buffer length {n} for duration {duration}")
    return n

def soft_clip(x, threshold):
    """Linear below threshold, tanh-saturating above; |output| stays below 1."""
    x = np.asarray(x, dtype=np.float64)
    mag = np.abs(x)
    knee = threshold + (1.0 - threshold) * np.tanh((mag - threshold) / (1.0 - threshold))
    out = np.where(mag < threshold, x, np.where(x >= 0, 1.0, -1.0) * knee)
    return out if out.ndim else float(out)

def round_half_away(x):
    return np.sign(x) * np.floor(np.abs(x) + 0.5)

def crush_depth(extra_crush, params=DEFAULT_EFFECTS):
    if extra_crush < 0:
        raise FormatInvariantError(f"extra_crush must be non-negative, got {extra_crush}")
    return max(params.bit_depth - extra_crush, params.min_bit_depth)

# ---------------------- Sparkle voice ----------------------
def generate_wave(frequency, duration, sample_rate=SAMPLE_RATE):
    n = num_samples(duration, sample_rate)
    t = np.arange(n, dtype=np.float64) / sample_rate
    amplitude = VOICE_AMPLITUDE * np.exp(-ENV_DECAY_RATE * t)
    sweep = frequency * (1.0 + SWEEP_RATE * t)
    wave = np.sin(2*np.pi*sweep*t)
    wave += 0.4 * np.sin(3*np.pi*sweep*t)
    wave += 0.2 * np.sin(5*np.pi*sweep*t)
    # slightly detuned layer for thickness
    wave += 0.3 * np.sin(2*np.pi*(sweep*DETUNE)*t)
    return wave * amplitude

def apply_retro_effects(samples, rng, extra_crush=0, params=DEFAULT_EFFECTS):
    """Downsample, bit-crush, dither and soft-clip a buffer.

    The hold index is taken from the input itself (index floor), so the
    output aliases instead of averaging. ``rng`` is consumed one draw per
    sample, in index order.
    """
    samples = np.asarray(samples, dtype=np.float64)
    n = len(samples)
    if n == 0:
        return samples.copy()
    depth = crush_depth(extra_crush, params)

    held_idx = np.minimum((np.arange(n) // params.downsample) * params.downsample, n - 1)
    v = samples[held_idx]

    steps = float(2 ** depth)
    v = round_half_away(v * steps) / steps
    v = v + (rng.random(n) - 0.5) * params.noise_amount
    return soft_clip(v, params.clip_threshold)

def mix_with_echoes(dry, source, total_samples, rng, params=DEFAULT_EFFECTS,
                    sample_rate=SAMPLE_RATE):
    """Sum the dry signal and progressively crushed echo taps into one buffer.

    Each tap re-runs the effect chain on ``source`` (the pre-effect voice)
    with one more bit of crush than the tap before it.
    """
    if total_samples < 0:
        raise FormatInvariantError(f"negative buffer length {total_samples}")
    mix = np.zeros(total_samples, dtype=np.float64)
    head = min(len(dry), total_samples)
    mix[:head] += dry[:head]

    for idx, (delay, decay) in enumerate(zip(params.echo_delays, params.echo_decays)):
        offset = int(round(delay * sample_rate))
        echo = apply_retro_effects(source, rng, extra_crush=idx + 1, params=params)
        end = min(offset + len(echo), total_samples)
        if end > offset:
            mix[offset:end] += echo[:end - offset] * decay
    return mix

def quantize_int16(data):
    data = np.asarray(data, dtype=np.float64) * INT16_MAX
    return np.clip(data, INT16_MIN, INT16_MAX).astype(np.int16)

def render_sparkle_float(frequency, duration, rng, params=DEFAULT_EFFECTS,
                         sample_rate=SAMPLE_RATE):
    total_samples = num_samples(params.total_duration(duration), sample_rate)
    source = generate_wave(frequency, duration, sample_rate)
    dry = apply_retro_effects(source, rng, params=params)
    mix = mix_with_echoes(dry, source, total_samples, rng, params, sample_rate)
    return soft_clip(mix, params.master_clip_threshold)

def render_sparkle(frequency, duration, rng, params=DEFAULT_EFFECTS,
                   sample_rate=SAMPLE_RATE):
    data = render_sparkle_float(frequency, duration, rng, params, sample_rate)
    logger.debug("rendered %.0f Hz sparkle: %d samples, peak %.3f",
                 frequency, len(data), float(np.max(np.abs(data), initial=0.0)))
    return quantize_int16(data)
