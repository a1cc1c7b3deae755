import io
import wave
from dataclasses import dataclass

import numpy as np

from config import SAMPLE_RATE
from synth import FormatInvariantError

HEADER_SIZE = 44


@dataclass
class WavInfo:
    sample_rate: int
    channels: int
    sample_width: int
    samples: np.ndarray

    @property
    def bits_per_sample(self):
        return self.sample_width * 8

    @property
    def data_bytes(self):
        return len(self.samples) * self.sample_width * self.channels


# ---------------------- Encoding ----------------------
def encode_wav(samples, sample_rate=SAMPLE_RATE):
    """Serialize int16 mono samples into a canonical 44-byte-header PCM WAV."""
    samples = np.asarray(samples)
    if samples.ndim != 1:
        raise FormatInvariantError(f"expected mono samples, got shape {samples.shape}")
    if samples.dtype != np.int16:
        raise FormatInvariantError(f"expected int16 samples, got {samples.dtype}")
    buf = io.BytesIO()
    with wave.open(buf, 'wb') as wf:
        wf.setnchannels(1)
        wf.setsampwidth(2)
        wf.setframerate(sample_rate)
        wf.writeframes(samples.astype('<i2').tobytes())
    return buf.getvalue()

def write_wav(path, samples, sample_rate=SAMPLE_RATE):
    data = encode_wav(samples, sample_rate)
    with open(path, 'wb') as f:
        f.write(data)
    return len(data)

# ---------------------- Decoding ----------------------
def decode_wav(data):
    try:
        with wave.open(io.BytesIO(data), 'rb') as wf:
            channels = wf.getnchannels()
            width = wf.getsampwidth()
            rate = wf.getframerate()
            frames = wf.readframes(wf.getnframes())
    except (wave.Error, EOFError) as exc:
        raise FormatInvariantError(f"not a PCM WAV container: {exc}") from exc
    if width != 2:
        raise FormatInvariantError(f"expected 16-bit samples, got {width * 8}-bit")
    samples = np.frombuffer(frames, dtype='<i2').astype(np.int16)
    if channels > 1:
        samples = samples.reshape(-1, channels)
    return WavInfo(sample_rate=rate, channels=channels, sample_width=width, samples=samples)

def read_wav(path):
    with open(path, 'rb') as f:
        return decode_wav(f.read())
