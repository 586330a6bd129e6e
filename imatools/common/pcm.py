import os
import wave
import numpy as np


def samples_to_bytes(samples, big_endian=False):
    """Serialize samples as signed 16-bit, saturating out-of-range values."""
    dtype_str = '>i2' if big_endian else '<i2'
    clipped = np.clip(np.asarray(samples, dtype=np.int64), -32768, 32767)
    return clipped.astype(dtype_str).tobytes()


def _ensure_parent(path):
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def write_pcm(samples, path, big_endian=False):
    _ensure_parent(path)
    with open(path, 'wb') as f:
        f.write(samples_to_bytes(samples, big_endian))


def write_wav(samples, path, rate, channels=1):
    """Wrap samples in a 16-bit PCM WAV container."""
    _ensure_parent(path)
    with wave.open(path, 'wb') as wav_file:
        wav_file.setnchannels(channels)
        wav_file.setsampwidth(2)
        wav_file.setframerate(rate)
        wav_file.writeframes(samples_to_bytes(samples))


def dump_payload(data, path):
    """Write the raw ADPCM payload, header already stripped."""
    _ensure_parent(path)
    with open(path, 'wb') as f:
        f.write(data)
