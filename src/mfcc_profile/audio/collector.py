"""Mono float32 audio input for calibration: WAV files or the microphone."""

from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
import scipy.io.wavfile as wavfile

try:
    import sounddevice as sd
except ImportError:
    sd = None  # type: ignore


def pcm_to_float(audio: np.ndarray) -> np.ndarray:
    """Scale integer PCM to [-1, 1] and mix multi-channel audio down to mono."""
    if audio.dtype == np.uint8:
        audio = (audio.astype(np.float32) - 128) / 128
    elif np.issubdtype(audio.dtype, np.integer):
        audio = audio.astype(np.float32) / -np.iinfo(audio.dtype).min
    else:
        audio = audio.astype(np.float32)
    if audio.ndim == 2:
        audio = audio.mean(axis=1)
    return audio


class AudioCollector:
    """Loads WAV files or records from the microphone as mono float32."""

    def __init__(self, sample_rate: int = 16_000):
        self.sample_rate = sample_rate

    def load_wav(self, filepath: Union[str, Path]) -> Tuple[np.ndarray, int]:
        """Read a WAV file.

        Returns:
            (mono float32 samples in [-1, 1], sample rate in Hz)
        """
        sr, audio = wavfile.read(str(filepath))
        return pcm_to_float(audio), int(sr)

    def record_chunk(
        self,
        duration_sec: float,
        device: Optional[int] = None,
    ) -> np.ndarray:
        """Capture duration_sec of one-channel audio at self.sample_rate.

        Raises:
            ImportError: sounddevice is not installed (extra "record").
        """
        if sd is None:
            raise ImportError("recording needs sounddevice: pip install mfcc-profile[record]")

        samples = int(duration_sec * self.sample_rate)
        rec = sd.rec(
            samples,
            samplerate=self.sample_rate,
            channels=1,
            dtype="float32",
            device=device,
        )
        sd.wait()
        return pcm_to_float(rec).reshape(samples)
