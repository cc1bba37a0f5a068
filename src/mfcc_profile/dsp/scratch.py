"""Per-worker reusable buffers for the MFCC pipeline."""

import logging
from typing import Dict, Optional, Tuple

import numpy as np

from mfcc_profile.dsp.filters import low_pass_kernel
from mfcc_profile.dsp.spectral import mel_filter_weights

logger = logging.getLogger(__name__)


class ScratchContext:
    """Growable work buffers owned by one worker.

    Buffers are handed out as views of the requested length and only grow
    when a larger shape is asked for, so once frame size, rates and mel
    channel count are stable no further allocation happens. Designed kernels,
    windows and mel filter banks are cached alongside; each cache keeps
    only its most recent key, so a stream of varying rates or frame lengths
    does not accumulate kernels.

    Not safe to share between threads running the pipeline concurrently:
    give each worker its own instance.
    """

    def __init__(self) -> None:
        self._buffers: Dict[str, np.ndarray] = {}
        self._kernels: Dict[Tuple[int, float, float], Optional[np.ndarray]] = {}
        self._windows: Dict[int, np.ndarray] = {}
        self._mel_weights: Dict[Tuple[int, float, int], np.ndarray] = {}
        self.allocations = 0

    def _take(self, name: str, size: int, dtype: type) -> np.ndarray:
        buf = self._buffers.get(name)
        if buf is None or buf.shape[0] < size:
            logger.debug("scratch %s: growing to %d", name, size)
            buf = np.zeros(size, dtype=dtype)
            self._buffers[name] = buf
            self.allocations += 1
        return buf[:size]

    def signal(self, size: int) -> np.ndarray:
        """Working copy of the input frame (filtered in place)."""
        return self._take("signal", size, np.float32)

    def resampled(self, size: int) -> np.ndarray:
        return self._take("resampled", size, np.float32)

    def transform(self, size: int) -> np.ndarray:
        """Complex scratch for the Fourier transform."""
        return self._take("transform", size, np.complex64)

    def spectrum(self, size: int) -> np.ndarray:
        return self._take("spectrum", size, np.float32)

    def mel(self, channels: int) -> np.ndarray:
        return self._take("mel", channels, np.float32)

    def cepstrum(self, channels: int) -> np.ndarray:
        return self._take("cepstrum", channels, np.float32)

    def low_pass_kernel(
        self,
        sample_rate: int,
        cutoff: float,
        transition: float,
    ) -> Optional[np.ndarray]:
        """Cached low_pass_kernel(); None means the filter is a pass-through."""
        key = (sample_rate, cutoff, transition)
        if key not in self._kernels:
            self._kernels = {key: low_pass_kernel(sample_rate, cutoff, transition)}
        return self._kernels[key]

    def hamming_window(self, size: int) -> np.ndarray:
        window = self._windows.get(size)
        if window is None:
            window = np.hamming(size).astype(np.float32)
            self._windows = {size: window}
        return window

    def mel_weights(self, n_bins: int, sample_rate: float, channels: int) -> np.ndarray:
        key = (n_bins, sample_rate, channels)
        weights = self._mel_weights.get(key)
        if weights is None:
            weights = mel_filter_weights(n_bins, sample_rate, channels)
            self._mel_weights = {key: weights}
        return weights
