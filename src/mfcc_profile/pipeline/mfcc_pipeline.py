"""Per-frame MFCC pipeline.

low-pass -> downsample -> pre-emphasis -> Hamming -> normalize ->
|FFT| -> mel filter bank -> dB -> DCT-II -> coefficients 1..12.

Every intermediate lives in a caller-supplied ScratchContext.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Optional

import numpy as np

from mfcc_profile.config import (
    LOW_PASS_TRANSITION_HZ,
    MFCC_SIZE,
    NORMALIZE_PEAK,
    PRE_EMPHASIS_COEFF,
    ProfileConfig,
)
from mfcc_profile.dsp.filters import (
    apply_fir,
    downsample,
    hamming,
    normalize,
    pre_emphasis,
    resampled_length,
)
from mfcc_profile.dsp.scratch import ScratchContext
from mfcc_profile.dsp.spectral import dct, magnitude_spectrum, mel_filter_bank, power_to_db

logger = logging.getLogger(__name__)


def split_frames(audio: np.ndarray, frame_size: int) -> Iterator[np.ndarray]:
    """Yield non-overlapping full frames; a shorter tail is dropped, never padded."""
    n_frames = len(audio) // frame_size
    remainder = len(audio) - n_frames * frame_size
    if remainder:
        logger.debug("discarding %d trailing samples (frame size %d)", remainder, frame_size)
    for i in range(n_frames):
        yield audio[i * frame_size : (i + 1) * frame_size]


class MfccExtractor:
    """Turn fixed-length audio frames into 12-coefficient MFCC vectors.

    Interface:
      extractor = MfccExtractor(ProfileConfig(target_sample_rate=16000, mel_filter_bank_channels=24))
      scratch = ScratchContext()
      vector = extractor.extract_frame(frame, 44100, scratch)   # None if rejected
    """

    def __init__(self, config: ProfileConfig):
        self.config = config

    def extract_frame(
        self,
        frame: np.ndarray,
        input_sample_rate: int,
        scratch: ScratchContext,
    ) -> Optional[np.ndarray]:
        """Run one frame through the pipeline.

        Returns:
            Read-only float32 vector of MFCC_SIZE values, or None when the frame
            produced a non-finite coefficient (e.g. a silent frame).
        """
        target = self.config.target_sample_rate
        channels = self.config.mel_filter_bank_channels

        signal = scratch.signal(len(frame))
        signal[:] = frame
        kernel = scratch.low_pass_kernel(
            input_sample_rate, self.config.low_pass_cutoff, LOW_PASS_TRANSITION_HZ
        )
        apply_fir(signal, kernel)

        n = resampled_length(len(signal), input_sample_rate, target)
        if n == 0:
            return None
        data = downsample(signal, input_sample_rate, target, out=scratch.resampled(n))

        pre_emphasis(data, PRE_EMPHASIS_COEFF)
        hamming(data, window=scratch.hamming_window(n))
        normalize(data, NORMALIZE_PEAK)

        spectrum = magnitude_spectrum(data, out=scratch.spectrum(n), work=scratch.transform(n))
        mel = mel_filter_bank(
            spectrum,
            target,
            channels,
            out=scratch.mel(channels),
            weights=scratch.mel_weights(n, target, channels),
        )
        power_to_db(mel, out=mel)
        cepstrum = dct(mel, out=scratch.cepstrum(channels))

        # Coefficient 0 is overall log-energy
        features = cepstrum[1 : 1 + MFCC_SIZE]
        if not np.isfinite(features).all():
            logger.debug("rejecting frame with non-finite coefficients")
            return None
        vector = features.copy()
        vector.flags.writeable = False
        return vector

    def extract(
        self,
        audio: np.ndarray,
        input_sample_rate: int,
        scratch: Optional[ScratchContext] = None,
    ) -> List[np.ndarray]:
        """Segment audio into frames and return the accepted feature vectors."""
        scratch = scratch or ScratchContext()
        samples = np.asarray(audio, dtype=np.float32)
        vectors = []
        for frame in split_frames(samples, self.config.sample_count):
            vector = self.extract_frame(frame, input_sample_rate, scratch)
            if vector is not None:
                vectors.append(vector)
        return vectors
