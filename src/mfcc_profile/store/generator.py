"""Calibration store: per-label bounded MFCC history and one-shot export."""

from __future__ import annotations

import logging
from numbers import Integral
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from mfcc_profile.config import ProfileConfig
from mfcc_profile.dsp.scratch import ScratchContext
from mfcc_profile.errors import InvalidArgument
from mfcc_profile.pipeline.mfcc_pipeline import MfccExtractor, split_frames
from mfcc_profile.store.document import build_document, dumps_document
from mfcc_profile.store.ring import FeatureRing

logger = logging.getLogger(__name__)

AudioInput = Union[np.ndarray, Sequence[float]]


class ProfileGenerator:
    """Accumulates MFCC vectors per phoneme/speaker label and exports them.

    Interface:
      generator = ProfileGenerator(ProfileConfig(target_sample_rate=16000, mel_filter_bank_channels=24))
      generator.add_sample(audio, "a", 44100)
      text = generator.finish()   # JSON document; the generator is empty again

    Not internally synchronized: callers sharing one generator across threads
    must serialize add_sample()/finish() themselves. A worker that runs the
    pipeline concurrently should pass its own ScratchContext.
    """

    def __init__(self, config: ProfileConfig, scratch: Optional[ScratchContext] = None):
        self.config = config
        self._extractor = MfccExtractor(config)
        self._scratch = scratch if scratch is not None else ScratchContext()
        self._entries: Dict[str, FeatureRing] = {}

    @classmethod
    def from_options(cls, target_sample_rate: int, mel_filter_bank_channels: int, **options: Any) -> "ProfileGenerator":
        """Build from keyword options (same names as ProfileConfig)."""
        return cls(ProfileConfig(target_sample_rate, mel_filter_bank_channels, **options))

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, label: object) -> bool:
        return label in self._entries

    def labels(self) -> List[str]:
        """Labels in first-insertion order."""
        return list(self._entries)

    def vectors(self, label: str) -> np.ndarray:
        """Stored vectors for label, oldest first, shape (n, mfcc_num)."""
        return self._entries[label].get_all()

    def add_sample(
        self,
        audio: AudioInput,
        label: str,
        input_sample_rate: int,
        scratch: Optional[ScratchContext] = None,
    ) -> int:
        """Extract MFCCs from raw mono audio and store them under label.

        Args:
            audio: Mono samples at input_sample_rate.
            label: Phoneme / speaker name.
            input_sample_rate: Rate of audio in Hz.
            scratch: Buffers to use instead of the generator's own.

        Returns:
            Number of feature vectors accepted from this sample.

        Raises:
            InvalidArgument: Empty or multi-channel audio, non-string label or
                non-positive sample rate. The store is left unchanged.
        """
        if not isinstance(label, str):
            raise InvalidArgument(f"label must be a string, got {type(label).__name__}")
        if isinstance(input_sample_rate, bool) or not isinstance(input_sample_rate, Integral) or input_sample_rate <= 0:
            raise InvalidArgument(f"input_sample_rate must be a positive integer, got {input_sample_rate!r}")
        samples = np.asarray(audio, dtype=np.float32)
        if samples.ndim != 1:
            raise InvalidArgument(f"audio must be mono (1-D), got shape {samples.shape}")
        if samples.size == 0:
            raise InvalidArgument("Audio data is empty")

        scratch = scratch if scratch is not None else self._scratch
        rate = int(input_sample_rate)
        accepted = 0
        rejected = 0
        for frame in split_frames(samples, self.config.sample_count):
            vector = self._extractor.extract_frame(frame, rate, scratch)
            if vector is None:
                rejected += 1
                continue
            ring = self._entries.get(label)
            if ring is None:
                ring = FeatureRing(self.config.mfcc_data_count, self.config.mfcc_num)
                self._entries[label] = ring
            ring.push(vector)
            accepted += 1

        if rejected:
            logger.debug("%s: %d frame(s) rejected", label, rejected)
        return accepted

    def document(self) -> Dict[str, Any]:
        """Current contents as the export mapping, without draining."""
        return build_document(
            self.config,
            {name: ring.get_all() for name, ring in self._entries.items()},
        )

    def finish(self) -> str:
        """Export the profile as pretty-printed JSON and empty the store.

        The configuration is kept, so the generator can be reused. Entries are
        cleared even when encoding fails.

        Raises:
            SerializationFailure: The document could not be encoded.
        """
        try:
            document = self.document()
            text = dumps_document(document)
        finally:
            self._entries.clear()
        logger.info(
            "exported %d label(s), %d vector(s)",
            len(document["mfccs"]),
            sum(len(entry["mfccCalibrationDataList"]) for entry in document["mfccs"]),
        )
        return text
