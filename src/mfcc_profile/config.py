"""Centralized profile and feature extraction configuration.

Encoding standards:
- Audio: mono float32, any input rate, downsampled to target_sample_rate
- Frames: non-overlapping, sample_count samples (default 1024)
- Features: 12 MFCCs per frame (cepstrum index 1..12, index 0 dropped)
- Mel scale: 1127 * ln(1 + f / 700), filters from 0 Hz to Nyquist
- Calibration: at most mfcc_data_count vectors kept per label (FIFO)
"""

from dataclasses import dataclass
from enum import IntEnum
from numbers import Integral
from typing import Union

from mfcc_profile.errors import InvalidArgument

# Exposed coefficients per feature vector
MFCC_SIZE = 12

# Anti-aliasing low-pass transition band width (Hz)
LOW_PASS_TRANSITION_HZ = 500.0

PRE_EMPHASIS_COEFF = 0.97
NORMALIZE_PEAK = 1.0


class CompareMethod(IntEnum):
    """Similarity method recorded in the profile for the downstream consumer."""

    L1_NORM = 0
    L2_NORM = 1
    COSINE_SIMILARITY = 2


@dataclass(frozen=True)
class ProfileConfig:
    """Calibration profile configuration, fixed for the lifetime of a generator."""

    target_sample_rate: int
    mel_filter_bank_channels: int

    # Samples per analysis frame
    sample_count: int = 1024

    # Max stored vectors per label
    mfcc_data_count: int = 16

    # Passthrough metadata only
    compare_method: Union[CompareMethod, int] = CompareMethod.L2_NORM
    use_standardization: bool = False

    def __post_init__(self) -> None:
        _require_int("target_sample_rate", self.target_sample_rate)
        if self.target_sample_rate <= 2 * LOW_PASS_TRANSITION_HZ:
            raise InvalidArgument(
                f"target_sample_rate must exceed {2 * LOW_PASS_TRANSITION_HZ:g} Hz, "
                f"got {self.target_sample_rate}"
            )
        _require_int("mel_filter_bank_channels", self.mel_filter_bank_channels)
        if self.mel_filter_bank_channels <= MFCC_SIZE:
            raise InvalidArgument(
                f"mel_filter_bank_channels must be greater than {MFCC_SIZE}, "
                f"got {self.mel_filter_bank_channels}"
            )
        _require_int("sample_count", self.sample_count)
        if self.sample_count < 1:
            raise InvalidArgument(f"sample_count must be >= 1, got {self.sample_count}")
        _require_int("mfcc_data_count", self.mfcc_data_count)
        if self.mfcc_data_count < 1:
            raise InvalidArgument(f"mfcc_data_count must be >= 1, got {self.mfcc_data_count}")
        try:
            method = CompareMethod(self.compare_method)
        except ValueError as exc:
            raise InvalidArgument(f"unknown compare_method: {self.compare_method!r}") from exc
        # Frozen dataclass: normalize through object.__setattr__
        for name in ("target_sample_rate", "mel_filter_bank_channels", "sample_count", "mfcc_data_count"):
            object.__setattr__(self, name, int(getattr(self, name)))
        object.__setattr__(self, "compare_method", method)
        object.__setattr__(self, "use_standardization", bool(self.use_standardization))

    @property
    def mfcc_num(self) -> int:
        """Length of every feature vector produced with this configuration."""
        return MFCC_SIZE

    @property
    def low_pass_cutoff(self) -> float:
        """Anti-aliasing cutoff in Hz (Nyquist of the target rate)."""
        return self.target_sample_rate / 2


def _require_int(name: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
