"""DSP primitives, spectral engine and scratch buffers."""

from mfcc_profile.dsp.filters import (
    downsample,
    hamming,
    low_pass_filter,
    normalize,
    pre_emphasis,
)
from mfcc_profile.dsp.scratch import ScratchContext
from mfcc_profile.dsp.spectral import (
    dct,
    magnitude_spectrum,
    mel_filter_bank,
    power_to_db,
)

__all__ = [
    "ScratchContext",
    "dct",
    "downsample",
    "hamming",
    "low_pass_filter",
    "magnitude_spectrum",
    "mel_filter_bank",
    "normalize",
    "power_to_db",
    "pre_emphasis",
]
