"""MFCC calibration profiles - DSP primitives, spectral engine, pipeline, per-label store."""

from mfcc_profile.config import MFCC_SIZE, CompareMethod, ProfileConfig
from mfcc_profile.dsp.scratch import ScratchContext
from mfcc_profile.errors import InvalidArgument, ProfileError, SerializationFailure
from mfcc_profile.pipeline import MfccExtractor
from mfcc_profile.store import ProfileGenerator

__all__ = [
    "MFCC_SIZE",
    "CompareMethod",
    "InvalidArgument",
    "MfccExtractor",
    "ProfileConfig",
    "ProfileError",
    "ProfileGenerator",
    "ScratchContext",
    "SerializationFailure",
]
