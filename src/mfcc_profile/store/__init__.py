"""Per-label calibration store and export document."""

from mfcc_profile.store.document import build_document, dumps_document
from mfcc_profile.store.generator import ProfileGenerator
from mfcc_profile.store.ring import FeatureRing

__all__ = [
    "FeatureRing",
    "ProfileGenerator",
    "build_document",
    "dumps_document",
]
