"""Audio loading and recording."""

from mfcc_profile.audio.collector import AudioCollector, pcm_to_float

__all__ = ["AudioCollector", "pcm_to_float"]
