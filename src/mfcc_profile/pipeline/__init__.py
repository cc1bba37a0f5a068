"""Frame segmentation and the per-frame MFCC pipeline."""

from mfcc_profile.pipeline.mfcc_pipeline import MfccExtractor, split_frames

__all__ = ["MfccExtractor", "split_frames"]
