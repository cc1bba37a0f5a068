"""Export document layout.

{
  "mfccNum": 12,
  "mfccDataCount": 16,
  "melFilterBankChannels": 24,
  "targetSampleRate": 16000,
  "sampleCount": 1024,
  "useStandardization": 0,
  "compareMethod": 1,
  "mfccs": [
    {"name": "a", "mfccCalibrationDataList": [{"array": [...]}, ...]},
    ...
  ]
}
"""

import json
from typing import Any, Dict, Mapping

import numpy as np

from mfcc_profile.config import ProfileConfig
from mfcc_profile.errors import SerializationFailure


def build_document(config: ProfileConfig, entries: Mapping[str, np.ndarray]) -> Dict[str, Any]:
    """Assemble the export mapping from configuration and per-label vectors."""
    return {
        "mfccNum": config.mfcc_num,
        "mfccDataCount": config.mfcc_data_count,
        "melFilterBankChannels": config.mel_filter_bank_channels,
        "targetSampleRate": config.target_sample_rate,
        "sampleCount": config.sample_count,
        "useStandardization": 1 if config.use_standardization else 0,
        "compareMethod": int(config.compare_method),
        "mfccs": [
            {
                "name": name,
                "mfccCalibrationDataList": [{"array": row.tolist()} for row in vectors],
            }
            for name, vectors in entries.items()
        ],
    }


def dumps_document(document: Mapping[str, Any]) -> str:
    """Pretty-print the document as JSON.

    Raises:
        SerializationFailure: The document holds values JSON cannot encode
            (including NaN / infinity).
    """
    try:
        return json.dumps(document, indent=2, allow_nan=False)
    except (TypeError, ValueError) as exc:
        raise SerializationFailure(f"Serialization error: {exc}") from exc
