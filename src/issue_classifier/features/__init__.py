"""
Feature engineering layer.

Turns issue text into the numeric Features vector consumed by trainers.
"""

from issue_classifier.features.pipeline import (
    DESCRIPTION_FEATURIZED,
    FEATURES_COLUMN,
    LABEL_COLUMN,
    PREDICTED_LABEL_COLUMN,
    TITLE_FEATURIZED,
    build_feature_pipeline,
    build_text_featurizer,
)

__all__ = [
    "DESCRIPTION_FEATURIZED",
    "FEATURES_COLUMN",
    "LABEL_COLUMN",
    "PREDICTED_LABEL_COLUMN",
    "TITLE_FEATURIZED",
    "build_feature_pipeline",
    "build_text_featurizer",
]
