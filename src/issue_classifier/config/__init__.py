"""
Configuration management with typed Pydantic models.

Provides path, featurization and training parameters with
environment-aware YAML loading.
"""

from issue_classifier.config.loader import load_config
from issue_classifier.config.settings import (
    ClassifierConfig,
    DataPathsConfig,
    FeaturizationConfig,
    LoggingConfig,
    MLflowConfig,
    TrainingConfig,
)

__all__ = [
    "ClassifierConfig",
    "DataPathsConfig",
    "FeaturizationConfig",
    "LoggingConfig",
    "MLflowConfig",
    "TrainingConfig",
    "load_config",
]
