"""
Configuration loading utilities.

Supports environment variable interpolation and config inheritance.
An empty config (or no config at all) yields the documented defaults.
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from issue_classifier.config.settings import (
    ClassifierConfig,
    DataPathsConfig,
    FeaturizationConfig,
    LoggingConfig,
    MLflowConfig,
    TrainingConfig,
)


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _ngram_range(value: Any, default: tuple[int, int]) -> tuple[int, int]:
    """Parse an n-gram range given as [min, max] or a single integer."""
    if value is None:
        return default
    if isinstance(value, int):
        return (1, value)
    low, high = value
    return (int(low), int(high))


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return _process_config_values(data) if data else {}


def load_config(
    config_path: Path | None = None,
    base_path: Path | None = None,
) -> ClassifierConfig:
    """
    Load classifier configuration from YAML file(s).

    Recognized top-level keys: project, data (root, train, test, model),
    featurization, training, mlflow, logging. Anything omitted falls back
    to its default.

    Args:
        config_path: Path to the main configuration file. None returns
            the default configuration.
        base_path: Optional path to base configuration for inheritance.

    Returns:
        Fully validated ClassifierConfig instance.

    Raises:
        FileNotFoundError: If a given config file does not exist.
        pydantic.ValidationError: If a value is invalid.
    """
    if config_path is None:
        return ClassifierConfig()

    config_path = Path(config_path)
    if not config_path.exists():
        msg = f"Config file not found: {config_path}"
        raise FileNotFoundError(msg)

    if base_path is not None:
        base_data = load_yaml(base_path)
    else:
        # Try to find base.yaml in same directory
        potential_base = config_path.parent / "base.yaml"
        if potential_base.exists() and potential_base != config_path:
            base_data = load_yaml(potential_base)
        else:
            base_data = {}

    merged = _deep_merge(base_data, load_yaml(config_path))

    defaults = DataPathsConfig()
    data_data = merged.get("data", {})
    data_paths = DataPathsConfig(
        data_root=Path(data_data.get("root", defaults.data_root)),
        train_path=Path(data_data.get("train", defaults.train_path)),
        test_path=Path(data_data.get("test", defaults.test_path)),
        model_path=Path(data_data.get("model", defaults.model_path)),
    )

    feat_data = merged.get("featurization", {})
    feat_defaults = FeaturizationConfig()
    featurization = FeaturizationConfig(
        word_ngram_range=_ngram_range(
            feat_data.get("word_ngram_range"), feat_defaults.word_ngram_range
        ),
        char_ngram_range=_ngram_range(
            feat_data.get("char_ngram_range"), feat_defaults.char_ngram_range
        ),
        lowercase=feat_data.get("lowercase", feat_defaults.lowercase),
        sublinear_tf=feat_data.get("sublinear_tf", feat_defaults.sublinear_tf),
        min_df=feat_data.get("min_df", feat_defaults.min_df),
    )

    # Training config (can be overridden)
    training_data = merged.get("training", {})
    training = TrainingConfig(**training_data)

    # MLflow config (experiment_name derived from project if not set)
    mlflow = MLflowConfig(**merged.get("mlflow", {}))

    logging_config = LoggingConfig(**merged.get("logging", {}))

    return ClassifierConfig(
        project=merged.get("project", "issue-classifier"),
        data_paths=data_paths,
        featurization=featurization,
        training=training,
        mlflow=mlflow,
        logging=logging_config,
    )
