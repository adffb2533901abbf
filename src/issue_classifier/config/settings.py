"""
Typed configuration models using Pydantic.

All configuration is defined here with explicit typing and validation.
File paths are configuration inputs with documented defaults rather than
locations derived from the executable.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_TRAINER = "SdcaMaximumEntropy"


def _validate_ngram_range(value: tuple[int, int]) -> tuple[int, int]:
    low, high = value
    if low < 1 or high < low:
        msg = f"n-gram range must satisfy 1 <= min <= max, got: {value!r}"
        raise ValueError(msg)
    return value


class DataPathsConfig(BaseModel):
    """Data file paths configuration.

    All paths are relative to data_root. Use resolve() to get the path
    actually read or written.

        - train_path: TSV used for fitting
        - test_path: held-out TSV used for evaluation
        - model_path: fitted model artifact (overwritten on save)
    """

    model_config = ConfigDict(frozen=True)

    data_root: Path = Field(
        default=Path("."), description="Root directory for all data files"
    )
    train_path: Path = Field(
        default=Path("Data/issues_train.tsv"),
        description="Path to the training TSV",
    )
    test_path: Path = Field(
        default=Path("Data/issues_test.tsv"),
        description="Path to the held-out test TSV",
    )
    model_path: Path = Field(
        default=Path("Models/model.joblib"),
        description="Path to the persisted model",
    )

    def resolve(self, path_attr: str) -> Path:
        """Resolve a relative path against data_root."""
        rel_path = getattr(self, path_attr)
        if rel_path is None:
            msg = f"Path '{path_attr}' is not configured"
            raise ValueError(msg)
        return self.data_root / rel_path


class FeaturizationConfig(BaseModel):
    """Text featurization configuration (applied to Title and Description)."""

    model_config = ConfigDict(frozen=True)

    word_ngram_range: tuple[int, int] = Field(default=(1, 2))
    char_ngram_range: tuple[int, int] = Field(default=(1, 3))
    lowercase: bool = Field(default=True)
    sublinear_tf: bool = Field(default=False)
    min_df: int = Field(default=1, ge=1)

    @field_validator("word_ngram_range", "char_ngram_range")
    @classmethod
    def validate_ngram_range(cls, v: tuple[int, int]) -> tuple[int, int]:
        """Ensure n-gram ranges are ordered and positive."""
        return _validate_ngram_range(v)


class TrainingConfig(BaseModel):
    """Model training configuration."""

    model_config = ConfigDict(frozen=True)

    trainer: str = Field(default=DEFAULT_TRAINER, description="Trainer registry name")
    random_state: int = Field(default=0)
    max_iter: int = Field(default=1000, ge=1)
    l2_regularization: float = Field(
        default=1.0, gt=0.0, description="Inverse of C for linear trainers"
    )
    cache: bool = Field(
        default=True, description="Cache fitted featurization before training"
    )


class MLflowConfig(BaseModel):
    """MLflow experiment tracking configuration."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(default=False)
    tracking_uri: str = Field(default="http://127.0.0.1:5000")
    # experiment_name is optional; derived from project if not set
    experiment_name: str | None = Field(
        default=None, description="MLflow experiment name (defaults to project name)"
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO")
    json_output: bool = Field(default=False)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Ensure the level is a known logging level name."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            msg = f"Log level must be one of {sorted(allowed)}, got: {v!r}"
            raise ValueError(msg)
        return v.upper()


class ClassifierConfig(BaseModel):
    """Complete classifier configuration.

    The project name drives the MLflow experiment name (if not explicitly
    set) and the cache directory.
    """

    model_config = ConfigDict(frozen=True)

    project: str = Field(default="issue-classifier")
    data_paths: DataPathsConfig = Field(default_factory=DataPathsConfig)
    featurization: FeaturizationConfig = Field(default_factory=FeaturizationConfig)
    training: TrainingConfig = Field(default_factory=TrainingConfig)
    mlflow: MLflowConfig = Field(default_factory=MLflowConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def experiment_name(self) -> str:
        """MLflow experiment name (derived from project if not set)."""
        return self.mlflow.experiment_name or self.project

    @property
    def train_path(self) -> Path:
        """Resolved training data path."""
        return self.data_paths.resolve("train_path")

    @property
    def test_path(self) -> Path:
        """Resolved test data path."""
        return self.data_paths.resolve("test_path")

    @property
    def model_path(self) -> Path:
        """Resolved model artifact path."""
        return self.data_paths.resolve("model_path")

    @property
    def cache_dir(self) -> Path:
        """Directory for the featurization cache checkpoint."""
        return self.model_path.parent / ".cache" / self.project

    @property
    def metadata_path(self) -> Path:
        """Sidecar metadata path next to the model artifact."""
        return self.model_path.with_name(self.model_path.name + ".json")
