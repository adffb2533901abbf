"""
Model training functionality.

Appends a trainer to the feature pipeline, wraps it with label key
encoding and fits it against a labeled issue table.
"""

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

import pandas as pd
from sklearn.pipeline import Pipeline

from issue_classifier.config.settings import ClassifierConfig
from issue_classifier.features.pipeline import build_feature_pipeline
from issue_classifier.modeling.inference import create_prediction_engine
from issue_classifier.modeling.labels import LabelKeyClassifier
from issue_classifier.modeling.models import get_trainer, trainer_params
from issue_classifier.schemas.issue import (
    AREA_COLUMN,
    TEXT_COLUMNS,
    GitHubIssue,
    IssuePrediction,
)
from issue_classifier.schemas.model_input import ModelInputSchema
from issue_classifier.utils.hashing import hash_dataframe
from issue_classifier.utils.logging import get_logger

log = get_logger(__name__)

TRAINER_STEP = "Trainer"

SMOKE_TEST_ISSUE = GitHubIssue(
    title="WebSockets communication is slow in my machine",
    description=(
        "The WebSockets communication used under the covers by SignalR looks "
        "like is going slow in my development machine.."
    ),
)


@dataclass
class TrainedModel:
    """
    Container for a trained model with metadata.

    Attributes:
        name: Trainer name.
        pipeline: Fitted LabelKeyClassifier around featurization + trainer.
        input_schema: Schema of the training table.
        classes: Area labels known to the model.
        n_samples: Number of training rows.
        data_hash: Fingerprint of the training table.
        training_time_s: Fit time in seconds.
    """

    name: str
    pipeline: LabelKeyClassifier
    input_schema: ModelInputSchema
    classes: list[str] = field(default_factory=list)
    n_samples: int = 0
    data_hash: str = ""
    training_time_s: float = 0.0


def build_training_pipeline(
    config: ClassifierConfig,
    *,
    cache_dir: Path | None = None,
) -> LabelKeyClassifier:
    """
    Build the full, unfitted training pipeline.

    Args:
        config: Classifier configuration.
        cache_dir: Override for the featurization cache location.

    Returns:
        LabelKeyClassifier wrapping Features -> Trainer.
    """
    features = build_feature_pipeline(config, cache_dir=cache_dir)
    trainer = get_trainer(config.training.trainer, **trainer_params(config.training))

    pipeline = Pipeline(
        steps=[*features.steps, (TRAINER_STEP, trainer)],
        memory=features.memory,
    )
    return LabelKeyClassifier(pipeline)


def train_model(
    issues: pd.DataFrame,
    config: ClassifierConfig,
    *,
    cache_dir: Path | None = None,
) -> TrainedModel:
    """
    Fit the training pipeline on labeled issues.

    Args:
        issues: Table validated against IssueSchema.
        config: Classifier configuration.
        cache_dir: Override for the featurization cache location.

    Returns:
        Trained model.

    Raises:
        ValueError: If the table has fewer than two distinct areas.
    """
    name = config.training.trainer
    log.info(
        "Starting training",
        trainer=name,
        n_samples=len(issues),
        n_areas=issues[AREA_COLUMN].nunique(),
    )

    model = build_training_pipeline(config, cache_dir=cache_dir)

    training_start = time.perf_counter()
    model.fit(issues[TEXT_COLUMNS], issues[AREA_COLUMN])
    training_time_s = time.perf_counter() - training_start

    trained = TrainedModel(
        name=name,
        pipeline=model,
        input_schema=ModelInputSchema.from_frame(issues),
        classes=[str(c) for c in model.classes_],
        n_samples=len(issues),
        data_hash=hash_dataframe(issues, columns=[AREA_COLUMN, *TEXT_COLUMNS]),
        training_time_s=training_time_s,
    )

    log.info(
        "Training complete",
        trainer=name,
        classes=len(trained.classes),
        training_time_s=f"{training_time_s:.2f}",
    )
    return trained


def smoke_test(
    trained: TrainedModel,
    issue: GitHubIssue = SMOKE_TEST_ISSUE,
    echo: Callable[[str], None] | None = print,
) -> IssuePrediction:
    """
    Predict one hardcoded issue with a just-trained model.

    Args:
        trained: Trained model.
        issue: Issue to score.
        echo: Output function for the result line (None to stay silent).

    Returns:
        The prediction.
    """
    engine = create_prediction_engine(trained.pipeline, trained.input_schema)
    prediction = engine.predict(issue)

    if echo is not None:
        echo(
            "=============== Single Prediction just-trained-model - "
            f"Result: {prediction.area} ==============="
        )
    return prediction
