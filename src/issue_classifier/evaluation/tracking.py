"""
MLflow experiment tracking.

Logs parameters, metrics and the saved model of a run when tracking is
enabled in the configuration.
"""

from pathlib import Path

import mlflow

from issue_classifier.config.settings import ClassifierConfig
from issue_classifier.evaluation.metrics import ClassificationMetrics
from issue_classifier.utils.hashing import hash_config
from issue_classifier.utils.logging import get_logger

log = get_logger(__name__)


def run_params(config: ClassifierConfig) -> dict[str, str]:
    """Parameters describing a training run."""
    featurization = config.featurization
    return {
        "trainer": config.training.trainer,
        "random_state": str(config.training.random_state),
        "max_iter": str(config.training.max_iter),
        "l2_regularization": str(config.training.l2_regularization),
        "word_ngram_range": str(featurization.word_ngram_range),
        "char_ngram_range": str(featurization.char_ngram_range),
        "config_hash": hash_config(config),
    }


def log_run(
    config: ClassifierConfig,
    metrics: ClassificationMetrics,
    model_path: Path | None = None,
    run_name: str | None = None,
) -> str | None:
    """
    Log one training/evaluation run to MLflow.

    Args:
        config: Classifier configuration.
        metrics: Evaluation metrics.
        model_path: Saved model to attach as an artifact.
        run_name: Optional run name.

    Returns:
        MLflow run ID, or None if tracking is disabled.
    """
    if not config.mlflow.enabled:
        log.debug("MLflow tracking disabled")
        return None

    mlflow.set_tracking_uri(config.mlflow.tracking_uri)
    mlflow.set_experiment(config.experiment_name)

    with mlflow.start_run(run_name=run_name) as run:
        mlflow.log_params(run_params(config))
        mlflow.log_metrics(metrics.to_dict())
        if model_path is not None and Path(model_path).exists():
            mlflow.log_artifact(str(model_path), artifact_path="model")
        run_id = run.info.run_id

    log.info(
        "Logged MLflow run",
        run_id=run_id,
        experiment=config.experiment_name,
        tracking_uri=config.mlflow.tracking_uri,
    )
    return run_id
