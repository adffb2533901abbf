"""
End-to-end classifier workflow.

Runs the linear sequence

    load training data -> build + fit pipeline -> smoke-test prediction
    -> load + evaluate test data -> save model -> reload -> predict

passing every intermediate value explicitly from one stage to the next.
Errors from any stage propagate; nothing is retried.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from issue_classifier.config.settings import ClassifierConfig
from issue_classifier.evaluation.metrics import ClassificationMetrics, evaluate_model
from issue_classifier.evaluation.report import format_metrics_block
from issue_classifier.evaluation.tracking import log_run
from issue_classifier.ingestion.issues import load_issues
from issue_classifier.modeling.inference import PredictionEngine, create_prediction_engine
from issue_classifier.modeling.persistence import load_model, save_model
from issue_classifier.modeling.training import TrainedModel, smoke_test, train_model
from issue_classifier.schemas.issue import GitHubIssue, IssuePrediction
from issue_classifier.utils.logging import get_logger, log_context

log = get_logger(__name__)

Echo = Callable[[str], None]

SINGLE_ISSUE = GitHubIssue(
    title="Entity Framework crashes",
    description="When connecting to the database, EF is crashing",
)


@dataclass
class WorkflowResult:
    """
    Outcome of a full workflow run.

    Attributes:
        trained: The model fitted in this run.
        metrics: Metrics on the test data.
        smoke_prediction: Prediction of the just-trained model.
        reloaded_prediction: Prediction of the model reloaded from disk
            (of the in-memory model when saving was skipped).
        model_path: Where the model was saved, None if not saved.
        run_id: MLflow run ID when tracking is enabled.
    """

    trained: TrainedModel
    metrics: ClassificationMetrics
    smoke_prediction: IssuePrediction
    reloaded_prediction: IssuePrediction
    model_path: Path | None = None
    run_id: str | None = None


def predict_issue(
    engine: PredictionEngine,
    issue: GitHubIssue = SINGLE_ISSUE,
    echo: Echo | None = print,
) -> IssuePrediction:
    """Predict one issue and print the result line."""
    prediction = engine.predict(issue)
    if echo is not None:
        echo(f"=============== Single Prediction - Result: {prediction.area} ===============")
    return prediction


def run_workflow(
    config: ClassifierConfig,
    *,
    save: bool = True,
    echo: Echo | None = print,
    cache_dir: Path | None = None,
) -> WorkflowResult:
    """
    Train, evaluate, persist, reload and predict.

    Args:
        config: Classifier configuration (paths, featurization, trainer).
        save: Whether to save the model and predict with the reloaded copy.
        echo: Output function for prediction lines and the metrics block.
        cache_dir: Override for the featurization cache location.

    Returns:
        WorkflowResult with every stage's output.
    """
    log.info(
        "Starting workflow",
        project=config.project,
        train=str(config.train_path),
        test=str(config.test_path),
    )

    with log_context(stage="train"):
        train_issues = load_issues(config.train_path, config)
        trained = train_model(train_issues, config, cache_dir=cache_dir)
        smoke_prediction = smoke_test(trained, echo=echo)

    with log_context(stage="evaluate"):
        test_issues = load_issues(config.test_path, config)
        metrics = evaluate_model(trained.pipeline, test_issues)
        if echo is not None:
            echo(format_metrics_block(metrics))

    model_path: Path | None = None
    if save:
        with log_context(stage="save"):
            model_path, _ = save_model(trained, config.model_path, metrics)

    with log_context(stage="predict"):
        if model_path is not None:
            loaded = load_model(model_path)
            engine = create_prediction_engine(loaded.model, loaded.schema)
        else:
            engine = create_prediction_engine(trained.pipeline, trained.input_schema)
        reloaded_prediction = predict_issue(engine, echo=echo)

    run_id = log_run(config, metrics, model_path)

    log.info("Workflow complete", model_path=str(model_path) if model_path else None)
    return WorkflowResult(
        trained=trained,
        metrics=metrics,
        smoke_prediction=smoke_prediction,
        reloaded_prediction=reloaded_prediction,
        model_path=model_path,
        run_id=run_id,
    )
