"""Tests for the end-to-end workflow."""

import pytest

from issue_classifier.config.settings import ClassifierConfig
from issue_classifier.modeling.inference import create_prediction_engine
from issue_classifier.modeling.persistence import load_model
from issue_classifier.workflow import SINGLE_ISSUE, predict_issue, run_workflow


class TestRunWorkflow:
    """Tests for run_workflow."""

    def test_full_sequence(self, config: ClassifierConfig) -> None:
        """Test train, evaluate, save, reload and predict in order."""
        lines: list[str] = []

        result = run_workflow(config, echo=lines.append)

        assert result.model_path == config.model_path
        assert result.model_path.exists()
        assert config.metadata_path.exists()
        assert result.run_id is None

        assert lines[0].startswith(
            "=============== Single Prediction just-trained-model - Result: "
        )
        assert "MicroAccuracy:" in lines[1]
        assert lines[2] == (
            "=============== Single Prediction - Result: "
            f"{result.reloaded_prediction.area} ==============="
        )
        assert result.reloaded_prediction.area in result.trained.classes

    def test_reloaded_model_matches(self, config: ClassifierConfig) -> None:
        """Test the saved model predicts like the in-memory one."""
        result = run_workflow(config, echo=None)

        loaded = load_model(result.model_path)
        engine = create_prediction_engine(loaded.model, loaded.schema)
        in_memory = create_prediction_engine(result.trained.pipeline)

        assert engine.predict(SINGLE_ISSUE).area == in_memory.predict(SINGLE_ISSUE).area
        assert result.reloaded_prediction.area == in_memory.predict(SINGLE_ISSUE).area

    def test_evaluation_only(self, config: ClassifierConfig) -> None:
        """Test save=False leaves no model file behind."""
        result = run_workflow(config, save=False, echo=None)

        assert result.model_path is None
        assert not config.model_path.exists()
        assert 0.0 <= result.metrics.micro_accuracy <= 1.0

    def test_metrics_recorded_with_model(self, config: ClassifierConfig) -> None:
        """Test the saved sidecar carries the evaluation metrics."""
        result = run_workflow(config, echo=None)
        metadata = load_model(result.model_path).metadata
        assert metadata["metrics"]["n_samples"] == result.metrics.n_samples

    def test_missing_training_file(self, config: ClassifierConfig) -> None:
        """Test a missing training file aborts the run."""
        config.train_path.unlink()
        with pytest.raises(FileNotFoundError):
            run_workflow(config, echo=None)
        assert not config.model_path.exists()


class TestPredictIssue:
    """Tests for predict_issue."""

    def test_silent(self, config: ClassifierConfig) -> None:
        """Test echo=None prints nothing and still predicts."""
        result = run_workflow(config, save=False, echo=None)
        engine = create_prediction_engine(result.trained.pipeline)
        assert predict_issue(engine, echo=None).area in result.trained.classes
