"""Tests for the prediction engine and batch scoring."""

import numpy as np
import pandas as pd
import pytest

from issue_classifier.config.settings import ClassifierConfig
from issue_classifier.modeling.inference import (
    PredictionEngine,
    create_prediction_engine,
    score_issues,
)
from issue_classifier.modeling.training import TrainedModel, train_model
from issue_classifier.schemas import GitHubIssue


@pytest.fixture
def trained(config: ClassifierConfig, train_issues: pd.DataFrame) -> TrainedModel:
    """Model fitted on the synthetic training issues."""
    return train_model(train_issues, config)


@pytest.fixture
def engine(trained: TrainedModel) -> PredictionEngine:
    """Prediction engine bound to the trained model."""
    return create_prediction_engine(trained.pipeline, trained.input_schema)


class TestPredictionEngine:
    """Tests for PredictionEngine."""

    def test_classes(self, engine: PredictionEngine, trained: TrainedModel) -> None:
        """Test the engine exposes the model's areas."""
        assert engine.classes == trained.classes

    def test_scores_sum_to_one(self, engine: PredictionEngine) -> None:
        """Test a prediction carries a probability for every area."""
        prediction = engine.predict(
            GitHubIssue(title="Socket error", description="The websocket connection fails")
        )
        assert set(prediction.scores) == set(engine.classes)
        assert sum(prediction.scores.values()) == pytest.approx(1.0)
        assert prediction.area == max(prediction.scores, key=prediction.scores.get)

    def test_area_on_input_ignored(self, engine: PredictionEngine) -> None:
        """Test the prediction does not depend on a provided area."""
        text = ("CSS not applied", "The css stylesheet is not applied to the razor layout")
        unlabeled = engine.predict(GitHubIssue(*text))
        labeled = engine.predict(GitHubIssue(*text, area="area-data"))
        assert labeled == unlabeled

    def test_empty_text(self, engine: PredictionEngine) -> None:
        """Test an issue with empty title and description still scores."""
        assert engine.predict(GitHubIssue(title="", description="")).area in engine.classes

    def test_predict_frame(self, engine: PredictionEngine, test_issues: pd.DataFrame) -> None:
        """Test batch prediction adds a PredictedArea column."""
        result = engine.predict_frame(test_issues)
        assert len(result) == len(test_issues)
        assert result["PredictedArea"].isin(engine.classes).all()
        assert "PredictedArea" not in test_issues.columns

    def test_predict_frame_missing_column(self, engine: PredictionEngine) -> None:
        """Test batch prediction rejects a table without Description."""
        with pytest.raises(ValueError, match="Description"):
            engine.predict_frame(pd.DataFrame({"Title": ["Crash"]}))


class TestScoreIssues:
    """Tests for score_issues."""

    def test_frame_columns(self, trained: TrainedModel, test_issues: pd.DataFrame) -> None:
        """Test scored rows carry area, key and predicted label."""
        scored = score_issues(trained.pipeline, test_issues)

        assert list(scored.frame.columns) == ["Area", "Label", "PredictedLabel"]
        assert scored.scores.shape == (len(test_issues), len(trained.classes))
        np.testing.assert_allclose(scored.scores.sum(axis=1), 1.0)
        assert scored.n_unknown == 0

    def test_unknown_area_keyed(self, trained: TrainedModel, test_issues: pd.DataFrame) -> None:
        """Test an area unseen in training gets key -1."""
        issues = test_issues.copy()
        issues.loc[issues.index[0], "Area"] = "area-unknown"

        scored = score_issues(trained.pipeline, issues)

        assert scored.frame["Label"].iloc[0] == -1
        assert scored.n_unknown == 1
