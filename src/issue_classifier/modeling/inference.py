"""
Inference for fitted issue classifiers.

Provides the single-record prediction engine and batch scoring of
labeled tables for evaluation.
"""

from dataclasses import dataclass

import numpy as np
import pandas as pd

from issue_classifier.features.pipeline import LABEL_COLUMN, PREDICTED_LABEL_COLUMN
from issue_classifier.modeling.labels import LabelKeyClassifier
from issue_classifier.schemas.issue import (
    AREA_COLUMN,
    PREDICTED_AREA_COLUMN,
    GitHubIssue,
    IssueInputSchema,
    IssuePrediction,
    PredictionSchema,
)
from issue_classifier.schemas.model_input import ModelInputSchema
from issue_classifier.utils.logging import get_logger

log = get_logger(__name__)


class PredictionEngine:
    """
    Scores one issue at a time with a fitted model.

    The engine is bound to a single model for its lifetime; build a new
    engine after reloading a model from disk.
    """

    def __init__(
        self,
        model: LabelKeyClassifier,
        input_schema: ModelInputSchema | None = None,
    ) -> None:
        """
        Initialize prediction engine.

        Args:
            model: Fitted classifier.
            input_schema: Schema recorded at training time, if known.
        """
        self.model = model
        self.input_schema = input_schema

    @property
    def classes(self) -> list[str]:
        """Area labels the model can predict."""
        return [str(c) for c in self.model.classes_]

    def _prepare(self, df: pd.DataFrame) -> pd.DataFrame:
        if self.input_schema is not None:
            self.input_schema.validate(df)
        return IssueInputSchema.validate(df)

    def predict(self, issue: GitHubIssue) -> IssuePrediction:
        """
        Predict the area of a single issue. Any area on the input is ignored.

        Args:
            issue: Issue to score.

        Returns:
            Predicted area with per-class scores.
        """
        frame = self._prepare(pd.DataFrame([issue.to_row()]))
        area = str(self.model.predict(frame)[0])
        proba = self.model.predict_proba(frame)[0]
        scores = {label: float(p) for label, p in zip(self.classes, proba)}

        log.debug("Predicted issue area", area=area, score=scores.get(area))
        return IssuePrediction(area=area, scores=scores)

    def predict_frame(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Predict areas for every row of df.

        Args:
            df: Table with Title and Description columns.

        Returns:
            Copy of df with a PredictedArea column.
        """
        frame = self._prepare(df)
        result = df.copy()
        result[PREDICTED_AREA_COLUMN] = self.model.predict(frame).astype(str)
        return PredictionSchema.validate(result)


def create_prediction_engine(
    model: LabelKeyClassifier,
    input_schema: ModelInputSchema | None = None,
) -> PredictionEngine:
    """Create a prediction engine bound to model."""
    return PredictionEngine(model, input_schema)


@dataclass
class ScoredIssues:
    """
    Labeled issues run through a fitted model.

    Attributes:
        frame: Area, Label (key, -1 if unseen in training) and
            PredictedLabel (decoded area) per row.
        scores: Probability matrix, one column per class.
        classes: Area labels in key order.
    """

    frame: pd.DataFrame
    scores: np.ndarray
    classes: list[str]

    @property
    def n_unknown(self) -> int:
        """Rows whose area was never seen during training."""
        return int((self.frame[LABEL_COLUMN] < 0).sum())


def score_issues(model: LabelKeyClassifier, issues: pd.DataFrame) -> ScoredIssues:
    """
    Transform labeled issues through a fitted model.

    Args:
        model: Fitted classifier.
        issues: Table validated against IssueSchema.

    Returns:
        Scored rows in input order.
    """
    frame = IssueInputSchema.validate(issues)
    scores = model.predict_proba(frame)
    predicted_keys = np.argmax(scores, axis=1)

    scored = pd.DataFrame(
        {
            AREA_COLUMN: issues[AREA_COLUMN].to_numpy(),
            LABEL_COLUMN: model.encode(issues[AREA_COLUMN]),
            PREDICTED_LABEL_COLUMN: model.classes_[predicted_keys],
        },
        index=issues.index,
    )

    log.info("Scored issues", rows=len(scored), classes=len(model.classes_))
    return ScoredIssues(
        frame=scored,
        scores=scores,
        classes=[str(c) for c in model.classes_],
    )
