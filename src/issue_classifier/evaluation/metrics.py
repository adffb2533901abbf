"""
Evaluation metrics for multi-class classification models.

Provides standardized metrics computation over scored test issues.
"""

from dataclasses import dataclass, field

import numpy as np
import pandas as pd
from sklearn.metrics import accuracy_score, confusion_matrix, recall_score

from issue_classifier.features.pipeline import LABEL_COLUMN
from issue_classifier.modeling.inference import ScoredIssues, score_issues
from issue_classifier.modeling.labels import LabelKeyClassifier
from issue_classifier.utils.logging import get_logger

log = get_logger(__name__)

DEFAULT_TOP_K = 3

# Floor applied to the true-class probability before taking its log
LOG_LOSS_EPSILON = 1e-15


@dataclass(frozen=True)
class ClassificationMetrics:
    """
    Standard multi-class classification metrics.

    Attributes:
        micro_accuracy: Fraction of rows predicted correctly.
        macro_accuracy: Mean per-class accuracy over classes in the test labels.
        log_loss: Mean negative natural-log probability of the true class.
        log_loss_reduction: Relative improvement of log_loss over the
            log-loss of always predicting the test label distribution.
        top_k_accuracy: Fraction of rows whose true class is among the
            top_k most probable classes.
        top_k: k used for top_k_accuracy.
        n_samples: Number of rows evaluated.
        per_class_log_loss: Log-loss restricted to rows of each class.
        confusion_matrix: Counts as {true area: {predicted area: count}}.
    """

    micro_accuracy: float
    macro_accuracy: float
    log_loss: float
    log_loss_reduction: float
    top_k_accuracy: float
    top_k: int
    n_samples: int
    per_class_log_loss: dict[str, float] = field(default_factory=dict)
    confusion_matrix: dict[str, dict[str, int]] = field(default_factory=dict)

    def to_dict(self) -> dict[str, float]:
        """Scalar metrics as a dictionary."""
        return {
            "micro_accuracy": self.micro_accuracy,
            "macro_accuracy": self.macro_accuracy,
            "log_loss": self.log_loss,
            "log_loss_reduction": self.log_loss_reduction,
            "top_k_accuracy": self.top_k_accuracy,
            "n_samples": self.n_samples,
        }

    def confusion_frame(self) -> pd.DataFrame:
        """Confusion matrix as a DataFrame (rows: true, columns: predicted)."""
        return pd.DataFrame.from_dict(self.confusion_matrix, orient="index")

    def __str__(self) -> str:
        """String representation."""
        return (
            f"MicroAccuracy={self.micro_accuracy:.4f}, "
            f"MacroAccuracy={self.macro_accuracy:.4f}, "
            f"LogLoss={self.log_loss:.4f}, "
            f"LogLossReduction={self.log_loss_reduction:.4f}"
        )


def mean_log_loss(y_true: np.ndarray, proba: np.ndarray) -> float:
    """
    Mean negative natural-log probability assigned to the true class.

    Probabilities are floored at LOG_LOSS_EPSILON, so a confident miss
    costs at most -log(1e-15) per row.
    """
    true_proba = proba[np.arange(len(y_true)), y_true]
    return float(-np.log(np.maximum(true_proba, LOG_LOSS_EPSILON)).mean())


def prior_log_loss(y_true: np.ndarray, n_classes: int) -> float:
    """
    Log-loss of a model that always predicts the label distribution of y_true.

    Equals the entropy (in nats) of that distribution.
    """
    counts = np.bincount(y_true, minlength=n_classes).astype(float)
    priors = counts[counts > 0] / counts.sum()
    return float(-(priors * np.log(priors)).sum())


def compute_metrics(
    scored: ScoredIssues,
    top_k: int = DEFAULT_TOP_K,
) -> ClassificationMetrics:
    """
    Compute classification metrics from scored issues.

    Rows whose area was unknown at training time carry the missing label
    key and are left out.

    Args:
        scored: Output of score_issues.
        top_k: k for top-k accuracy (capped at the number of classes).

    Returns:
        ClassificationMetrics object.

    Raises:
        ValueError: If no row has a known label.
    """
    known = (scored.frame[LABEL_COLUMN] >= 0).to_numpy()
    if scored.n_unknown:
        log.warning(
            "Skipping rows with areas unseen during training",
            n_skipped=scored.n_unknown,
        )
    if not known.any():
        msg = "No test rows with an area known to the model"
        raise ValueError(msg)

    classes = scored.classes
    n_classes = len(classes)
    labels = np.arange(n_classes)
    y_true = scored.frame[LABEL_COLUMN].to_numpy()[known].astype(int)
    proba = scored.scores[known]
    y_pred = np.argmax(proba, axis=1)

    micro = float(accuracy_score(y_true, y_pred))
    macro = float(
        recall_score(
            y_true,
            y_pred,
            labels=np.unique(y_true),
            average="macro",
            zero_division=0,
        )
    )
    loss = mean_log_loss(y_true, proba)
    prior = prior_log_loss(y_true, n_classes)
    reduction = (prior - loss) / prior if prior > 0 else 0.0

    k = min(top_k, n_classes)
    top = np.argsort(-proba, axis=1)[:, :k]
    top_k_accuracy = float((top == y_true[:, None]).any(axis=1).mean())

    per_class: dict[str, float] = {}
    for key in np.unique(y_true):
        mask = y_true == key
        per_class[classes[key]] = mean_log_loss(y_true[mask], proba[mask])

    matrix = confusion_matrix(y_true, y_pred, labels=labels)
    confusion = {
        classes[i]: {classes[j]: int(matrix[i, j]) for j in labels} for i in labels
    }

    metrics = ClassificationMetrics(
        micro_accuracy=micro,
        macro_accuracy=macro,
        log_loss=loss,
        log_loss_reduction=float(reduction),
        top_k_accuracy=top_k_accuracy,
        top_k=k,
        n_samples=int(known.sum()),
        per_class_log_loss=per_class,
        confusion_matrix=confusion,
    )

    log.debug("Computed metrics", **metrics.to_dict())
    return metrics


def evaluate_model(
    model: LabelKeyClassifier,
    test_issues: pd.DataFrame,
    top_k: int = DEFAULT_TOP_K,
) -> ClassificationMetrics:
    """
    Score held-out issues and compute metrics.

    Read-only: nothing is saved.

    Args:
        model: Fitted classifier.
        test_issues: Labeled table validated against IssueSchema.
        top_k: k for top-k accuracy.

    Returns:
        ClassificationMetrics object.
    """
    if test_issues.empty:
        msg = "Cannot evaluate on an empty test table"
        raise ValueError(msg)

    scored = score_issues(model, test_issues)
    metrics = compute_metrics(scored, top_k=top_k)
    log.info("Evaluation complete", **metrics.to_dict())
    return metrics

