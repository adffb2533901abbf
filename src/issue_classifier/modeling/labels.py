"""
Label key encoding around a classification pipeline.

scikit-learn pipelines only transform features, so the Area -> Label key
mapping and the PredictedLabel -> Area decoding are done by a wrapping
meta-estimator, in the same way TransformedTargetRegressor wraps targets.
"""

from typing import Any

import numpy as np
from sklearn.base import BaseEstimator, ClassifierMixin, clone
from sklearn.preprocessing import LabelEncoder
from sklearn.utils.validation import check_is_fitted

# Key assigned to labels that were not seen during fitting
MISSING_KEY = -1


class LabelKeyClassifier(ClassifierMixin, BaseEstimator):
    """
    Fit a classifier on integer label keys and decode its predictions.

    Attributes (after fit):
        label_encoder_: Fitted LabelEncoder (Area value -> Label key).
        estimator_: Fitted clone of ``estimator``.
        classes_: Area values in key order.
    """

    def __init__(self, estimator: Any) -> None:
        self.estimator = estimator

    def fit(self, X: Any, y: Any) -> "LabelKeyClassifier":
        """Encode labels to keys and fit the wrapped estimator."""
        y = np.asarray(y, dtype=object)
        self.label_encoder_ = LabelEncoder().fit(y)
        if len(self.label_encoder_.classes_) < 2:
            msg = (
                "Training data must contain at least two distinct labels, "
                f"got: {list(self.label_encoder_.classes_)}"
            )
            raise ValueError(msg)

        keys = self.label_encoder_.transform(y)
        self.estimator_ = clone(self.estimator).fit(X, keys)
        self.classes_ = self.label_encoder_.classes_
        return self

    def encode(self, y: Any) -> np.ndarray:
        """Map label values to keys; unseen values map to MISSING_KEY."""
        check_is_fitted(self, "label_encoder_")
        lookup = {label: key for key, label in enumerate(self.classes_)}
        return np.array([lookup.get(label, MISSING_KEY) for label in y], dtype=int)

    def predict_keys(self, X: Any) -> np.ndarray:
        """Predict integer label keys."""
        check_is_fitted(self, "estimator_")
        return np.asarray(self.estimator_.predict(X), dtype=int)

    def predict(self, X: Any) -> np.ndarray:
        """Predict label values (keys decoded back to Area strings)."""
        return self.label_encoder_.inverse_transform(self.predict_keys(X))

    def predict_proba(self, X: Any) -> np.ndarray:
        """Per-class probabilities, columns in ``classes_`` order."""
        check_is_fitted(self, "estimator_")
        return self.estimator_.predict_proba(X)
