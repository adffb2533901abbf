"""
Trainer registry and factory.

Provides the multi-class trainers that can be appended to the feature
pipeline, with their default configurations.
"""

from typing import Any

from sklearn.base import BaseEstimator
from sklearn.linear_model import LogisticRegression
from sklearn.naive_bayes import ComplementNB

from issue_classifier.config.settings import TrainingConfig
from issue_classifier.utils.logging import get_logger

log = get_logger(__name__)


# Trainer configurations: name -> (class, default_kwargs)
# Maximum entropy = multinomial logistic regression over the Features vector
TRAINER_REGISTRY: dict[str, tuple[type[BaseEstimator], dict[str, Any]]] = {
    "SdcaMaximumEntropy": (
        LogisticRegression,
        {
            "solver": "saga",  # stochastic average gradient, dual-free SDCA analogue
            "max_iter": 1000,
            "tol": 1e-4,
        },
    ),
    "LbfgsMaximumEntropy": (
        LogisticRegression,
        {
            "solver": "lbfgs",
            "max_iter": 1000,
        },
    ),
    "NaiveBayes": (ComplementNB, {"alpha": 1.0}),
}


def get_trainer(name: str, **kwargs: Any) -> BaseEstimator:
    """
    Get a trainer instance by name.

    Args:
        name: Trainer name from registry.
        **kwargs: Override default parameters. Parameters the trainer
            does not accept are dropped.

    Returns:
        Unfitted estimator.

    Raises:
        KeyError: If trainer not found.
    """
    if name not in TRAINER_REGISTRY:
        available = ", ".join(TRAINER_REGISTRY.keys())
        msg = f"Unknown trainer '{name}'. Available: {available}"
        raise KeyError(msg)

    trainer_class, default_kwargs = TRAINER_REGISTRY[name]
    accepted = set(trainer_class().get_params())
    overrides = {k: v for k, v in kwargs.items() if k in accepted}
    params = {**default_kwargs, **overrides}

    log.debug("Creating trainer", name=name, params=params)
    return trainer_class(**params)


def trainer_params(config: TrainingConfig) -> dict[str, Any]:
    """Translate training configuration into estimator keyword arguments."""
    return {
        "C": 1.0 / config.l2_regularization,
        "max_iter": config.max_iter,
        "random_state": config.random_state,
    }


def list_trainers() -> list[str]:
    """List all available trainer names."""
    return list(TRAINER_REGISTRY.keys())
