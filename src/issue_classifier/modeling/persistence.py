"""
Model persistence (save/load).

A model is stored as one joblib file holding the fitted pipeline and the
input schema it was trained on, plus a human-readable JSON sidecar:

    - {model_path}:       joblib bundle {format_version, model, schema}
    - {model_path}.json:  metadata (trainer, classes, checksum, metrics, saved_at)

The sidecar carries the timestamp and the saved model carries no cache
location, so the model file itself is byte-identical across runs with the
same seed and data, whether or not featurization came from the cache.
"""

import json
import pickle
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import joblib
from sklearn.pipeline import Pipeline

from issue_classifier.evaluation.metrics import ClassificationMetrics
from issue_classifier.modeling.labels import LabelKeyClassifier
from issue_classifier.modeling.training import TrainedModel
from issue_classifier.schemas.model_input import ModelInputSchema
from issue_classifier.utils.hashing import hash_file_content
from issue_classifier.utils.logging import get_logger

log = get_logger(__name__)

MODEL_FORMAT_VERSION = 1


@dataclass
class LoadedModel:
    """
    A model reloaded from disk.

    Attributes:
        model: Fitted classifier.
        schema: Input schema recorded at save time.
        metadata: Sidecar metadata (empty if the sidecar is missing).
    """

    model: LabelKeyClassifier
    schema: ModelInputSchema
    metadata: dict[str, Any] = field(default_factory=dict)


def metadata_path_for(model_path: Path) -> Path:
    """Sidecar metadata path for a model file."""
    model_path = Path(model_path)
    return model_path.with_name(model_path.name + ".json")


def _detached(obj: Any) -> Any:
    """Copy of obj that shares no objects with anything outside it."""
    return pickle.loads(pickle.dumps(obj, protocol=pickle.HIGHEST_PROTOCOL))


def portable_model(model: LabelKeyClassifier) -> LabelKeyClassifier:
    """
    Copy of a fitted model for saving.

    The featurization cache is dropped and every step is copied on its
    own. A Features step restored from the cache then serializes to the
    same bytes as a freshly fitted one.

    Args:
        model: Fitted classifier.

    Returns:
        Fitted classifier without a cache location.
    """
    template = _detached(model.estimator)
    template.set_params(memory=None)

    portable = LabelKeyClassifier(template)
    portable.label_encoder_ = _detached(model.label_encoder_)
    portable.classes_ = portable.label_encoder_.classes_
    portable.estimator_ = Pipeline(
        steps=[(name, _detached(step)) for name, step in model.estimator_.steps],
        memory=None,
    )
    return portable


def save_model(
    trained: TrainedModel,
    output_path: Path,
    metrics: ClassificationMetrics | None = None,
) -> tuple[Path, Path]:
    """Save a trained model and its metadata to disk.

    Any existing files at these paths are overwritten.

    Args:
        trained: Trained model to save.
        output_path: Model file path.
        metrics: Optional evaluation metrics recorded in the sidecar.

    Returns:
        Tuple of (model_path, metadata_path).
    """
    model_path = Path(output_path)
    model_path.parent.mkdir(parents=True, exist_ok=True)
    metadata_path = metadata_path_for(model_path)

    bundle = {
        "format_version": MODEL_FORMAT_VERSION,
        "model": portable_model(trained.pipeline),
        "schema": trained.input_schema,
    }
    joblib.dump(bundle, model_path)
    log.info("Saved model", path=str(model_path))

    metadata: dict[str, Any] = {
        "format_version": MODEL_FORMAT_VERSION,
        "trainer": trained.name,
        "classes": trained.classes,
        "n_samples": trained.n_samples,
        "data_hash": trained.data_hash,
        "model_hash": hash_file_content(model_path),
        "training_time_s": trained.training_time_s,
        "schema": trained.input_schema.to_dict(),
        "saved_at": datetime.now(timezone.utc).isoformat(),
    }
    if metrics is not None:
        metadata["metrics"] = metrics.to_dict()

    with open(metadata_path, "w", encoding="utf-8") as f:
        json.dump(metadata, f, indent=2)
    log.info("Saved model metadata", path=str(metadata_path))

    return model_path, metadata_path


def load_model(path: Path) -> LoadedModel:
    """Load a model and its metadata from disk.

    Args:
        path: Model file path.

    Returns:
        Loaded model with schema and metadata.

    Raises:
        FileNotFoundError: If the model file doesn't exist.
        ValueError: If the file is not a model bundle of a supported version.
    """
    model_path = Path(path)
    if not model_path.exists():
        raise FileNotFoundError(f"Model file not found: {model_path}")

    bundle = joblib.load(model_path)
    if not isinstance(bundle, dict) or not {"model", "schema"} <= bundle.keys():
        msg = f"Not a model bundle: {model_path}"
        raise ValueError(msg)

    version = bundle.get("format_version")
    if version != MODEL_FORMAT_VERSION:
        msg = (
            f"Unsupported model format version {version!r} in {model_path} "
            f"(expected {MODEL_FORMAT_VERSION})"
        )
        raise ValueError(msg)

    model = bundle["model"]
    schema = bundle["schema"]
    if not isinstance(model, LabelKeyClassifier) or not isinstance(
        schema, ModelInputSchema
    ):
        msg = f"Model bundle has unexpected contents: {model_path}"
        raise ValueError(msg)
    log.info("Loaded model", path=str(model_path), classes=len(model.classes_))

    metadata_path = metadata_path_for(model_path)
    metadata: dict[str, Any] = {}
    if metadata_path.exists():
        with open(metadata_path, encoding="utf-8") as f:
            metadata = json.load(f)
        log.info("Loaded model metadata", path=str(metadata_path))
    else:
        log.warning("Model metadata not found", path=str(metadata_path))

    return LoadedModel(model=model, schema=schema, metadata=metadata)
