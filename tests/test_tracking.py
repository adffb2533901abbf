"""Tests for MLflow experiment tracking."""

from contextlib import contextmanager
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

from issue_classifier.config.settings import ClassifierConfig, MLflowConfig
from issue_classifier.evaluation import tracking
from issue_classifier.evaluation.metrics import ClassificationMetrics

METRICS = ClassificationMetrics(
    micro_accuracy=0.8,
    macro_accuracy=0.7,
    log_loss=0.5,
    log_loss_reduction=0.4,
    top_k_accuracy=0.9,
    top_k=3,
    n_samples=10,
)


@pytest.fixture
def fake_mlflow(monkeypatch: pytest.MonkeyPatch) -> dict[str, Any]:
    """Record calls instead of talking to a tracking server."""
    calls: dict[str, Any] = {"artifacts": []}

    @contextmanager
    def start_run(run_name: str | None = None):  # type: ignore[no-untyped-def]
        calls["run_name"] = run_name
        yield SimpleNamespace(info=SimpleNamespace(run_id="run-123"))

    monkeypatch.setattr(tracking.mlflow, "set_tracking_uri", lambda uri: calls.update(uri=uri))
    monkeypatch.setattr(
        tracking.mlflow, "set_experiment", lambda name: calls.update(experiment=name)
    )
    monkeypatch.setattr(tracking.mlflow, "start_run", start_run)
    monkeypatch.setattr(tracking.mlflow, "log_params", lambda p: calls.update(params=p))
    monkeypatch.setattr(tracking.mlflow, "log_metrics", lambda m: calls.update(metrics=m))
    monkeypatch.setattr(
        tracking.mlflow,
        "log_artifact",
        lambda path, artifact_path=None: calls["artifacts"].append(path),
    )
    return calls


class TestLogRun:
    """Tests for log_run."""

    def test_disabled(self, fake_mlflow: dict[str, Any]) -> None:
        """Test nothing is logged when tracking is disabled."""
        assert tracking.log_run(ClassifierConfig(), METRICS) is None
        assert "uri" not in fake_mlflow

    def test_enabled(self, fake_mlflow: dict[str, Any], tmp_path: Path) -> None:
        """Test params, metrics and the model artifact are logged."""
        model_path = tmp_path / "model.joblib"
        model_path.write_bytes(b"model")
        config = ClassifierConfig(
            project="issues",
            mlflow=MLflowConfig(enabled=True, tracking_uri="file:///tmp/mlruns"),
        )

        run_id = tracking.log_run(config, METRICS, model_path, run_name="nightly")

        assert run_id == "run-123"
        assert fake_mlflow["uri"] == "file:///tmp/mlruns"
        assert fake_mlflow["experiment"] == "issues"
        assert fake_mlflow["run_name"] == "nightly"
        assert fake_mlflow["params"]["trainer"] == "SdcaMaximumEntropy"
        assert fake_mlflow["metrics"]["log_loss"] == 0.5
        assert fake_mlflow["artifacts"] == [str(model_path)]

    def test_missing_artifact_skipped(self, fake_mlflow: dict[str, Any], tmp_path: Path) -> None:
        """Test a model path that does not exist is not attached."""
        config = ClassifierConfig(mlflow=MLflowConfig(enabled=True))
        tracking.log_run(config, METRICS, tmp_path / "missing.joblib")
        assert fake_mlflow["artifacts"] == []


def test_run_params_hash_stable() -> None:
    """Test run parameters are reproducible for the same config."""
    assert tracking.run_params(ClassifierConfig()) == tracking.run_params(ClassifierConfig())
