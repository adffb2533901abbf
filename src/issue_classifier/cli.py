"""Command-line interface for the issue classifier."""

from pathlib import Path
from typing import TYPE_CHECKING, Annotated

import typer
from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from issue_classifier.config.settings import ClassifierConfig

app = typer.Typer(
    name="issue-classifier",
    help="Train and apply a GitHub issue area classifier.",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option(
        "--config",
        "-c",
        help="Path to configuration YAML file (defaults are used if omitted).",
        exists=True,
        dir_okay=False,
    ),
]
ModelOption = Annotated[
    Path | None,
    typer.Option("--model", "-m", help="Model file path (overrides config)."),
]


def _echo(line: str) -> None:
    """Print a plain output line without rich markup or wrapping."""
    console.print(line, markup=False, highlight=False, soft_wrap=True)


def _setup(
    config_path: Path | None,
    *,
    train: Path | None = None,
    test: Path | None = None,
    model: Path | None = None,
    verbose: bool = False,
) -> "ClassifierConfig":
    """Load configuration, apply path overrides and configure logging."""
    from issue_classifier.config.loader import load_config
    from issue_classifier.utils.logging import configure_logging

    config = load_config(config_path)

    overrides = {
        key: value
        for key, value in {
            "train_path": train,
            "test_path": test,
            "model_path": model,
        }.items()
        if value is not None
    }
    if overrides:
        config = config.model_copy(
            update={"data_paths": config.data_paths.model_copy(update=overrides)}
        )

    level = "DEBUG" if verbose else config.logging.level
    configure_logging(level=level, json_output=config.logging.json_output)
    return config


@app.command()
def run(
    config: ConfigOption = None,
    train: Annotated[
        Path | None,
        typer.Option("--train", help="Training TSV path (overrides config)."),
    ] = None,
    test: Annotated[
        Path | None,
        typer.Option("--test", help="Test TSV path (overrides config)."),
    ] = None,
    model: ModelOption = None,
    no_save: Annotated[
        bool,
        typer.Option("--no-save", help="Evaluate only; do not write the model file."),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Train, evaluate, save, reload and predict in one run."""
    from issue_classifier.workflow import run_workflow

    pipeline_config = _setup(config, train=train, test=test, model=model, verbose=verbose)

    try:
        result = run_workflow(pipeline_config, save=not no_save, echo=_echo)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e
    except Exception as e:
        console.print(f"[red]Run failed: {e}[/red]")
        raise typer.Exit(code=1) from e

    if result.model_path is not None:
        console.print(f"\n[green]Saved model to: {result.model_path}[/green]")


@app.command(name="train")
def train_command(
    config: ConfigOption = None,
    train: Annotated[
        Path | None,
        typer.Option("--train", help="Training TSV path (overrides config)."),
    ] = None,
    model: ModelOption = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Fit a model on the training data and save it."""
    from issue_classifier.ingestion.issues import load_issues
    from issue_classifier.modeling.persistence import save_model
    from issue_classifier.modeling.training import smoke_test, train_model

    pipeline_config = _setup(config, train=train, model=model, verbose=verbose)

    console.print(f"[blue]Training on {pipeline_config.train_path}[/blue]")
    console.print(f"[dim]Trainer: {pipeline_config.training.trainer}[/dim]")

    try:
        issues = load_issues(pipeline_config.train_path, pipeline_config)
        trained = train_model(issues, pipeline_config)
        smoke_test(trained, echo=_echo)
        model_path, metadata_path = save_model(trained, pipeline_config.model_path)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e
    except Exception as e:
        console.print(f"[red]Training failed: {e}[/red]")
        raise typer.Exit(code=1) from e

    table = Table(title="Training Results")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Trainer", trained.name)
    table.add_row("Training samples", str(trained.n_samples))
    table.add_row("Areas", str(len(trained.classes)))
    table.add_row("Training time (s)", f"{trained.training_time_s:.2f}")
    console.print(table)

    console.print(f"\n[green]Saved model to: {model_path}[/green]")
    console.print(f"[dim]Metadata: {metadata_path}[/dim]")


@app.command()
def evaluate(
    config: ConfigOption = None,
    test: Annotated[
        Path | None,
        typer.Option("--test", help="Test TSV path (overrides config)."),
    ] = None,
    model: ModelOption = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Evaluate a saved model on the test data."""
    from issue_classifier.evaluation.metrics import evaluate_model
    from issue_classifier.evaluation.report import format_metrics_block, metrics_table
    from issue_classifier.ingestion.issues import load_issues
    from issue_classifier.modeling.persistence import load_model

    pipeline_config = _setup(config, test=test, model=model, verbose=verbose)

    try:
        loaded = load_model(pipeline_config.model_path)
        test_issues = load_issues(pipeline_config.test_path, pipeline_config)
        metrics = evaluate_model(loaded.model, test_issues)
    except FileNotFoundError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from e
    except Exception as e:
        console.print(f"[red]Evaluation failed: {e}[/red]")
        raise typer.Exit(code=1) from e

    _echo(format_metrics_block(metrics))
    if verbose:
        console.print(metrics_table(metrics))


@app.command()
def predict(
    title: Annotated[str, typer.Option("--title", "-t", help="Issue title.")],
    description: Annotated[
        str,
        typer.Option("--description", "-d", help="Issue description."),
    ] = "",
    config: ConfigOption = None,
    model: ModelOption = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v")] = False,
) -> None:
    """Predict the area of a single issue with a saved model."""
    from issue_classifier.modeling.inference import create_prediction_engine
    from issue_classifier.modeling.persistence import load_model
    from issue_classifier.schemas.issue import GitHubIssue
    from issue_classifier.workflow import predict_issue

    pipeline_config = _setup(config, model=model, verbose=verbose)

    try:
        loaded = load_model(pipeline_config.model_path)
    except FileNotFoundError as e:
        console.print(f"[red]Model not found: {e}[/red]")
        raise typer.Exit(code=1) from e
    except Exception as e:
        console.print(f"[red]Error loading model: {e}[/red]")
        raise typer.Exit(code=1) from e

    engine = create_prediction_engine(loaded.model, loaded.schema)
    prediction = predict_issue(
        engine, GitHubIssue(title=title, description=description), echo=_echo
    )

    if verbose:
        table = Table(title="Area Scores")
        table.add_column("Area", style="cyan")
        table.add_column("Score", style="green")
        ranked = sorted(prediction.scores.items(), key=lambda item: -item[1])
        for area, score in ranked:
            table.add_row(area, f"{score:.4f}")
        console.print(table)


@app.command()
def trainers() -> None:
    """List available trainers."""
    from issue_classifier.config.settings import DEFAULT_TRAINER
    from issue_classifier.modeling.models import TRAINER_REGISTRY

    table = Table(title="Trainers")
    table.add_column("Name", style="cyan")
    table.add_column("Estimator", style="green")
    table.add_column("Default", style="dim")
    for name, (trainer_class, _) in TRAINER_REGISTRY.items():
        table.add_row(name, trainer_class.__name__, "yes" if name == DEFAULT_TRAINER else "")
    console.print(table)


@app.command()
def version() -> None:
    """Show version information."""
    from issue_classifier import __version__

    console.print(f"issue-classifier version {__version__}")


if __name__ == "__main__":
    app()
