"""
Console reporting of evaluation results.

Renders the fixed-format metrics block printed after evaluation and a
rich table with the per-class breakdown.
"""

from rich.markup import escape
from rich.table import Table

from issue_classifier.evaluation.metrics import ClassificationMetrics

RULE_WIDTH = 109


def format_decimal(value: float, *, leading_zero: bool = True) -> str:
    """
    Format value with at most three decimals, trailing zeros trimmed.

    With leading_zero=False a lone zero before the decimal point is
    dropped (0.25 -> ".25") and a value that rounds to zero prints as an
    empty string, so the "#.###" fields of the metrics block stay blank.

    Examples:
        format_decimal(0.8500) -> "0.85"
        format_decimal(1.0) -> "1"
        format_decimal(0.25, leading_zero=False) -> ".25"
        format_decimal(0.0, leading_zero=False) -> ""
    """
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    if text in ("0", "-0"):
        return "0" if leading_zero else ""
    if not leading_zero:
        if text.startswith("0."):
            text = text[1:]
        elif text.startswith("-0."):
            text = "-" + text[2:]
    return text


def format_metrics_block(metrics: ClassificationMetrics) -> str:
    """
    Render metrics as the fixed-format console block.

    Args:
        metrics: Evaluation metrics.

    Returns:
        Multi-line string (no trailing newline).
    """
    lines = [
        "*" * RULE_WIDTH,
        "*       Metrics for Multi-class Classification model - Test Data     ",
        "*" + "-" * (RULE_WIDTH - 1),
        f"*       MicroAccuracy:    {format_decimal(metrics.micro_accuracy)}",
        f"*       MacroAccuracy:    {format_decimal(metrics.macro_accuracy)}",
        f"*       LogLoss:          {format_decimal(metrics.log_loss, leading_zero=False)}",
        "*       LogLossReduction: "
        f"{format_decimal(metrics.log_loss_reduction, leading_zero=False)}",
        "*" * RULE_WIDTH,
    ]
    return "\n".join(lines)


def metrics_table(metrics: ClassificationMetrics) -> Table:
    """Rich table with summary and per-class metrics."""
    table = Table(title="Multi-class Classification Metrics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Samples", str(metrics.n_samples))
    table.add_row("Micro accuracy", f"{metrics.micro_accuracy:.4f}")
    table.add_row("Macro accuracy", f"{metrics.macro_accuracy:.4f}")
    table.add_row(f"Top-{metrics.top_k} accuracy", f"{metrics.top_k_accuracy:.4f}")
    table.add_row("Log-loss", f"{metrics.log_loss:.4f}")
    table.add_row("Log-loss reduction", f"{metrics.log_loss_reduction:.4f}")

    for area, loss in sorted(metrics.per_class_log_loss.items()):
        table.add_row(escape(f"Log-loss [{area}]"), f"{loss:.4f}", style="dim")

    return table
