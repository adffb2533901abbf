"""
Evaluation layer.

Provides classification metrics, the fixed-format metrics report and
optional MLflow tracking.
"""
