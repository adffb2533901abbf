"""
Issue Classifier: GitHub issue area classification.

This package trains, evaluates, persists and reloads a multi-class
text classifier that maps an issue's title and description to its area.
"""

from importlib.metadata import version

__version__ = version("issue-classifier")

__all__ = ["__version__"]
