"""
Schema definitions using Pandera for data validation.

All data contracts are defined here to ensure explicit,
validated data structures throughout the pipeline.
"""

from issue_classifier.schemas.issue import (
    AREA_COLUMN,
    DESCRIPTION_COLUMN,
    ID_COLUMN,
    PREDICTED_AREA_COLUMN,
    REQUIRED_COLUMNS,
    TEXT_COLUMNS,
    TITLE_COLUMN,
    GitHubIssue,
    IssueInputSchema,
    IssuePrediction,
    IssueSchema,
    PredictionSchema,
)
from issue_classifier.schemas.model_input import ModelInputSchema

__all__ = [
    "AREA_COLUMN",
    "DESCRIPTION_COLUMN",
    "ID_COLUMN",
    "PREDICTED_AREA_COLUMN",
    "REQUIRED_COLUMNS",
    "TEXT_COLUMNS",
    "TITLE_COLUMN",
    "GitHubIssue",
    "IssueInputSchema",
    "IssuePrediction",
    "IssueSchema",
    "ModelInputSchema",
    "PredictionSchema",
]
