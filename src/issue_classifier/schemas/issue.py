"""
Pandera schemas and record types for GitHub issue data.

An issue record carries free text (Title, Description) and, in labeled
files, the categorical Area it was filed under.
"""

from dataclasses import dataclass, field
from typing import Optional

import pandera.pandas as pa
from pandera.typing import Series

# Column names of the TSV contract. Order matches the tutorial data files.
ID_COLUMN = "ID"
AREA_COLUMN = "Area"
TITLE_COLUMN = "Title"
DESCRIPTION_COLUMN = "Description"
PREDICTED_AREA_COLUMN = "PredictedArea"

TEXT_COLUMNS = [TITLE_COLUMN, DESCRIPTION_COLUMN]
REQUIRED_COLUMNS = [AREA_COLUMN, TITLE_COLUMN, DESCRIPTION_COLUMN]


class IssueInputSchema(pa.DataFrameModel):
    """
    Schema for issues to be scored.

    Only the text columns are required; Area may be absent.
    """

    Title: Series[str] = pa.Field(description="Issue title")
    Description: Series[str] = pa.Field(description="Issue body text")

    class Config:
        """Schema configuration."""

        name = "IssueInputSchema"
        strict = False  # Allow extra columns
        coerce = True


class IssueSchema(IssueInputSchema):
    """
    Schema for labeled issue data (training and test files).

    Adds the Area label and the optional issue identifier.
    """

    ID: Optional[Series[str]] = pa.Field(description="Issue identifier")
    Area: Series[str] = pa.Field(
        str_length={"min_value": 1},
        description="Area label the issue was filed under",
    )

    class Config:
        """Schema configuration."""

        name = "IssueSchema"
        strict = False
        coerce = True


class PredictionSchema(pa.DataFrameModel):
    """Schema for batch prediction output."""

    PredictedArea: Series[str] = pa.Field(
        str_length={"min_value": 1},
        description="Area decoded from the predicted label key",
    )

    class Config:
        """Schema configuration."""

        name = "PredictionSchema"
        strict = False
        coerce = True


@dataclass(frozen=True)
class GitHubIssue:
    """
    A single issue record.

    Attributes:
        title: Issue title.
        description: Issue body text.
        area: Area label; None for issues that have not been classified.
        id: Optional issue identifier.
    """

    title: str
    description: str
    area: str | None = None
    id: str | None = None

    def to_row(self) -> dict[str, str]:
        """Return the record as a row keyed by the TSV column names."""
        return {TITLE_COLUMN: self.title, DESCRIPTION_COLUMN: self.description}


@dataclass(frozen=True)
class IssuePrediction:
    """
    Result of scoring one issue.

    Attributes:
        area: Predicted area label.
        scores: Per-class probabilities keyed by area label.
    """

    area: str
    scores: dict[str, float] = field(default_factory=dict)

    @property
    def confidence(self) -> float:
        """Probability assigned to the predicted area."""
        return self.scores.get(self.area, 0.0)
