"""Tests for Pandera schemas and record types."""

import pandas as pd
import pandera.errors
import pytest

from issue_classifier.schemas import (
    GitHubIssue,
    IssueInputSchema,
    IssuePrediction,
    IssueSchema,
    ModelInputSchema,
    PredictionSchema,
)


class TestIssueSchema:
    """Tests for IssueSchema."""

    def test_valid_data(self) -> None:
        """Test that valid data passes validation."""
        df = pd.DataFrame(
            {
                "ID": ["1", "2"],
                "Area": ["area-ui", "area-data"],
                "Title": ["Button", "Query"],
                "Description": ["Broken", "Slow"],
            }
        )
        assert len(IssueSchema.validate(df)) == 2

    def test_extra_columns_allowed(self) -> None:
        """Test that unknown columns pass through."""
        df = pd.DataFrame(
            {
                "Area": ["area-ui"],
                "Title": ["Button"],
                "Description": ["Broken"],
                "Labels": ["bug"],
            }
        )
        assert "Labels" in IssueSchema.validate(df).columns

    def test_missing_area(self) -> None:
        """Test that labeled data requires Area."""
        df = pd.DataFrame({"Title": ["Button"], "Description": ["Broken"]})
        with pytest.raises(pandera.errors.SchemaError):
            IssueSchema.validate(df)

    def test_input_schema_without_area(self) -> None:
        """Test that scoring input does not need Area."""
        df = pd.DataFrame({"Title": ["Button"], "Description": ["Broken"]})
        assert len(IssueInputSchema.validate(df)) == 1


class TestPredictionSchema:
    """Tests for PredictionSchema."""

    def test_empty_prediction_rejected(self) -> None:
        """Test that an empty predicted area fails validation."""
        with pytest.raises(pandera.errors.SchemaError):
            PredictionSchema.validate(pd.DataFrame({"PredictedArea": [""]}))


class TestModelInputSchema:
    """Tests for ModelInputSchema."""

    def test_from_frame(self) -> None:
        """Test columns and dtypes are recorded in order."""
        df = pd.DataFrame({"Area": ["a"], "Title": ["t"], "Description": ["d"]})
        schema = ModelInputSchema.from_frame(df)
        assert schema.columns == ("Area", "Title", "Description")
        assert len(schema.dtypes) == 3

    def test_validate_missing_columns(self) -> None:
        """Test that scoring input without text columns is rejected."""
        schema = ModelInputSchema(columns=("Title", "Description"), dtypes=("object",) * 2)
        with pytest.raises(ValueError, match="Description"):
            schema.validate(pd.DataFrame({"Title": ["t"]}))


class TestRecords:
    """Tests for GitHubIssue and IssuePrediction."""

    def test_issue_to_row_drops_area(self) -> None:
        """Test the scoring row carries only the text columns."""
        issue = GitHubIssue(title="t", description="d", area="area-ui")
        assert issue.to_row() == {"Title": "t", "Description": "d"}

    def test_records_are_immutable(self) -> None:
        """Test records cannot be mutated."""
        issue = GitHubIssue(title="t", description="d")
        with pytest.raises(AttributeError):
            issue.title = "x"  # type: ignore[misc]

    def test_prediction_confidence(self) -> None:
        """Test confidence is the score of the predicted area."""
        prediction = IssuePrediction(area="b", scores={"a": 0.25, "b": 0.75})
        assert prediction.confidence == 0.75
