"""Input schema recorded with a fitted model."""

from dataclasses import dataclass

import pandas as pd

from issue_classifier.schemas.issue import TEXT_COLUMNS


@dataclass(frozen=True)
class ModelInputSchema:
    """
    Columns of the table a model was fitted on.

    Saved next to the model so a reloaded model can check that the
    records it is asked to score carry the columns it expects.

    Attributes:
        columns: Column names in training-table order.
        dtypes: Column dtype names, parallel to ``columns``.
        required: Columns that scoring input must provide.
    """

    columns: tuple[str, ...]
    dtypes: tuple[str, ...]
    required: tuple[str, ...] = tuple(TEXT_COLUMNS)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> "ModelInputSchema":
        """Record the schema of a training table."""
        return cls(
            columns=tuple(str(col) for col in df.columns),
            dtypes=tuple(str(dtype) for dtype in df.dtypes),
        )

    def missing_columns(self, df: pd.DataFrame) -> list[str]:
        """Required columns absent from df."""
        return [col for col in self.required if col not in df.columns]

    def validate(self, df: pd.DataFrame) -> pd.DataFrame:
        """
        Check that df can be scored by the model.

        Raises:
            ValueError: If required columns are missing.
        """
        missing = self.missing_columns(df)
        if missing:
            msg = f"Input is missing required columns: {', '.join(missing)}"
            raise ValueError(msg)
        return df

    def to_dict(self) -> dict[str, list[str]]:
        """Convert to dictionary."""
        return {
            "columns": list(self.columns),
            "dtypes": list(self.dtypes),
            "required": list(self.required),
        }
