"""
GitHub issue TSV ingestion.

Reads tab-separated issue files with a header row into a validated
DataFrame. Text is kept verbatim: no quoting rules, no NA inference.
"""

import csv
from pathlib import Path

import pandas as pd

from issue_classifier.config.settings import ClassifierConfig
from issue_classifier.ingestion.base import DataLoader
from issue_classifier.schemas.issue import IssueSchema
from issue_classifier.utils.logging import get_logger

log = get_logger(__name__)


class IssueLoader(DataLoader[IssueSchema]):
    """Loader for labeled issue TSV files (training or test)."""

    def __init__(self, config: ClassifierConfig, path: Path) -> None:
        """
        Initialize issue loader.

        Args:
            config: Classifier configuration.
            path: Path to the TSV file, already resolved against the
                data root (see ClassifierConfig.train_path).
        """
        super().__init__(config, IssueSchema)
        self.path = Path(path)

    def _load_raw(self) -> pd.DataFrame:
        """Load the issue TSV."""
        path = self.path

        if not path.exists():
            msg = f"Issue data file not found: {path}"
            raise FileNotFoundError(msg)

        log.info("Loading issues", path=str(path))

        df = pd.read_csv(
            path,
            sep="\t",
            header=0,
            dtype=str,
            keep_default_na=False,
            quoting=csv.QUOTE_NONE,
            encoding="utf-8",
        )

        # Header cells occasionally carry stray whitespace
        df.columns = [str(col).strip() for col in df.columns]
        return df


def load_issues(
    path: Path,
    config: ClassifierConfig | None = None,
    *,
    validate: bool = True,
) -> pd.DataFrame:
    """
    Load a labeled issue TSV.

    Args:
        path: TSV path (header row; Area, Title and Description columns).
        config: Classifier configuration (defaults used if None).
        validate: Whether to validate against IssueSchema.

    Returns:
        One row per issue record.

    Raises:
        FileNotFoundError: If the file does not exist.
        pandera.errors.SchemaError: If a required column is missing.
    """
    if config is None:
        config = ClassifierConfig()
    return IssueLoader(config, path).load(validate=validate)
