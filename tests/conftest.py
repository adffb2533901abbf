"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pandas as pd
import pytest

from issue_classifier.config.settings import (
    ClassifierConfig,
    DataPathsConfig,
    TrainingConfig,
)

AREA_TEXT = {
    "area-networking": [
        ("WebSocket connection drops", "The websocket connection drops after a few seconds of http traffic"),
        ("HTTP client latency is high", "Requests through the http client show high latency on every socket"),
        ("SignalR reconnect fails", "SignalR cannot reconnect the websocket after the network changes"),
        ("Socket timeout on Linux", "A socket timeout happens when the connection is idle on Linux"),
        ("Kestrel rejects connections", "Kestrel rejects new http connections under load"),
        ("Slow websocket handshake", "The websocket handshake is slow and the connection stalls"),
        ("HTTP/2 stream reset", "An http/2 stream reset closes the socket connection"),
        ("Proxy breaks websockets", "Behind a proxy the websocket connection never opens"),
    ],
    "area-data": [
        ("Entity Framework migration fails", "Running the database migration with Entity Framework throws"),
        ("SQL query is slow", "The generated sql query scans the whole database table"),
        ("Database connection string ignored", "Entity Framework ignores the database connection string"),
        ("LINQ query translation error", "The LINQ query cannot be translated to sql by the database provider"),
        ("EF Core tracking bug", "Entity Framework change tracking saves the wrong database rows"),
        ("Transaction rollback missing", "The database transaction is not rolled back after the sql error"),
        ("Seed data duplicated", "Seeding the database with Entity Framework duplicates rows"),
        ("Stored procedure mapping", "Mapping a sql stored procedure result in the database fails"),
    ],
    "area-ui": [
        ("Button does not render", "The submit button does not render in the razor page layout"),
        ("CSS not applied", "The css stylesheet is not applied to the razor layout"),
        ("Layout breaks on resize", "The page layout breaks when the window is resized and the button moves"),
        ("Blazor component flickers", "The blazor component flickers on every render of the page"),
        ("Razor tag helper missing", "The razor tag helper for the button is missing from the page"),
        ("Dark theme colors wrong", "The css theme colors are wrong in the layout header"),
        ("Form validation message hidden", "The validation message is hidden behind the button in the form"),
        ("Modal dialog renders twice", "The modal dialog renders twice on the razor page"),
    ],
}


def make_issues(rows_per_area: int | None = None, offset: int = 0) -> pd.DataFrame:
    """Build a labeled issue table from the synthetic texts."""
    records = []
    for area, texts in AREA_TEXT.items():
        chosen = texts[offset:] if rows_per_area is None else texts[offset : offset + rows_per_area]
        for title, description in chosen:
            records.append(
                {
                    "ID": str(len(records) + 1),
                    "Area": area,
                    "Title": title,
                    "Description": description,
                }
            )
    return pd.DataFrame(records, columns=["ID", "Area", "Title", "Description"])


def write_tsv(df: pd.DataFrame, path: Path) -> Path:
    """Write df as a headered TSV the way the tutorial data files look."""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = ["\t".join(df.columns)]
    lines += ["\t".join(str(v) for v in row) for row in df.itertuples(index=False)]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture
def tsv_writer():
    """Return the TSV writing helper."""
    return write_tsv


@pytest.fixture
def train_issues() -> pd.DataFrame:
    """Labeled training issues (6 per area)."""
    return make_issues(rows_per_area=6)


@pytest.fixture
def test_issues() -> pd.DataFrame:
    """Held-out labeled issues (2 per area), disjoint from train_issues."""
    return make_issues(offset=6)


@pytest.fixture
def data_dir(tmp_path: Path, train_issues: pd.DataFrame, test_issues: pd.DataFrame) -> Path:
    """Directory holding Data/issues_train.tsv and Data/issues_test.tsv."""
    write_tsv(train_issues, tmp_path / "Data" / "issues_train.tsv")
    write_tsv(test_issues, tmp_path / "Data" / "issues_test.tsv")
    return tmp_path


@pytest.fixture
def config(data_dir: Path) -> ClassifierConfig:
    """Configuration rooted at data_dir, with caching disabled."""
    return ClassifierConfig(
        project="test-issues",
        data_paths=DataPathsConfig(data_root=data_dir),
        training=TrainingConfig(l2_regularization=0.1, cache=False),
    )
