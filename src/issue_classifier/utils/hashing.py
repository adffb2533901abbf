"""
Deterministic hashing utilities.

Provides content-based fingerprints for training tables and configuration,
recorded alongside saved models.
"""

import hashlib
from pathlib import Path
from typing import Any

import pandas as pd

from issue_classifier.utils.logging import get_logger

log = get_logger(__name__)


def hash_dataframe(
    df: pd.DataFrame,
    columns: list[str] | None = None,
) -> str:
    """
    Compute deterministic hash of a DataFrame.

    Args:
        df: DataFrame to hash.
        columns: Optional subset of columns to include.

    Returns:
        Hex digest string.
    """
    if columns:
        df = df[columns]

    hasher = hashlib.md5()
    hasher.update(f"{df.shape}".encode())
    hasher.update(",".join(map(str, df.columns)).encode())
    hasher.update(pd.util.hash_pandas_object(df, index=False).to_numpy().tobytes())
    digest = hasher.hexdigest()

    log.debug("Hashed dataframe", rows=len(df), digest=digest)
    return digest


def hash_config(config: Any) -> str:
    """
    Compute hash of a configuration object.

    Args:
        config: Configuration object (Pydantic model or anything printable).

    Returns:
        Short hex digest string.
    """
    if hasattr(config, "model_dump"):
        config_str = str(config.model_dump(mode="json"))
    else:
        config_str = str(config)

    return hashlib.md5(config_str.encode()).hexdigest()[:12]


def hash_file_content(path: str | Path, chunk_size: int = 8192) -> str:
    """
    Compute hash of file contents.

    Args:
        path: Path to file.
        chunk_size: Chunk size for reading.

    Returns:
        Hex digest string, or "missing" if the file does not exist.
    """
    p = Path(path)
    if not p.exists():
        return "missing"

    hasher = hashlib.md5()
    with p.open("rb") as f:
        while chunk := f.read(chunk_size):
            hasher.update(chunk)

    return hasher.hexdigest()
