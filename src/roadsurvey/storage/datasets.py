from __future__ import annotations

from pathlib import Path

import pandas as pd


def ensure_parent_dir(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)


def geoposition_csv_path(outputs_dir: Path, code: str) -> Path:
    return outputs_dir / f"{code}_geoposition.csv"


def assay_csv_path(outputs_dir: Path) -> Path:
    return outputs_dir / "assay.csv"


def save_csv(df: pd.DataFrame, path: Path) -> Path:
    ensure_parent_dir(path)
    df.to_csv(path, index=False)
    return path


def load_csv(path: Path, *, as_text: bool = False) -> pd.DataFrame:
    """Read a generated CSV; `as_text` keeps every field as the written string."""

    if as_text:
        return pd.read_csv(path, dtype=str, keep_default_na=False)
    return pd.read_csv(path)
