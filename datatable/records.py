from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, List, Tuple

import numpy as np
import pandas as pd

from datatable.values import is_missing


logger = logging.getLogger(__name__)

DATA_DIR = Path(__file__).resolve().parents[1] / "data"
SAMPLE_REQUESTS_PATH = DATA_DIR / "sample_requests.csv"


def _plain(value: Any) -> Any:
    if is_missing(value):
        return None
    if isinstance(value, np.generic):
        return value.item()
    return value


def records_from_frame(df: pd.DataFrame) -> List[Dict[str, Any]]:
    if df is None or df.empty:
        return []
    df = df.loc[:, ~df.columns.duplicated()]
    return [{str(k): _plain(v) for k, v in row.items()} for row in df.to_dict(orient="records")]


def read_frame(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    if suffix == ".csv":
        return pd.read_csv(path)
    if suffix == ".json":
        return pd.read_json(path, orient="records")
    if suffix in {".xlsx", ".xls"}:
        return pd.read_excel(path)
    raise ValueError(f"unsupported record file type: {path.suffix!r}")


def file_signature(path: Path) -> Tuple[str, float]:
    return (str(path), path.stat().st_mtime)


@lru_cache(maxsize=8)
def _load_records_cached(signature: Tuple[str, float]) -> Tuple[Dict[str, Any], ...]:
    return tuple(records_from_frame(read_frame(Path(signature[0]))))


def load_records(path: Path | str = SAMPLE_REQUESTS_PATH) -> List[Dict[str, Any]]:
    """Load a record collection from disk; a missing file yields an empty collection."""
    path = Path(path)
    if not path.exists():
        logger.warning("record file not found: %s", path)
        return []
    return [dict(r) for r in _load_records_cached(file_signature(path))]
