"""
Dataset loading for the KNN boundary visualization.

Reads the Palmer penguins CSV (local path or URL) with pandas and turns each
row into a LabeledPoint (x=bill length, y=bill depth, label=species), keeping
file order. Rows with missing or non-numeric measurements are excluded by
default; the dataset ships a few such rows.
"""

import logging
import os
from typing import List, Optional
from urllib.error import URLError

import numpy as np
import pandas as pd
from knn_boundary import config
from knn_boundary.errors import LoadFailure, MalformedPoint
from knn_boundary.point_set import LabeledPoint

logger = logging.getLogger(__name__)


def _is_url(source: str) -> bool:
    return source.startswith(('http://', 'https://'))


def read_dataset(source: str) -> pd.DataFrame:
    """
    Read the raw CSV into a DataFrame

    Args:
        source: Local CSV path or http(s) URL

    Returns:
        DataFrame with at least the x, y and label columns

    Raises:
        LoadFailure: file/URL unreadable, unparsable or missing required columns
    """
    if not _is_url(source) and not os.path.exists(source):
        raise LoadFailure(source, "file does not exist")

    try:
        df = pd.read_csv(source)
    except (pd.errors.EmptyDataError, pd.errors.ParserError, UnicodeDecodeError) as e:
        raise LoadFailure(source, f"could not parse CSV: {e}") from e
    except (URLError, OSError) as e:
        raise LoadFailure(source, f"could not read source: {e}") from e

    required = [config.X_COLUMN, config.Y_COLUMN, config.LABEL_COLUMN]
    missing_columns = [c for c in required if c not in df.columns]
    if missing_columns:
        raise LoadFailure(source, f"missing columns: {', '.join(missing_columns)}")

    return df


def records_to_points(df: pd.DataFrame, strict: bool = False) -> List[LabeledPoint]:
    """
    Convert dataset rows to LabeledPoint in row order.

    Measurements are coerced to float; anything that is not a finite number,
    and any empty species, makes the row malformed.

    Args:
        df: DataFrame with the x, y and label columns
        strict: Raise MalformedPoint on the first bad row instead of excluding it

    Returns:
        List of LabeledPoint
    """
    xs = pd.to_numeric(df[config.X_COLUMN], errors='coerce').to_numpy(dtype=np.float64)
    ys = pd.to_numeric(df[config.Y_COLUMN], errors='coerce').to_numpy(dtype=np.float64)
    labels = df[config.LABEL_COLUMN]

    points = []
    n_malformed = 0
    for i in range(len(df)):
        label = labels.iloc[i]
        label = '' if pd.isna(label) else str(label).strip()

        reason = None
        if not np.isfinite(xs[i]):
            reason = f"{config.X_COLUMN} is missing or not numeric"
        elif not np.isfinite(ys[i]):
            reason = f"{config.Y_COLUMN} is missing or not numeric"
        elif label == '':
            reason = f"{config.LABEL_COLUMN} is empty"

        if reason is not None:
            if strict:
                raise MalformedPoint(i, reason)
            n_malformed += 1
            continue

        points.append(LabeledPoint(float(xs[i]), float(ys[i]), label))

    if n_malformed:
        logger.warning("Excluded %d malformed row(s) out of %d", n_malformed, len(df))
    return points


def load_points(source: Optional[str] = None, strict: bool = False) -> List[LabeledPoint]:
    """
    Load the labeled points, turning a load failure into an empty dataset.

    Args:
        source: CSV path or URL, defaults to the public penguins CSV
        strict: Propagate MalformedPoint instead of excluding bad rows

    Returns:
        List of LabeledPoint, empty if the dataset could not be loaded
    """
    source = config.PENGUINS_CSV_URL if source is None else source
    try:
        df = read_dataset(source)
    except LoadFailure as e:
        logger.error("%s", e)
        return []

    points = records_to_points(df, strict=strict)
    logger.info("Loaded %d labeled point(s) from %s", len(points), source)
    return points
