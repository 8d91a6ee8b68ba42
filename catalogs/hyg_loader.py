"""
HYG Catalogue Loader

Reads an HYG-style star CSV (hygdata v3/v4 column names) into Star
records. Only naked-eye stars are kept: rows at or beyond the magnitude
limit are discarded here, so the sky math never sees them.
"""

from __future__ import annotations
import logging
from pathlib import Path
from typing import List

import numpy as np
import pandas as pd

from core.errors import CatalogError
from core.types import Star

logger = logging.getLogger(__name__)

DEFAULT_MAGNITUDE_LIMIT = 6.0
DEFAULT_SEPARATOR = ";"

_REQUIRED = ("ra", "dec", "mag")


def _pick_col(df: pd.DataFrame, *names: str) -> str | None:
    cols = {c.lower().strip(): c for c in df.columns}
    for n in names:
        if n.lower() in cols:
            return cols[n.lower()]
    return None


def _text(value) -> str | None:
    if value is None or (isinstance(value, float) and np.isnan(value)):
        return None
    value = str(value).strip()
    return value or None


def _number(value) -> float | None:
    if value is None or np.isnan(value):
        return None
    return float(value)


def load_catalog(path: str | Path,
                 magnitude_limit: float = DEFAULT_MAGNITUDE_LIMIT,
                 separator: str = DEFAULT_SEPARATOR) -> List[Star]:
    """
    Load stars brighter than `magnitude_limit` from a CSV file.

    Args:
        path: CSV file with at least ra (hours), dec (deg) and mag columns.
        magnitude_limit: Rows with mag >= limit are dropped.
        separator: Field separator.

    Returns:
        List of Star, in file order.

    Raises:
        CatalogError: File missing/empty or required columns absent.
    """
    path = Path(path)
    try:
        df = pd.read_csv(path, sep=separator, dtype=str, keep_default_na=False,
                         skipinitialspace=True)
    except FileNotFoundError as e:
        raise CatalogError(f"Catalog file not found: {path}") from e
    except pd.errors.EmptyDataError as e:
        raise CatalogError(f"Catalog file is empty: {path}") from e
    except pd.errors.ParserError as e:
        raise CatalogError(f"Malformed catalog file {path}: {e}") from e

    cols = {name: _pick_col(df, name) for name in _REQUIRED}
    missing = [name for name, col in cols.items() if col is None]
    if missing:
        raise CatalogError(
            f"{path.name}: missing required column(s) {missing}. Found: {list(df.columns)}"
        )
    if df.empty:
        raise CatalogError(f"Catalog file has no data rows: {path}")

    id_c = _pick_col(df, "id", "hip")
    name_c = _pick_col(df, "proper", "name")
    ci_c = _pick_col(df, "ci", "b-v", "bv")
    con_c = _pick_col(df, "con", "constellation")
    dist_c = _pick_col(df, "dist", "distance")
    spect_c = _pick_col(df, "spect", "spectral_type")

    ra = pd.to_numeric(df[cols["ra"]], errors="coerce")
    dec = pd.to_numeric(df[cols["dec"]], errors="coerce")
    mag = pd.to_numeric(df[cols["mag"]], errors="coerce")

    valid = ra.notna() & dec.notna() & mag.notna()
    skipped = int((~valid).sum())
    keep = valid & (mag < magnitude_limit)

    ci = pd.to_numeric(df[ci_c], errors="coerce").fillna(0.0) if ci_c else None
    dist = pd.to_numeric(df[dist_c], errors="coerce") if dist_c else None

    stars: List[Star] = []
    for idx in np.flatnonzero(keep.to_numpy()):
        row_id = _text(df[id_c].iat[idx]) if id_c else None
        stars.append(Star(
            id=row_id or str(idx + 1),
            ra=float(ra.iat[idx]),
            dec=float(dec.iat[idx]),
            mag=float(mag.iat[idx]),
            color_index=float(ci.iat[idx]) if ci is not None else 0.0,
            name=_text(df[name_c].iat[idx]) if name_c else None,
            constellation=_text(df[con_c].iat[idx]) if con_c else None,
            distance=_number(dist.iat[idx]) if dist is not None else None,
            spectral_type=_text(df[spect_c].iat[idx]) if spect_c else None,
        ))

    logger.info("Loaded %d stars with mag < %.1f from %s (%d invalid rows skipped)",
                len(stars), magnitude_limit, path.name, skipped)
    return stars
