"""Raw → clean transformation nodes for the NOAA Storm Database extract.

Each function is a Kedro node: pure input → output, apart from the
loader which caches the raw file on first run.  Together they take the
bz2-compressed StormData CSV and produce one row per valid event with
decoded property and crop damage in dollars.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pandas as pd
import requests

from storm_impact.impact import REQUIRED_NUMERIC_FIELDS, decode_exponent

logger = logging.getLogger(__name__)

# ── Raw NOAA column → our column name ────────────────────────────
COLUMN_MAP: dict[str, str] = {
    "EVTYPE": "event_type",
    "FATALITIES": "fatalities",
    "INJURIES": "injuries",
    "PROPDMG": "property_damage",
    "PROPDMGEXP": "property_damage_exp",
    "CROPDMG": "crop_damage",
    "CROPDMGEXP": "crop_damage_exp",
}

# (code column, amount column, exponent column, dollars column)
_DAMAGE_COLUMNS: list[tuple[str, str, str, str]] = [
    (
        "property_damage_exp",
        "property_damage",
        "property_damage_exponent",
        "property_damage_dollars",
    ),
    ("crop_damage_exp", "crop_damage", "crop_damage_exponent", "crop_damage_dollars"),
]

_DOWNLOAD_TIMEOUT = 60
_CHUNK_SIZE = 1 << 16


def _download(url: str, target: Path) -> None:
    """Stream ``url`` into ``target`` via a temporary file."""
    target.parent.mkdir(parents=True, exist_ok=True)
    partial = target.with_name(target.name + ".part")

    logger.info("Downloading %s → %s", url, target)
    response = requests.get(url, stream=True, timeout=_DOWNLOAD_TIMEOUT)
    response.raise_for_status()

    with open(partial, "wb") as f:
        for chunk in response.iter_content(chunk_size=_CHUNK_SIZE):
            f.write(chunk)
    partial.replace(target)

    logger.info("Downloaded %.1f MB", target.stat().st_size / 1024 / 1024)


# ── Node 1 ───────────────────────────────────────────────────────────
def load_storm_data(raw_data_path: str, source_url: str | None) -> pd.DataFrame:
    """Read the cached StormData file, downloading it first if missing.

    Only the seven impact columns are read (matched case-insensitively)
    and every value is kept as a string; numeric parsing and validation
    happen in ``drop_malformed_records``.

    Args:
        raw_data_path: Local path of the cached CSV (optionally .bz2/.gz).
        source_url: Where to fetch the file from when it is not cached.

    Returns:
        Raw DataFrame with the original NOAA column names.
    """
    path = Path(raw_data_path)
    if not path.exists():
        if not source_url:
            raise FileNotFoundError(
                f"Storm data not found at {path} and no source_url configured"
            )
        _download(source_url, path)
    else:
        logger.info("Using cached storm data at %s", path)

    wanted = set(COLUMN_MAP)
    df = pd.read_csv(
        path,
        usecols=lambda c: c.strip().upper() in wanted,
        dtype=str,
        keep_default_na=False,
        na_values=[""],
    )
    df.columns = df.columns.str.strip().str.upper()

    logger.info(
        "Loaded %s: %s rows, %d columns",
        path.name,
        f"{len(df):,}",
        len(df.columns),
    )
    return df


# ── Node 2 ───────────────────────────────────────────────────────────
def select_impact_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Keep the seven impact columns and rename them to snake_case.

    Args:
        df: Raw DataFrame from ``load_storm_data``.

    Returns:
        DataFrame with exactly the columns in COLUMN_MAP's values.
    """
    missing = [c for c in COLUMN_MAP if c not in df.columns]
    if missing:
        raise KeyError(f"Expected columns not found in data: {missing}")

    selected = df[list(COLUMN_MAP)].rename(columns=COLUMN_MAP)
    logger.info(
        "Column selection: kept %d of %d columns",
        len(selected.columns),
        len(df.columns),
    )
    return selected


# ── Node 3 ───────────────────────────────────────────────────────────
def drop_malformed_records(df: pd.DataFrame) -> pd.DataFrame:
    """Parse the numeric fields and drop rows that fail validation.

    A row is malformed when event_type is missing or blank, or any of
    fatalities, injuries, property_damage, crop_damage is missing,
    non-numeric, non-finite or negative.  Malformed rows are skipped, not
    fatal; the count and a sample are logged so data problems stay visible.

    Args:
        df: DataFrame after column selection.

    Returns:
        DataFrame of valid rows with float numeric columns and the
        exponent codes as strings ("" where missing).
    """
    df = df.copy()

    bad = df["event_type"].fillna("").astype(str).str.strip() == ""
    if bad.any():
        logger.warning(
            "event_type: %s values missing or blank", f"{bad.sum():,}"
        )

    for col in REQUIRED_NUMERIC_FIELDS:
        parsed = pd.to_numeric(df[col], errors="coerce").astype(float)
        col_bad = ~np.isfinite(parsed) | (parsed < 0)
        if col_bad.any():
            logger.warning(
                "%s: %s values missing or invalid. Samples: %s",
                col,
                f"{col_bad.sum():,}",
                list(df.loc[col_bad, col].unique()[:10]),
            )
        df[col] = parsed
        bad |= col_bad

    for code_col, *_ in _DAMAGE_COLUMNS:
        df[code_col] = df[code_col].fillna("").astype(str)

    clean = df[~bad].reset_index(drop=True)
    n_bad = int(bad.sum())
    if n_bad:
        logger.warning(
            "Dropped %s malformed records of %s (%.2f%%)",
            f"{n_bad:,}",
            f"{len(df):,}",
            n_bad / len(df) * 100,
        )
    else:
        logger.info("All %s records passed validation", f"{len(df):,}")
    return clean


# ── Node 4 ───────────────────────────────────────────────────────────
def decode_damage_exponents(df: pd.DataFrame) -> pd.DataFrame:
    """Turn (amount, exponent code) pairs into dollar amounts.

    Uses the same lookup as ``storm_impact.impact.decode_exponent``:
    B=9, M=6, K=3, H=2 (either case), a digit is its own value, and any
    other code ("", "+", "-", "?", ...) means no scaling.

    Creates:
        - property_damage_exponent / crop_damage_exponent
        - property_damage_dollars / crop_damage_dollars

    Args:
        df: Validated DataFrame from ``drop_malformed_records``.

    Returns:
        DataFrame with the four new columns added.
    """
    df = df.copy()

    for code_col, amount_col, exp_col, dollars_col in _DAMAGE_COLUMNS:
        # Few distinct codes in hundreds of thousands of rows: decode once each
        lookup = {code: decode_exponent(code) for code in df[code_col].unique()}
        df[exp_col] = df[code_col].map(lookup).astype("int64")
        df[dollars_col] = df[amount_col] * np.power(10.0, df[exp_col])

        unscaled = sorted(
            c for c, e in lookup.items() if e == 0 and c not in ("", "0")
        )
        if unscaled:
            logger.info(
                "%s: codes treated as no scaling: %s", code_col, unscaled
            )
        logger.info(
            "%s: exponent distribution %s",
            code_col,
            df[exp_col].value_counts().sort_index().to_dict(),
        )

    return df
