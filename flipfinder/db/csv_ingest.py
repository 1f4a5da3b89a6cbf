"""CSV ingestion pipeline: parse, map columns, normalise rows, collect errors."""

from __future__ import annotations

import io
import time
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

import pandas as pd

from ..models.listing import IngestResult, Listing
from ..utils.io import read_text
from ..utils.logging import format_fields, get_logger
from .columns import missing_required, resolve_columns
from .mappers import RowRejected, map_listing_row

LOGGER = get_logger("db.csv_ingest")

# Data rows are reported 1-based with the header counted as row 1.
ROW_NUMBER_OFFSET = 2

# Placeholder cell for rows that carry more fields than the header.
RAGGED_ROW = "\x00ragged"

SAMPLE_HEADERS = [
    "Address",
    "City",
    "State",
    "Zip",
    "List Price",
    "Beds",
    "Baths",
    "SqFt",
    "Year Built",
    "DOM",
    "Property Type",
    "Public Remarks",
    "MLS#",
]

SAMPLE_ROWS = [
    [
        "1234 Ocean Dr",
        "Miami Beach",
        "FL",
        "33139",
        "$875,000",
        "3",
        "2",
        "1,800",
        "1985",
        "45",
        "Single Family",
        "Fixer upper with great potential! Needs TLC but in prime location.",
        "A11234567",
    ],
    [
        "5678 Collins Ave",
        "Miami Beach",
        "FL",
        "33139",
        "$1,200,000",
        "4",
        "3",
        "2,400",
        "1995",
        "12",
        "Single Family",
        "Beautiful waterfront property, recently renovated.",
        "A11234568",
    ],
]


def _tokenize(content: str, **kwargs) -> pd.DataFrame:
    # Header row is read as data so the literal header strings survive.
    return pd.read_csv(
        io.StringIO(content),
        header=None,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        index_col=False,
        **kwargs,
    )


def _check_syntax(content: str) -> int:
    """Raise on malformed CSV syntax, return the header width.

    Rows with too many fields are skipped here; they are reported per row by
    ``_read_rows``.
    """

    return len(_tokenize(content, on_bad_lines="skip").columns)


def _read_rows(content: str, width: int) -> Tuple[List[str], List[Dict[str, object]], Dict[int, int]]:
    """Split the export into literal headers, data rows and ragged rows.

    Ragged rows keep their position as a placeholder so row numbers line up;
    the returned mapping gives their zero-based data index and field count.
    """

    ragged_counts: List[int] = []

    def _flag_ragged(fields: List[str]) -> List[str]:
        ragged_counts.append(len(fields))
        return [RAGGED_ROW] + [""] * (width - 1)

    values = _tokenize(content, engine="python", on_bad_lines=_flag_ragged).values.tolist()
    headers = ["" if cell is None else str(cell) for cell in values[0]]

    rows: List[Dict[str, object]] = []
    ragged: Dict[int, int] = {}
    counts = iter(ragged_counts)
    for index, cells in enumerate(values[1:]):
        if cells and cells[0] == RAGGED_ROW:
            ragged[index] = next(counts)
        row: Dict[str, object] = {}
        for header, cell in zip(headers, cells):
            row.setdefault(header, cell)
        rows.append(row)
    return headers, rows, ragged


def parse_listings_csv(content: str, batch_timestamp: Optional[int] = None) -> IngestResult:
    """Turn a raw MLS export into listings plus human readable errors.

    Never raises: structural failures, missing required columns and bad rows
    are all reported through ``IngestResult.errors``.
    """

    errors: List[str] = []
    if batch_timestamp is None:
        batch_timestamp = int(time.time() * 1000)

    content = content.lstrip("\ufeff")
    try:
        width = _check_syntax(content)
        headers, rows, ragged = _read_rows(content, width)
    except Exception as exc:
        message = str(exc).strip()
        LOGGER.warning("csv_parse_failed %s", format_fields(error=message))
        errors.append(f"CSV Parse Error: {message}")
        return IngestResult(listings=[], errors=errors)

    columns = resolve_columns(headers)
    missing = missing_required(columns)
    if missing:
        LOGGER.warning("csv_missing_columns %s", format_fields(missing=",".join(missing)))
        errors.append(
            f"Missing required columns: {', '.join(missing)}. "
            f"Available columns: {', '.join(headers)}"
        )
        return IngestResult(listings=[], errors=errors)

    listings: List[Listing] = []
    for index, row in enumerate(rows):
        row_number = index + ROW_NUMBER_OFFSET
        if index in ragged:
            errors.append(f"Row {row_number}: Too many fields: expected {width}, saw {ragged[index]}")
            continue
        try:
            listings.append(map_listing_row(row, columns, index, batch_timestamp))
        except RowRejected as exc:
            errors.append(f"Row {row_number}: {exc}")
        except Exception as exc:
            LOGGER.debug("row_failed %s", format_fields(row=row_number, error=exc))
            errors.append(f"Row {row_number}: {str(exc) or 'Parse error'}")

    LOGGER.info("csv_ingested %s", format_fields(listings=len(listings), errors=len(errors)))
    return IngestResult(listings=listings, errors=errors)


def parse_listings_file(path: Union[str, Path], batch_timestamp: Optional[int] = None) -> IngestResult:
    try:
        content = read_text(path)
    except (OSError, UnicodeDecodeError) as exc:
        LOGGER.warning("csv_read_failed %s", format_fields(path=path, error=exc))
        return IngestResult(listings=[], errors=[f"CSV Parse Error: {exc}"])
    return parse_listings_csv(content, batch_timestamp=batch_timestamp)


def generate_sample_csv() -> str:
    lines = [",".join(SAMPLE_HEADERS)]
    for row in SAMPLE_ROWS:
        lines.append(",".join(f'"{cell}"' for cell in row))
    return "\n".join(lines)


__all__ = ["parse_listings_csv", "parse_listings_file", "generate_sample_csv"]
