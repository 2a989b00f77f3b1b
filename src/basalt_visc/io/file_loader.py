from __future__ import annotations
import io
import logging
import math
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from basalt_visc.core.exceptions import DecodeError
from basalt_visc.core.models import Dataset
from basalt_visc.services.normalizer import normalize

LOGGER = logging.getLogger(__name__)

SPREADSHEET_SUFFIXES = (".xlsx", ".xls")
IMPORT_PROVENANCE = "Imported File"
NO_VALID_ROWS_MESSAGE = (
    "No valid rows found. Make sure the file has a header row "
    "(e.g. SiO2, Al2O3, temperature, viscosity ...)."
)

Row = Dict[str, Any]

def _source_name(path_or_buf, name: Optional[str]) -> str:
    if name:
        return str(name)
    return str(getattr(path_or_buf, "name", path_or_buf))

def is_spreadsheet(name: str) -> bool:
    return name.lower().endswith(SPREADSHEET_SUFFIXES)

def _is_missing(v: Any) -> bool:
    return v is None or (isinstance(v, float) and math.isnan(v))

def _read_text(path_or_buf) -> str:
    if isinstance(path_or_buf, (str, Path)):
        raw: Union[str, bytes] = Path(path_or_buf).read_bytes()
    else:
        raw = path_or_buf.read()
    if isinstance(raw, (bytes, bytearray)):
        # utf-8-sig handles BOM if present
        raw = bytes(raw).decode("utf-8-sig")
    return raw

def decode_text(path_or_buf) -> List[Row]:
    """
    Comma-delimited text: first non-blank line is the header.
    Blank lines are skipped; extra values on a line are dropped and missing
    trailing values leave their header present with a None value. Empty
    cells stay as "". A repeated header keeps one key holding the last value.
    """
    lines = [ln for ln in _read_text(path_or_buf).splitlines() if ln.strip()]
    if not lines:
        return []
    # header row is read as data so pandas does not rename duplicates (SiO2, SiO2.1)
    width = len(pd.read_csv(io.StringIO(lines[0]), header=None, dtype=str, keep_default_na=False).columns)
    df = pd.read_csv(
        io.StringIO("\n".join(lines)),
        header=None,
        names=list(range(width)),
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
        engine="python",
        on_bad_lines=lambda bad: bad[:width],
    )
    headers = [str(h).strip() for h in df.iloc[0]]
    rows: List[Row] = []
    for values in df.iloc[1:].itertuples(index=False):
        row: Row = {}
        for h, v in zip(headers, values):
            row[h] = None if _is_missing(v) else v
        rows.append(row)
    return rows

def decode_spreadsheet(path_or_buf, sheet: Union[int, str] = 0) -> List[Row]:
    """First (or given) sheet as rows; empty cells are omitted from each row."""
    df = pd.read_excel(path_or_buf, sheet_name=sheet)
    df.columns = [str(c).strip() for c in df.columns]
    return [
        {k: v for k, v in rec.items() if not _is_missing(v)}
        for rec in df.to_dict(orient="records")
    ]

def decode_rows(path_or_buf, name: Optional[str] = None, sheet: Union[int, str] = 0) -> List[Row]:
    src = _source_name(path_or_buf, name)
    try:
        if is_spreadsheet(src):
            return decode_spreadsheet(path_or_buf, sheet)
        return decode_text(path_or_buf)
    except Exception as exc:
        LOGGER.warning("Failed to decode %s: %s", src, exc)
        kind = "spreadsheet" if is_spreadsheet(src) else "delimited text"
        raise DecodeError(f"Could not decode '{src}' as {kind}: {exc}") from exc

def import_samples(path_or_buf, name: Optional[str] = None, sheet: Union[int, str] = 0) -> Dataset:
    """
    Decode, normalize and wrap an uploaded file.

    Returns an empty Dataset when no row is usable (show NO_VALID_ROWS_MESSAGE);
    raises DecodeError when the file itself is unreadable.
    """
    rows = decode_rows(path_or_buf, name=name, sheet=sheet)
    samples = normalize(rows)
    LOGGER.info("Imported %s: %d of %d rows accepted",
                _source_name(path_or_buf, name), len(samples), len(rows))
    return Dataset(
        samples=tuple(samples),
        provenance=IMPORT_PROVENANCE,
        detail=f"Found {len(samples)} rows",
    )
