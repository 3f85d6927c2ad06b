"""Read and write header-less CSV files as rows of text fields."""

from __future__ import annotations

import csv
import io
from pathlib import Path
from typing import IO, List, Sequence, Tuple, Union

import pandas as pd

from trade_shortfall.engine.errors import IOFailure, ParseFailure

Source = Union[str, Path, IO]

OUTPUT_COLUMNS = [
    "account_id",
    "ticker",
    "realized_gain",
    "max_gain",
    "shortfall",
    "time_max",
    "time_min",
]


def _read_text(source: Source) -> Tuple[str, str]:
    """Return ``(label, text)`` for a path or an open (e.g. uploaded) file."""
    if isinstance(source, (str, Path)):
        path = Path(source)
        if not path.is_file():
            raise IOFailure(f"unable to read input file {path}")
        try:
            return str(path), path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise IOFailure(f"unable to read input file {path}: {exc}") from exc

    label = getattr(source, "name", "uploaded file")
    try:
        raw = source.read()
        return label, raw.decode("utf-8") if isinstance(raw, bytes) else raw
    except (OSError, UnicodeDecodeError) as exc:
        raise IOFailure(f"unable to read input file {label}: {exc}") from exc


def _check_field_counts(text: str, label: str) -> int:
    """Every non-blank record must have as many fields as the first one."""
    width = 0
    try:
        for line_no, fields in enumerate(csv.reader(io.StringIO(text)), start=1):
            if not fields:
                continue
            if not width:
                width = len(fields)
            elif len(fields) != width:
                raise ParseFailure(
                    f"unable to parse file as CSV for {label}: record {line_no} has {len(fields)} fields, expected {width}"
                )
    except csv.Error as exc:
        raise ParseFailure(f"unable to parse file as CSV for {label}: {exc}") from exc
    return width


def read_rows(source: Source) -> List[List[str]]:
    """Load every row of a CSV file as strings; an empty file yields no rows.

    ``source`` is a path or a file-like object (such as a Streamlit upload).
    """
    label, text = _read_text(source)
    if not _check_field_counts(text, label):
        return []
    try:
        df = pd.read_csv(
            io.StringIO(text),
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )
    except pd.errors.EmptyDataError:
        return []
    except pd.errors.ParserError as exc:
        raise ParseFailure(f"unable to parse file as CSV for {label}: {exc}") from exc
    return df.values.tolist()


def write_rows(rows: Sequence[Sequence[str]], path: Path) -> Path:
    """Write rows without header or index; returns the written path."""
    target = Path(path)
    df = pd.DataFrame([list(row) for row in rows], dtype=str)
    try:
        if df.empty:
            target.write_text("")
        else:
            df.to_csv(target, header=False, index=False, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    except OSError as exc:
        raise IOFailure(f"can't create file {target}: {exc}") from exc
    return target


def rows_to_frame(rows: Sequence[Sequence[str]]) -> pd.DataFrame:
    """Label formatted output rows for display; numeric columns become floats."""
    df = pd.DataFrame([list(row) for row in rows], columns=OUTPUT_COLUMNS)
    df["account_id"] = df["account_id"].astype(int)
    for col in ("realized_gain", "max_gain", "shortfall"):
        df[col] = df[col].astype(float)
    return df
