"""
Row sources and sinks for flat (CSV) and columnar (Parquet) files.

Readers yield raw rows as plain dicts keyed by column name. CSV cells stay
text, so JSON sub-fields arrive as JSON strings; Parquet cells arrive as
native nested values. The codec accepts both.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

import pandas as pd

from ..codec import COLUMNS, encode_place
from ..models import Place

logger = logging.getLogger(__name__)


def read_csv_rows(path: Path | str, chunksize: int = 1000) -> Iterator[dict[str, Any]]:
    """Lazily yield raw rows from a CSV file, every cell as text."""
    with pd.read_csv(
        path,
        dtype=str,
        keep_default_na=False,
        chunksize=chunksize,
    ) as reader:
        for chunk in reader:
            yield from chunk.to_dict(orient="records")


def read_parquet_rows(path: Path | str) -> Iterator[dict[str, Any]]:
    """Yield raw rows from a columnar file with nested values left native."""
    df = pd.read_parquet(path)
    for record in df.to_dict(orient="records"):
        yield record


class CsvRowSink:
    """
    Accepts encoded rows one at a time and writes them as CSV on ``close``.

    Columns are always written in the canonical order; absent fields become
    empty cells.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._rows: list[dict[str, str]] = []
        self._closed = False

    def write(self, row: dict[str, str]) -> None:
        if self._closed:
            raise ValueError("sink is closed")
        self._rows.append(row)

    def close(self) -> None:
        if self._closed:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        df = pd.DataFrame(self._rows, columns=COLUMNS)
        df.to_csv(self.path, index=False)
        self._closed = True
        logger.info("Wrote %d rows to %s", len(self._rows), self.path)

    def __enter__(self) -> "CsvRowSink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def export_places(places: Iterable[Place], path: Path | str) -> Path:
    """Encode ``places`` and write them to a CSV file."""
    with CsvRowSink(path) as sink:
        for place in places:
            sink.write(encode_place(place))
    return sink.path
