from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping, Sequence
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from ..codec import decode_row
from ..errors import DecodeError, DimensionMismatch
from ..store import DatasetStore
from ..validation import (
    ReasonCode,
    Severity,
    ValidationIssue,
    validate_place,
)
from .config import DEFAULT_INGESTION_CONFIG, IngestionConfig
from .io import read_csv_rows

logger = logging.getLogger(__name__)

IssueSink = Callable[[int, Sequence[ValidationIssue]], None]


class RowStatus(str, Enum):
    accepted = "accepted"
    warned = "warned"
    decode_failed = "decode_failed"
    validation_failed = "validation_failed"


class RowOutcome(BaseModel):
    row_index: int
    status: RowStatus
    issues: list[ValidationIssue] = Field(default_factory=list)
    error: str | None = None


class IngestionSummary(BaseModel):
    """
    Per-batch accounting. Every row lands in exactly one of ``accepted``,
    ``decode_failed`` or ``validation_failed``; ``warned`` counts accepted
    rows that carried warnings. ``outcomes`` lists every row that was not a
    clean accept.
    """

    total: int = 0
    accepted: int = 0
    decode_failed: int = 0
    validation_failed: int = 0
    warned: int = 0
    outcomes: list[RowOutcome] = Field(default_factory=list)


def _log_issues(row_index: int, issues: Sequence[ValidationIssue]) -> None:
    for issue in issues:
        level = logging.WARNING if issue.severity == Severity.error else logging.INFO
        logger.log(
            level,
            "row %d: %s %s (%s) %s",
            row_index,
            issue.severity.value,
            issue.field,
            issue.reason.value,
            issue.message,
        )


def ingest_rows(
    rows: Iterable[Mapping[str, Any]],
    store: DatasetStore,
    config: IngestionConfig = DEFAULT_INGESTION_CONFIG,
    on_issues: IssueSink | None = None,
) -> IngestionSummary:
    """
    Decode, validate and insert each raw row into ``store``.

    One bad row never aborts the batch: decode failures, validation errors
    and dimension conflicts are recorded against the row index and
    ingestion moves on.
    """
    report = on_issues or _log_issues
    summary = IngestionSummary()

    for row_index, raw_row in enumerate(rows):
        summary.total += 1

        try:
            place = decode_row(raw_row, row_index=row_index)
        except DecodeError as exc:
            logger.warning("Skipping undecodable row: %s", exc)
            summary.decode_failed += 1
            summary.outcomes.append(RowOutcome(
                row_index=row_index, status=RowStatus.decode_failed, error=str(exc),
            ))
            continue

        result = validate_place(place, expected_dim=store.dimension, config=config.validator)
        if result.issues:
            report(row_index, result.issues)

        if not result.is_valid or (config.reject_warnings and result.warnings):
            summary.validation_failed += 1
            summary.outcomes.append(RowOutcome(
                row_index=row_index,
                status=RowStatus.validation_failed,
                issues=list(result.issues),
            ))
            continue

        try:
            store.insert(place)
        except DimensionMismatch as exc:
            # Another writer fixed the dimensionality after validation ran.
            issue = ValidationIssue(
                field="vector_embeddings",
                reason=ReasonCode.dimension_mismatch,
                message=str(exc),
            )
            report(row_index, [issue])
            summary.validation_failed += 1
            summary.outcomes.append(RowOutcome(
                row_index=row_index,
                status=RowStatus.validation_failed,
                issues=[*result.issues, issue],
            ))
            continue

        summary.accepted += 1
        if result.warnings:
            summary.warned += 1
            summary.outcomes.append(RowOutcome(
                row_index=row_index,
                status=RowStatus.warned,
                issues=list(result.issues),
            ))

    logger.info(
        "Ingested %d rows: %d accepted (%d with warnings), %d decode failures, %d rejected",
        summary.total,
        summary.accepted,
        summary.warned,
        summary.decode_failed,
        summary.validation_failed,
    )
    return summary


def load_csv(
    path: Path | str,
    config: IngestionConfig = DEFAULT_INGESTION_CONFIG,
) -> tuple[DatasetStore, IngestionSummary]:
    """Build a new store from a CSV file."""
    store = DatasetStore()
    summary = ingest_rows(read_csv_rows(path, chunksize=config.csv_chunksize), store, config)
    return store, summary


if __name__ == "__main__":
    import sys

    logging.basicConfig(level=logging.INFO)
    _, result = load_csv(sys.argv[1])
    print(result.model_dump_json(indent=2, exclude={"outcomes"}))
