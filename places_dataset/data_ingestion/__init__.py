"""
Batch ingestion.

Responsibilities:
- Read raw rows from CSV (JSON-in-text) or Parquet (native nested) files.
- Run each row through decode, validation and store insertion.
- Account for every row in an ingestion summary.
- Write stored Places back out in the canonical column order.
"""
