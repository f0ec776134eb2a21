from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

from .data_ingestion.config import DEFAULT_INGESTION_CONFIG, IngestionConfig

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent / ".env")


@dataclass(frozen=True)
class AppConfig:
    dataset_path: str = os.getenv("PLACES_DATASET_PATH", "")
    default_k: int = 10
    max_k: int = 100
    max_page_size: int = 200
    ingestion: IngestionConfig = field(default_factory=lambda: DEFAULT_INGESTION_CONFIG)


DEFAULT_APP_CONFIG = AppConfig()
