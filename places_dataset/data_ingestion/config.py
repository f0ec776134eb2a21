from dataclasses import dataclass, field

from ..validation.config import DEFAULT_VALIDATOR_CONFIG, ValidatorConfig


@dataclass(frozen=True)
class IngestionConfig:
    """
    Configuration for batch ingestion of raw rows into a DatasetStore.
    """

    validator: ValidatorConfig = field(default_factory=lambda: DEFAULT_VALIDATOR_CONFIG)
    reject_warnings: bool = False
    csv_chunksize: int = 1000


DEFAULT_INGESTION_CONFIG = IngestionConfig()
