from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValidatorConfig:
    text_soft_limit: int = 3000
    min_dimension: int = 2


DEFAULT_VALIDATOR_CONFIG = ValidatorConfig()
