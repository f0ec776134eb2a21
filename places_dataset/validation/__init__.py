"""
Schema validation.

Responsibilities:
- Check a decoded Place for presence, range, URI and vector-shape rules.
- Collect every violation instead of stopping at the first one.
- Separate blocking errors from non-blocking warnings.
"""

from .config import DEFAULT_VALIDATOR_CONFIG, ValidatorConfig
from .models import ReasonCode, Severity, ValidationIssue, ValidationResult
from .validator import validate_place

__all__ = [
    "DEFAULT_VALIDATOR_CONFIG",
    "ReasonCode",
    "Severity",
    "ValidationIssue",
    "ValidationResult",
    "ValidatorConfig",
    "validate_place",
]
