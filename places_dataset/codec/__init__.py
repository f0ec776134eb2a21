"""
Row codec.

Responsibilities:
- Decode a raw row (CSV text cells or columnar native values) into a Place.
- Encode a Place back into a flat row with deterministic JSON sub-fields.
"""

from .row_codec import COLUMNS, LISTING_KEYS, decode_row, encode_place

__all__ = ["COLUMNS", "LISTING_KEYS", "decode_row", "encode_place"]
