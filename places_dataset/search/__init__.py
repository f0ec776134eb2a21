"""
Similarity search.

Responsibilities:
- Rank stored Places by cosine similarity to a query vector.
- Keep ordering deterministic: descending score, then insertion order.
"""

from .index import EPSILON, SearchHit, SimilarityIndex

__all__ = ["EPSILON", "SearchHit", "SimilarityIndex"]
