from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from typing import NamedTuple

import numpy as np

from ..errors import DimensionMismatch, InvalidArgument
from ..models import Place
from ..store import DatasetStore

logger = logging.getLogger(__name__)

EPSILON = 1e-9


class SearchHit(NamedTuple):
    place: Place
    score: float


class SimilarityIndex:
    """
    Exact cosine-similarity ranking over a DatasetStore.

    score = dot(a, b) / (|a| * |b| + EPSILON), computed as a full linear
    scan. Each vector is divided by its largest absolute component first so
    that finite vectors near the float limit do not overflow; the scales are
    folded back into the EPSILON term. Scaled vectors, their scales and norms
    are cached and extended as the store grows.
    """

    def __init__(self, store: DatasetStore):
        self._store = store
        self._lock = threading.Lock()
        self._matrix: np.ndarray | None = None
        self._scales: np.ndarray | None = None
        self._norms: np.ndarray | None = None

    @staticmethod
    def _scale(rows: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Divide each row by its max-abs component; zero rows keep scale 1."""
        scales = np.max(np.abs(rows), axis=-1)
        scales = np.where(scales > 0, scales, 1.0)
        return rows / scales[..., np.newaxis], scales

    def _vectors_for(self, places: tuple[Place, ...]) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        with self._lock:
            cached = 0 if self._matrix is None else self._matrix.shape[0]
            if cached < len(places):
                new_rows, new_scales = self._scale(np.asarray(
                    [p.vector_embeddings for p in places[cached:]], dtype=np.float64
                ))
                new_norms = np.linalg.norm(new_rows, axis=1)
                if self._matrix is None:
                    self._matrix, self._scales, self._norms = new_rows, new_scales, new_norms
                else:
                    self._matrix = np.vstack([self._matrix, new_rows])
                    self._scales = np.concatenate([self._scales, new_scales])
                    self._norms = np.concatenate([self._norms, new_norms])
                logger.debug("Index extended by %d vectors", len(places) - cached)
            # The store is append-only, so a longer cache still starts with this snapshot.
            n = len(places)
            return self._matrix[:n], self._scales[:n], self._norms[:n]

    def query(self, vector: Sequence[float] | np.ndarray, k: int) -> list[SearchHit]:
        """
        Return the ``min(k, len(store))`` most similar Places, best first.

        Raises ``InvalidArgument`` when ``k < 1`` or the store is empty, and
        ``DimensionMismatch`` when the query length differs from the store's.
        Equal scores keep insertion order.
        """
        if isinstance(k, bool) or not isinstance(k, (int, np.integer)) or k < 1:
            raise InvalidArgument(f"k must be a positive integer, got {k!r}")

        places = self._store.snapshot()
        if not places:
            raise InvalidArgument("cannot query an empty store")

        query_vec = np.asarray(vector, dtype=np.float64).ravel()
        dim = len(places[0].vector_embeddings)
        if query_vec.shape[0] != dim:
            raise DimensionMismatch(dim, query_vec.shape[0])
        if not np.all(np.isfinite(query_vec)):
            raise InvalidArgument("query vector contains NaN or inf")

        matrix, scales, norms = self._vectors_for(places)
        query_vec, query_scale = self._scale(query_vec)
        with np.errstate(over="ignore", under="ignore", divide="ignore", invalid="ignore"):
            eps = EPSILON / scales / query_scale
            scores = (matrix @ query_vec) / (norms * np.linalg.norm(query_vec) + eps)
        # Only reachable when the EPSILON term underflows against a zero vector.
        scores = np.nan_to_num(scores, nan=0.0)

        # Stable sort on the negated scores keeps insertion order among ties.
        order = np.argsort(-scores, kind="stable")[: min(int(k), len(places))]
        return [SearchHit(places[i], float(scores[i])) for i in order]
