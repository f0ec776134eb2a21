from __future__ import annotations

import logging
import threading
from collections.abc import Iterator

from ..errors import DimensionMismatch, InvalidArgument
from ..models import Place

logger = logging.getLogger(__name__)


class DatasetStore:
    """
    Append-only, ordered collection of validated Places.

    ``insert`` calls are serialized by a lock. Readers copy the record list
    under the same lock, so they see the store either before or after a
    concurrent insert, never in between.

    Lookup policy: ``get`` returns the most recently inserted Place for a
    ``(state_name, city_name)`` pair, since the schema does not make that
    pair unique. ``find`` returns every match.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._places: list[Place] = []
        self._latest: dict[tuple[str | None, str | None], int] = {}
        self._dimension: int | None = None

    @property
    def dimension(self) -> int | None:
        """Vector length fixed by the first insert, or ``None`` while empty."""
        return self._dimension

    def __len__(self) -> int:
        return len(self._places)

    def insert(self, place: Place) -> None:
        """Append ``place``; raises ``DimensionMismatch`` if its vector length differs."""
        if place.vector_embeddings is None:
            raise InvalidArgument("place has no vector_embeddings")
        dim = len(place.vector_embeddings)

        with self._lock:
            if self._dimension is not None and dim != self._dimension:
                raise DimensionMismatch(self._dimension, dim)
            if self._dimension is None:
                self._dimension = dim
                logger.info("Store dimensionality fixed at %d", dim)
            self._latest[(place.state_name, place.city_name)] = len(self._places)
            self._places.append(place)

    def snapshot(self) -> tuple[Place, ...]:
        with self._lock:
            return tuple(self._places)

    def scan(self) -> Iterator[Place]:
        """Lazily iterate all Places in insertion order. Call again to restart."""
        return iter(self.snapshot())

    def get(self, state_name: str, city_name: str) -> Place | None:
        with self._lock:
            idx = self._latest.get((state_name, city_name))
            return self._places[idx] if idx is not None else None

    def find(self, state_name: str, city_name: str) -> list[Place]:
        return [
            p for p in self.snapshot()
            if p.state_name == state_name and p.city_name == city_name
        ]
