from __future__ import annotations

import logging
from itertools import islice
from pathlib import Path

from fastapi import FastAPI, HTTPException, Query, Request

from .config import DEFAULT_APP_CONFIG, AppConfig
from .data_ingestion.ingest import IngestionSummary, ingest_rows
from .data_ingestion.io import read_csv_rows
from .errors import DimensionMismatch, InvalidArgument
from .models import Place
from .schemas import (
    IngestRequest,
    MetadataResponse,
    PlacesPage,
    SearchHitOut,
    SearchRequest,
    SearchResponse,
)
from .search import SimilarityIndex
from .store import DatasetStore

logger = logging.getLogger(__name__)


def _store(request: Request) -> DatasetStore:
    return request.app.state.store


def create_app(store: DatasetStore | None = None, config: AppConfig | None = None) -> FastAPI:
    """
    Build the HTTP surface around one DatasetStore.

    ``config`` defaults to ``DEFAULT_APP_CONFIG``. Without an explicit store,
    a new one is created and, when ``config.dataset_path`` names an existing
    CSV, loaded from it.
    """
    if config is None:
        config = DEFAULT_APP_CONFIG
    app = FastAPI(title="Places Dataset API", version="1.0.0")

    if store is None:
        store = DatasetStore()
        if config.dataset_path and Path(config.dataset_path).is_file():
            logger.info("Loading dataset from %s", config.dataset_path)
            ingest_rows(
                read_csv_rows(config.dataset_path, chunksize=config.ingestion.csv_chunksize),
                store,
                config.ingestion,
            )

    app.state.store = store
    app.state.index = SimilarityIndex(store)
    app.state.config = config

    # ── Public endpoints ─────────────────────────────────────────────────

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/metadata", response_model=MetadataResponse)
    def metadata(request: Request) -> MetadataResponse:
        s = _store(request)
        states = {p.state_name for p in s.scan() if p.state_name}
        return MetadataResponse(count=len(s), dimension=s.dimension, states=sorted(states))

    @app.get("/places", response_model=PlacesPage)
    def list_places(
        request: Request,
        offset: int = Query(default=0, ge=0),
        limit: int = Query(default=50, ge=1, le=config.max_page_size),
    ) -> PlacesPage:
        s = _store(request)
        page = list(islice(s.scan(), offset, offset + limit))
        return PlacesPage(places=page, total=len(s), offset=offset)

    @app.get("/places/{state_name}/{city_name}", response_model=Place)
    def get_place(state_name: str, city_name: str, request: Request) -> Place:
        place = _store(request).get(state_name, city_name)
        if place is None:
            raise HTTPException(status_code=404, detail="Place not found")
        return place

    @app.post("/search", response_model=SearchResponse)
    def search(body: SearchRequest, request: Request) -> SearchResponse:
        if body.k > config.max_k:
            raise HTTPException(status_code=400, detail=f"k must be <= {config.max_k}")
        try:
            hits = request.app.state.index.query(body.vector, body.k)
        except DimensionMismatch as exc:
            raise HTTPException(status_code=422, detail=str(exc))
        except InvalidArgument as exc:
            raise HTTPException(status_code=400, detail=str(exc))
        return SearchResponse(
            results=[SearchHitOut(place=h.place, score=round(h.score, 6)) for h in hits]
        )

    @app.post("/places", response_model=IngestionSummary)
    def add_places(body: IngestRequest, request: Request) -> IngestionSummary:
        return ingest_rows(body.rows, _store(request), config.ingestion)

    return app


app = create_app()
