"""CareFinder HTTP server: the interactive map and its JSON search endpoint.

    Browser  ->  GET /                    ->  Leaflet page
    Browser  ->  GET /api/facility-types  ->  Catalogs.facility_types
    Browser  ->  GET /api/search          ->  evaluate -> build_map_view

Catalogs are loaded once in the lifespan hook. If either dataset is
unavailable the exception propagates and the server does not start.

Run:
    carefinder serve
    # Open http://127.0.0.1:8000
"""

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import HTMLResponse, JSONResponse

from carefinder.apps.facility_map import (
    build_map_view,
    facility_records,
    format_summary,
    get_ui_html,
    summary_rows,
)
from carefinder.core.datasets import DatasetRegistry
from carefinder.core.exceptions import QueryError
from carefinder.core.search import (
    DEFAULT_RADIUS_MILES,
    MAX_RADIUS_MILES,
    MIN_RADIUS_MILES,
    SearchQuery,
    evaluate,
)
from carefinder.data_io import get_catalogs

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(application: FastAPI):
    catalogs = get_catalogs()
    logger.info(
        "Serving %d facilities across %d %s ZIP codes",
        len(catalogs.facilities),
        len(catalogs.zips),
        catalogs.state,
    )
    yield


def create_app() -> FastAPI:
    application = FastAPI(
        title="CareFinder", version="1.0", lifespan=lifespan
    )

    @application.get("/", response_class=HTMLResponse)
    async def index():
        return HTMLResponse(get_ui_html())

    @application.get("/api/facility-types")
    async def facility_types():
        return {"facility_types": get_catalogs().facility_types()}

    @application.get("/api/search")
    async def search(
        zip_code: str = Query("", alias="zip", max_length=32),
        radius: float = Query(
            DEFAULT_RADIUS_MILES, ge=MIN_RADIUS_MILES, le=MAX_RADIUS_MILES
        ),
        filter_facility_type: bool = Query(False),
        facility_type: str | None = Query(None),
        additional_filters: list[str] = Query([]),
    ):
        t0 = time.time()
        try:
            query = SearchQuery.from_inputs(
                zip_code,
                radius_miles=radius,
                filter_facility_type=filter_facility_type,
                facility_type=facility_type,
                additional_filters=additional_filters,
            )
        except QueryError as e:
            raise HTTPException(status_code=422, detail=str(e)) from e

        outcome = evaluate(get_catalogs(), query)
        return JSONResponse(
            {
                "state": outcome.state.value,
                "elapsed_ms": round((time.time() - t0) * 1000),
                "map": build_map_view(outcome),
                "summary": summary_rows(outcome),
                "summary_text": format_summary(outcome),
                "facilities": facility_records(outcome),
            }
        )

    @application.get("/api/health")
    async def health():
        catalogs = get_catalogs()
        return {
            "status": "ok",
            "facilities": len(catalogs.facilities),
            "zip_codes": len(catalogs.zips),
            "state": catalogs.state,
            "datasets": [
                {
                    "name": ds.name,
                    "description": ds.description,
                    "source": ds.source,
                }
                for ds in DatasetRegistry.list_all()
            ],
        }

    return application


app = create_app()
