"""
Storm Impact Report — FastAPI app factory with startup data loading.
"""
from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storm_report.data.store import EventStore
from storm_report.api.dependencies import set_store
from storm_report.api.router_meta import router as meta_router
from storm_report.api.router_reports import router as reports_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Load (downloading if needed) the storm dataset at startup."""
    from storm_report.config import BASE_FOLDER, RAW_FOLDER, REPORTS_FOLDER
    for d in [RAW_FOLDER, REPORTS_FOLDER]:
        d.mkdir(parents=True, exist_ok=True)
    print(f"  STORM_DATA_DIR = {BASE_FOLDER}")

    store = EventStore().load()
    set_store(store)

    span = store.year_span()
    years = f"{span[0]}-{span[1]}" if span else "no dated events"
    print(f"\nStorm Impact Report ready — {store.row_count():,} events, "
          f"{len(store.categories())} categories, {years}\n")
    yield
    set_store(None)


def create_app(load_on_startup: bool = True) -> FastAPI:
    app = FastAPI(
        title="Storm Impact Report API",
        description="Casualties and economic damage of U.S. severe weather, by event category",
        version="1.0.0",
        lifespan=lifespan if load_on_startup else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(reports_router)
    return app


app = create_app()
