"""Application factory and entry point.

Run with:
    uvicorn app:app --reload
"""

from __future__ import annotations

from fastapi import FastAPI

from api import router, set_catalog
from catalog import Catalog
from config import EngineConfig
from factory import CatalogFactory


def create_app(
    catalog: Catalog | None = None,
    config: EngineConfig | None = None,
) -> FastAPI:
    """Build and return the FastAPI application.

    Accepts an optional catalog for testing; otherwise the factory builds
    and verifies one from ``config``.
    """
    if catalog is None:
        catalog = CatalogFactory.create(config)

    set_catalog(catalog)

    app = FastAPI(
        title="Curried Numbers API",
        description=(
            "Exact integer arithmetic of unbounded magnitude. Every operation "
            "can be called with fewer arguments than it takes; the partial "
            "binding that comes back can be supplied the rest later."
        ),
        version="0.1.0",
    )
    app.include_router(router)
    return app


# Default app instance for `uvicorn app:app`
app = create_app()
