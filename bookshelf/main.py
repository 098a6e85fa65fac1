# bookshelf/main.py
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .catalog import Catalog, catalog_router
from .catalog.router import envelope, validation_message
from .config import AppConfig, load_config


logger = logging.getLogger(__name__)


def create_app(
    config: Optional[AppConfig] = None,
    catalog: Optional[Catalog] = None,
) -> FastAPI:
    """Build the API application around a catalogue.

    A new, empty ``Catalog`` is created unless one is passed in.
    """
    config = config or AppConfig()

    app = FastAPI(
        title=config.app.name,
        description="In-memory catalogue of book records with reading progress.",
        version=config.app.version,
    )
    app.state.catalog = catalog if catalog is not None else Catalog()

    # Registered before CORS so that CORS also wraps these 500 responses.
    @app.middleware("http")
    async def _unexpected(request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.exception("Unhandled error on %s %s", request.method, request.url.path)
            return envelope("fail", str(exc), status_code=500)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors.allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def _invalid_request(request: Request, exc: RequestValidationError) -> JSONResponse:
        return envelope("fail", validation_message(exc.errors()), status_code=400)

    @app.exception_handler(StarletteHTTPException)
    async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return envelope("fail", str(exc.detail), status_code=exc.status_code)

    @app.get("/health")
    def health_check():
        return {
            "status": "success",
            "data": {
                "service": config.app.name,
                "version": config.app.version,
                "books": len(app.state.catalog),
            },
        }

    app.include_router(catalog_router)
    return app


app = create_app(load_config())
