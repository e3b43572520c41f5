# pokedex/main.py
import logging
import time
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .catalog import catalog_router
from .catalog.store import JsonCatalogStore
from .config import Settings, configure_logging, get_settings
from .errors import CatalogError, MissingFieldError


logger = logging.getLogger(__name__)


async def _catalog_error_handler(request: Request, exc: CatalogError):
    return PlainTextResponse(exc.message, status_code=exc.status_code)


async def _http_error_handler(request: Request, exc: StarletteHTTPException):
    # A known path with the wrong method is still an unmatched route.
    if exc.status_code in (404, 405):
        return PlainTextResponse("Path not found", status_code=404)
    return PlainTextResponse(str(exc.detail), status_code=exc.status_code)


async def _request_validation_handler(request: Request, exc: RequestValidationError):
    # Only the POST body is declared strictly; an unparsable body means
    # the required fields are missing.
    return PlainTextResponse(MissingFieldError.default_message, status_code=400)


async def _unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return PlainTextResponse("Internal Server Error", status_code=500)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Pokédex API",
        description=(
            "Catalog service for Pokémon records: search, pagination, "
            "sequential browsing and creation, backed by a JSON document."
        ),
        version="1.0.0",
    )
    app.state.settings = settings
    app.state.store = JsonCatalogStore(settings.db_path)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "%s %s %s %.1f ms",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )
        return response

    app.add_exception_handler(CatalogError, _catalog_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _request_validation_handler)
    app.add_exception_handler(Exception, _unhandled_error_handler)

    # 🔹 Health check
    @app.get("/")
    def health_check():
        return {"status": "ok", "message": "Pokédex API live 🚀"}

    # Mounted before the router so /pokemons/images/* never reaches
    # the /pokemons/{pokemon_id} route.
    app.mount(
        "/pokemons/images",
        StaticFiles(directory=settings.images_dir, check_dir=False),
        name="images",
    )
    app.mount(
        "/files",
        StaticFiles(directory=settings.public_dir, check_dir=False),
        name="files",
    )
    app.include_router(catalog_router)

    return app


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
