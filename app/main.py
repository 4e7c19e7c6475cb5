"""Entry point for the FastAPI-powered My List service."""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .cache import TTLCache
from .config import Settings, settings
from .database import Database
from .errors import InvalidInput, MyListError
from .models import ListItemRequest, PageQuery
from .seed import seed_catalog
from .services.catalog import CatalogService
from .services.content_resolver import ContentResolver
from .services.my_list import MyListService
from .storage import DatabaseRecordStore, JsonFileRecordStore, RecordStore
from .utils import utcnow

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

app: FastAPI


def build_record_store(
    app_settings: Settings, database: Database | None = None
) -> RecordStore:
    """Return the record store selected by ``STORAGE_BACKEND``."""

    if app_settings.storage_backend == "database":
        if database is None:
            raise ValueError("A database is required for the database storage backend")
        return DatabaseRecordStore(database)
    return JsonFileRecordStore(app_settings.data_dir)


@asynccontextmanager
async def lifespan(fastapi_app: FastAPI):
    database: Database | None = None
    if settings.storage_backend == "database":
        database = Database(settings.database_url)
        await database.create_all()
    store = build_record_store(settings, database)

    if settings.seed_on_startup:
        await seed_catalog(store)

    cache = TTLCache()
    resolver = ContentResolver(store)
    fastapi_app.state.my_list_service = MyListService(
        store,
        resolver,
        cache,
        cache_ttl=settings.mylist_cache_ttl,
        orphan_policy=settings.orphaned_entry_policy,
    )
    fastapi_app.state.catalog_service = CatalogService(store)
    logger.info(
        "My List service ready (storage=%s, cache_ttl=%ss)",
        settings.storage_backend,
        settings.mylist_cache_ttl,
    )

    try:
        yield
    finally:  # pragma: no cover - teardown path exercised at runtime
        if database is not None:
            await database.dispose()


def create_app() -> FastAPI:
    fastapi_app = FastAPI(
        title=settings.app_name,
        description="Personal watchlists for movies and TV shows",
        version="1.0.0",
        lifespan=lifespan,
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_routes(fastapi_app)
    return fastapi_app


def get_my_list_service(app: FastAPI) -> MyListService:
    service = getattr(app.state, "my_list_service", None)
    if not isinstance(service, MyListService):
        raise RuntimeError("My List service not initialised")
    return service


def get_catalog_service(app: FastAPI) -> CatalogService:
    service = getattr(app.state, "catalog_service", None)
    if not isinstance(service, CatalogService):
        raise RuntimeError("Catalog service not initialised")
    return service


def _success(
    data: Any = None, *, message: str | None = None, status_code: int = 200
) -> JSONResponse:
    body: dict[str, Any] = {"success": True}
    if data is not None:
        body["data"] = data
    if message is not None:
        body["message"] = message
    return JSONResponse(body, status_code=status_code)


def _failure(error: str, status_code: int) -> JSONResponse:
    return JSONResponse({"success": False, "error": error}, status_code=status_code)


async def _read_item_request(request: Request) -> ListItemRequest:
    try:
        payload = await request.json()
    except ValueError:
        # Undecodable bytes or malformed JSON are validated as an empty body.
        payload = {}
    try:
        return ListItemRequest.model_validate(payload)
    except ValidationError as exc:
        raise InvalidInput.from_validation_error(exc) from exc


def _read_page_query(request: Request) -> PageQuery:
    try:
        return PageQuery.model_validate(dict(request.query_params))
    except ValidationError as exc:
        raise InvalidInput.from_validation_error(exc) from exc


def _clean_user_id(user_id: str) -> str:
    cleaned = user_id.strip()
    if not cleaned:
        raise InvalidInput("Invalid user ID format")
    return cleaned


def register_routes(fastapi_app: FastAPI) -> None:
    if not hasattr(fastapi_app.state, "started_at"):
        fastapi_app.state.started_at = time.monotonic()

    @fastapi_app.exception_handler(MyListError)
    async def _my_list_error_handler(_: Request, exc: MyListError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("Request failed: %s", exc.message, exc_info=exc)
            return _failure("Internal server error", exc.status_code)
        return _failure(exc.message, exc.status_code)

    @fastapi_app.exception_handler(StarletteHTTPException)
    async def _http_error_handler(
        _: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == 404:
            return _failure("Endpoint not found", 404)
        return _failure(str(exc.detail), exc.status_code)

    @fastapi_app.exception_handler(Exception)
    async def _unexpected_error_handler(_: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error while serving request", exc_info=exc)
        return _failure("Internal server error", 500)

    @fastapi_app.get("/health")
    async def healthcheck() -> JSONResponse:
        return _success(
            {
                "timestamp": utcnow().isoformat(),
                "uptime": round(time.monotonic() - fastapi_app.state.started_at, 3),
            },
            message="Server is healthy",
        )

    @fastapi_app.post("/api/my-list/{user_id}/add")
    async def add_to_my_list(request: Request, user_id: str) -> JSONResponse:
        user_id = _clean_user_id(user_id)
        body = await _read_item_request(request)
        service = get_my_list_service(fastapi_app)
        entry = await service.add_to_my_list(
            user_id, str(body.content_id), body.content_type
        )
        return _success(
            entry.to_payload(),
            message=f"{body.content_type} added to your list successfully",
            status_code=201,
        )

    @fastapi_app.delete("/api/my-list/{user_id}/remove")
    async def remove_from_my_list(request: Request, user_id: str) -> JSONResponse:
        user_id = _clean_user_id(user_id)
        body = await _read_item_request(request)
        service = get_my_list_service(fastapi_app)
        await service.remove_from_my_list(
            user_id, str(body.content_id), body.content_type
        )
        return _success(
            message=f"{body.content_type} removed from your list successfully"
        )

    @fastapi_app.get("/api/my-list/{user_id}")
    async def get_my_list(request: Request, user_id: str) -> JSONResponse:
        user_id = _clean_user_id(user_id)
        query = _read_page_query(request)
        service = get_my_list_service(fastapi_app)
        result = await service.get_my_list(user_id, query.page, query.limit)
        return _success(result.to_payload(), message="My list retrieved successfully")

    @fastapi_app.get("/api/movies")
    async def list_movies(request: Request) -> JSONResponse:
        query = _read_page_query(request)
        result = await get_catalog_service(fastapi_app).list_movies(
            query.page, query.limit
        )
        return _success(result.to_payload(), message="Movies retrieved successfully")

    @fastapi_app.get("/api/tvshows")
    async def list_tv_shows(request: Request) -> JSONResponse:
        query = _read_page_query(request)
        result = await get_catalog_service(fastapi_app).list_tv_shows(
            query.page, query.limit
        )
        return _success(result.to_payload(), message="TV shows retrieved successfully")

    @fastapi_app.get("/api/content")
    async def list_content(request: Request) -> JSONResponse:
        query = _read_page_query(request)
        result = await get_catalog_service(fastapi_app).list_all_content(
            query.page, query.limit
        )
        return _success(result.to_payload(), message="Content retrieved successfully")


app = create_app()


if __name__ == "__main__":  # pragma: no cover - manual execution
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.server_host,
        port=settings.server_port,
        reload=settings.environment == "development",
    )
