from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import http_exception_handler
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dotenv import load_dotenv

from persistence.exceptions import CorruptStoreError, RecordStoreError
from persistence.repositories import AsyncDiskShopRepository
from settings import Settings, get_settings

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    if settings is None:
        load_dotenv("local.env")
        settings = get_settings()

    logging.basicConfig(level=settings.log_level)

    from endpoints.admin_endpoints import router as admin_router
    from endpoints.shop_endpoints import router as shop_router

    app = FastAPI()
    app.state.settings = settings
    app.state.shop_repo = AsyncDiskShopRepository(settings.data_root, corrupt_policy=settings.corrupt_policy)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_allow_origins),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.debug_log_requests:

        @app.middleware("http")
        async def log_requests(request: Request, call_next):
            response = await call_next(request)
            logger.debug("REQUEST %s %s -> %s", request.method, request.url.path, response.status_code)
            return response

    @app.exception_handler(RecordStoreError)
    async def record_store_error(request: Request, exc: RecordStoreError):
        if isinstance(exc, CorruptStoreError):
            logger.error("STORE CORRUPT: %s", exc)
            return JSONResponse({"detail": "store_unreadable", "path": str(exc.path)}, status_code=503)
        logger.error("STORE FAILURE on %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse({"detail": "store_failure"}, status_code=500)

    @app.exception_handler(StarletteHTTPException)
    async def not_found(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404 and exc.detail == "Not Found":
            return JSONResponse({"detail": "Not Found", "path": request.url.path}, status_code=404)
        return await http_exception_handler(request, exc)

    app.include_router(admin_router)
    app.include_router(shop_router)

    return app


app = create_app()
