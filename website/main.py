import importlib
import logging
import pathlib
from contextlib import asynccontextmanager

import uvicorn
from fastapi import APIRouter, FastAPI, HTTPException, Request
from starlette import status
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import PlainTextResponse
from starlette_compress import CompressMiddleware

import website.lib.sentry  # noqa: F401
from website.config import (
    BUILD_DIR,
    COMPRESS_HTTP_BROTLI_QUALITY,
    COMPRESS_HTTP_GZIP_LEVEL,
    COMPRESS_HTTP_MIN_SIZE,
    COMPRESS_HTTP_ZSTD_LEVEL,
    CORS_MAX_AGE,
    CORS_ORIGIN,
    ENCRYPTION_KEY,
    ENV,
    HOST,
    NAME,
    PORT,
    TEMPLATES_DIR,
)
from website.db import psycopg_pool_open
from website.exceptions.api_error import APIError
from website.lib.app_context import AppContext
from website.lib.render_response import render_response
from website.middlewares.cache_control_middleware import CacheControlMiddleware
from website.middlewares.request_context_middleware import RequestContextMiddleware

# log when in test environment
if ENV != 'prod':
    logging.info('🦺 Running in %s environment', ENV)


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with psycopg_pool_open() as pool:
        app.state.context = await AppContext.create(
            BUILD_DIR,
            TEMPLATES_DIR,
            encryption_key=ENCRYPTION_KEY,
            pool=pool,
        )
        yield


main = FastAPI(
    debug=ENV != 'prod',
    title=NAME,
    lifespan=lifespan,
)

main.add_middleware(CacheControlMiddleware)
main.add_middleware(
    CompressMiddleware,
    minimum_size=COMPRESS_HTTP_MIN_SIZE,
    zstd_level=COMPRESS_HTTP_ZSTD_LEVEL,
    brotli_quality=COMPRESS_HTTP_BROTLI_QUALITY,
    gzip_level=COMPRESS_HTTP_GZIP_LEVEL,
)
main.add_middleware(
    CORSMiddleware,
    allow_origins=[CORS_ORIGIN],
    allow_methods=['GET', 'POST', 'PUT', 'DELETE', 'OPTIONS', 'HEAD', 'PATCH'],
    allow_headers=['Accept', 'Content-Type', 'CSRF-Token'],
    allow_credentials=True,
    max_age=int(CORS_MAX_AGE.total_seconds()),
)
main.add_middleware(RequestContextMiddleware)


def _make_router(path: pathlib.Path, prefix: str) -> APIRouter:
    """Create a router from all modules in the given path."""
    router = APIRouter(prefix=prefix)
    router_counter: int = 0
    routes_counter: int = 0
    for p in sorted(path.glob('*.py')):
        module_name = p.as_posix().replace('/', '.')[:-3]
        module = importlib.import_module(module_name)
        router_attr: APIRouter | None = getattr(module, 'router', None)
        if not isinstance(router_attr, APIRouter):
            logging.warning('APIRouter not found in %s', module_name)
            continue
        router.include_router(router_attr)
        router_counter += 1
        routes_counter += len(router_attr.routes)
    logging.info(
        'Loaded (%d routers, %d routes) from %s as %r',
        router_counter,
        routes_counter,
        path,
        prefix,
    )
    return router


main.include_router(_make_router(pathlib.Path('website/controllers'), ''))


@main.exception_handler(APIError)
async def api_error_handler(_: Request, exc: APIError):
    """Answer template and asset errors in plain text."""
    return PlainTextResponse(exc.detail, exc.status_code)


@main.exception_handler(status.HTTP_404_NOT_FOUND)
async def not_found_handler(request: Request, exc: HTTPException):
    """Render the not found page for unmatched routes."""
    if isinstance(exc, APIError):
        return await api_error_handler(request, exc)

    return render_response(
        'not_found.html',
        {'message': f'"{request.url.path}" not found'},
        status=status.HTTP_404_NOT_FOUND,
    )


def run() -> None:
    """Serve the application with uvicorn."""
    uvicorn.run(main, host=HOST, port=PORT, log_config=None, proxy_headers=True)
