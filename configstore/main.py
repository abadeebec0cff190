from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from .config import Settings, parse_csv, settings
from .routers import auth, configurations, directories, files
from .schemas import ErrorResponse
from .services.errors import FileStoreError, VersionMismatchError
from .services.file_ops import DirectoryStore, FileStore
from .services.paths import RootRegistry
from .services.versioning import format_etag

logger = logging.getLogger(__name__)

_SECURITY_HEADERS = {
    'X-Frame-Options': 'SAMEORIGIN',
    'X-Content-Type-Options': 'nosniff',
    'Referrer-Policy': 'strict-origin-when-cross-origin',
}

_STATUS_BY_KIND = {
    'InvalidPath': 400,
    'InvalidName': 400,
    'IsADirectory': 400,
    'NotADirectory': 400,
    'DirectoryNotEmpty': 400,
    'PathEscape': 403,
    'NotFound': 404,
    'AlreadyExists': 409,
    'VersionMismatch': 412,
    'CreateFailed': 500,
    'DeleteFailed': 500,
    'RenameFailed': 500,
    'Unreadable': 500,
}


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s',
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    app_settings: Settings = app.state.settings
    if app_settings.auth_enabled and app_settings.jwt_secret == 'change-me':
        raise RuntimeError('Refusing to start with insecure default JWT secret. Set JWT_SECRET in .env')

    registry: RootRegistry = app.state.registry
    registry.check()
    logger.info('using configurations directory [%s]', registry.directory)
    yield


async def security_headers_middleware(request: Request, call_next):
    response = await call_next(request)
    for key, value in _SECURITY_HEADERS.items():
        response.headers.setdefault(key, value)
    return response


async def file_store_exception_handler(request: Request, exc: FileStoreError):
    status_code = _STATUS_BY_KIND.get(exc.kind, 500)
    if status_code >= 500:
        logger.error('%s on %s %s: %s', exc.kind, request.method, request.url.path, exc.message, exc_info=exc)

    headers = {}
    if isinstance(exc, VersionMismatchError) and exc.current:
        headers['ETag'] = format_etag(exc.current)
    body = ErrorResponse(detail=exc.message, error=exc.kind, path=exc.path)
    return JSONResponse(body.model_dump(), status_code=status_code, headers=headers)


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception('unhandled error on %s %s', request.method, request.url.path, exc_info=exc)
    if request.url.path.startswith('/api/'):
        return JSONResponse({'detail': 'Internal server error. Please try again.'}, status_code=500)
    return HTMLResponse('<h1>Unexpected error</h1><p>Please try again later.</p>', status_code=500)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    app_settings = app_settings or settings
    configure_logging(app_settings.log_level)

    app = FastAPI(title=app_settings.app_name, lifespan=lifespan)
    registry = RootRegistry(
        app_settings.configurations_directory,
        parse_csv(app_settings.hidden_configuration_prefixes),
    )
    app.state.settings = app_settings
    app.state.registry = registry
    app.state.file_store = FileStore(replace_creates_missing=app_settings.replace_creates_missing)
    app.state.directory_store = DirectoryStore(registry)

    cors_origins = parse_csv(app_settings.cors_origins)
    if cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=cors_origins,
            allow_credentials=True,
            allow_methods=['GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS'],
            allow_headers=['Authorization', 'Content-Type', 'If-Match', 'If-None-Match'],
            expose_headers=['ETag'],
        )
    app.middleware('http')(security_headers_middleware)
    app.add_exception_handler(FileStoreError, file_store_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.get('/healthz')
    def healthz():
        return {'ok': True}

    app.include_router(auth.router)
    app.include_router(configurations.router)
    app.include_router(files.router)
    app.include_router(directories.router)

    frontend = app_settings.frontend_directory
    if frontend and Path(frontend).is_dir():
        app.mount('/', StaticFiles(directory=frontend, html=True), name='frontend')
    return app


app = create_app()
