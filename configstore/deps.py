from __future__ import annotations

from typing import Optional

from fastapi import Depends, HTTPException, Request, status

from .config import Settings
from .security import decode_token
from .services.file_ops import DirectoryStore, FileStore
from .services.paths import Root, RootRegistry


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_registry(request: Request) -> RootRegistry:
    return request.app.state.registry


def get_file_store(request: Request) -> FileStore:
    return request.app.state.file_store


def get_directory_store(request: Request) -> DirectoryStore:
    return request.app.state.directory_store


def get_root(name: str, registry: RootRegistry = Depends(get_registry)) -> Root:
    return registry.get(name)


def _extract_token(request: Request) -> Optional[str]:
    auth = request.headers.get('Authorization', '')
    if auth.startswith('Bearer '):
        return auth.split(' ', 1)[1].strip()
    return request.cookies.get('access_token') or None


def get_current_user(request: Request, settings: Settings = Depends(get_settings)) -> Optional[str]:
    """Return the authenticated user name, or ``None`` when authentication is disabled."""
    if not settings.auth_enabled:
        return None

    token = _extract_token(request)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Missing token')
    try:
        payload = decode_token(token, settings)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Invalid token')

    username = payload.get('sub')
    if not username or username != settings.auth_username:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Invalid token payload')
    return username
