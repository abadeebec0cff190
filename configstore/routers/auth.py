from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from ..config import Settings
from ..deps import get_settings
from ..schemas import ApiResponse, LoginRequest, TokenResponse
from ..security import create_access_token, verify_password

router = APIRouter(prefix='/api/auth', tags=['auth'])
logger = logging.getLogger(__name__)


@router.post('/login', response_model=TokenResponse)
def login(payload: LoginRequest, request: Request, response: Response, settings: Settings = Depends(get_settings)):
    if not settings.auth_enabled:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail='Authentication is disabled')

    if payload.username != settings.auth_username or not verify_password(payload.password, settings.auth_password_hash):
        logger.warning('failed login for user [%s]', payload.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail='Invalid credentials')

    token = create_access_token(payload.username, settings)
    is_https = request.url.scheme == 'https'
    response.set_cookie(
        'access_token',
        token,
        httponly=True,
        secure=is_https,
        samesite='strict',
        max_age=settings.jwt_expire_minutes * 60,
    )
    return TokenResponse(access_token=token)


@router.post('/logout')
def logout(response: Response):
    response.delete_cookie('access_token')
    return ApiResponse(ok=True, message='Logged out')
