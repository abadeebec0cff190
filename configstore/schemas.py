from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    username: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = 'bearer'


class ApiResponse(BaseModel):
    ok: bool
    message: str
    data: Optional[Any] = None


class ErrorResponse(BaseModel):
    detail: str
    error: str
    path: Optional[str] = None
