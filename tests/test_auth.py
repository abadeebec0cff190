from __future__ import annotations

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient
from starlette.requests import Request

from configstore import deps
from configstore.config import Settings
from configstore.main import create_app
from configstore.security import create_access_token, decode_token, hash_password


def _request(headers: list[tuple[bytes, bytes]] | None = None) -> Request:
    scope = {
        'type': 'http',
        'method': 'GET',
        'path': '/api/configurations',
        'headers': headers or [],
        'query_string': b'',
    }
    return Request(scope)


def _settings(**overrides) -> Settings:
    values = {'auth_enabled': True, 'jwt_secret': 'super-long-random-secret', 'auth_username': 'admin'}
    values.update(overrides)
    return Settings(**values)


def test_current_user_is_anonymous_when_auth_disabled():
    assert deps.get_current_user(_request(), Settings(auth_enabled=False)) is None


def test_current_user_requires_token():
    with pytest.raises(HTTPException) as exc:
        deps.get_current_user(_request(), _settings())

    assert exc.value.status_code == 401


def test_current_user_accepts_bearer_token():
    settings = _settings()
    token = create_access_token('admin', settings)

    user = deps.get_current_user(_request([(b'authorization', f'Bearer {token}'.encode())]), settings)

    assert user == 'admin'


def test_current_user_rejects_token_for_other_user():
    settings = _settings()
    token = create_access_token('mallory', settings)

    with pytest.raises(HTTPException) as exc:
        deps.get_current_user(_request([(b'authorization', f'Bearer {token}'.encode())]), settings)

    assert exc.value.status_code == 401


def test_decode_token_rejects_wrong_secret():
    token = create_access_token('admin', _settings(jwt_secret='one-secret'))

    with pytest.raises(ValueError):
        decode_token(token, _settings(jwt_secret='another-secret'))


def test_login_flow_protects_api(tmp_path):
    (tmp_path / 'cfgA').mkdir()
    settings = _settings(configurations_directory=str(tmp_path), auth_password_hash=hash_password('s3cret-pass'))

    with TestClient(create_app(settings)) as client:
        assert client.get('/api/configurations').status_code == 401

        bad = client.post('/api/auth/login', json={'username': 'admin', 'password': 'wrong'})
        assert bad.status_code == 401

        good = client.post('/api/auth/login', json={'username': 'admin', 'password': 's3cret-pass'})
        assert good.status_code == 200
        token = good.json()['access_token']

        listed = client.get('/api/configurations', headers={'Authorization': f'Bearer {token}'})
        assert listed.status_code == 200
        assert listed.json() == ['cfgA']
