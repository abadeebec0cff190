from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8')

    app_name: str = 'Config Store'
    app_host: str = '0.0.0.0'
    app_port: int = Field(default=8080, ge=1, le=65535)
    log_level: str = 'info'
    cors_origins: str = ''

    configurations_directory: str = './configurations'
    hidden_configuration_prefixes: str = 'IAF_'
    replace_creates_missing: bool = True
    frontend_directory: str = ''

    auth_enabled: bool = False
    auth_username: str = 'admin'
    auth_password_hash: str = ''
    jwt_secret: str = 'change-me'
    jwt_algorithm: str = 'HS256'
    jwt_expire_minutes: int = Field(default=120, ge=1)


def parse_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(',') if item.strip()]


settings = Settings()
