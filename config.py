"""
Программа: «Snippetbox» – веб-приложение для публикации коротких заметок.
Модуль: config.py – конфигурация приложения.

Назначение модуля:
- Определение базовых параметров Flask (секретный ключ, строка подключения к БД).
- Параметры cookie сессии и срока её жизни.
- Сетевой адрес сервера, уровень логирования и режим отладки.
"""

import os
import warnings
from datetime import timedelta


def _get_env_bool(name: str, default: bool = False) -> bool:
    """Преобразует переменную окружения в bool."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _get_env_int(name: str, default: int) -> int:
    """Преобразует переменную окружения в int."""
    value = os.environ.get(name)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError:
        return default


def _is_production() -> bool:
    """Определяет production-режим по FLASK_ENV."""
    return os.environ.get("FLASK_ENV", "").strip().lower() == "production"


class Config:
    """Базовая конфигурация приложения."""

    _PRODUCTION = _is_production()

    SECRET_KEY = os.environ.get("SECRET_KEY")
    if not SECRET_KEY:
        if _PRODUCTION:
            raise RuntimeError(
                "SECRET_KEY environment variable is required in production. "
                "Set a strong random value before starting the app."
            )
        SECRET_KEY = "dev-insecure-secret-key"
        warnings.warn(
            "SECRET_KEY is not set. Using insecure development fallback key.",
            RuntimeWarning,
            stacklevel=1,
        )

    HOST = os.environ.get("HOST", "127.0.0.1").strip() or "127.0.0.1"
    PORT = _get_env_int("PORT", 4000)
    DEBUG = _get_env_bool("DEBUG", default=False)
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"

    SQLALCHEMY_DATABASE_URI = os.environ.get("DATABASE_URL", "sqlite:///snippetbox.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    SESSION_COOKIE_NAME = "session"
    SESSION_COOKIE_SECURE = _get_env_bool("SESSION_COOKIE_SECURE", default=_PRODUCTION)
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SAMESITE = "Lax"
    PERMANENT_SESSION_LIFETIME = timedelta(hours=_get_env_int("SESSION_LIFETIME_HOURS", 12))

    LATEST_SNIPPETS_LIMIT = 10
    PASSWORD_HASH_METHOD = "scrypt"
    DEFAULT_LOGIN_REDIRECT = "/snippet/create"

    CONTENT_SECURITY_POLICY = (
        "default-src 'self'; style-src 'self' fonts.googleapis.com; font-src fonts.gstatic.com"
    )
