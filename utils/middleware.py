"""
Модуль: `utils/middleware.py`.
Назначение: Цепочка обработчиков запроса (middleware) и её звенья.

Каждое звено реализует `handle(request, next_handler)`: может выполнить код до
и после вызова следующего звена или вернуть ответ сразу, не вызывая его.
Цепочка сворачивается во вложенные вызовы один раз при регистрации маршрута.
"""

import hmac
import secrets
from functools import partial, wraps

from flask import current_app, g, make_response, request, session
from flask_login import current_user

from extensions import login_manager
from utils.responses import client_error, request_uri, server_error

SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS", "TRACE"})


def ensure_csrf_token() -> str:
    """Возвращает CSRF-токен сессии, создавая его при первом обращении."""
    token = session.get("csrf_token")
    if not token:
        token = secrets.token_urlsafe(32)
        session["csrf_token"] = token
    return token


def is_csrf_valid(req) -> bool:
    """Сравнивает токен из формы или заголовка с токеном сессии."""
    expected = session.get("csrf_token")
    provided = req.form.get("csrf_token") or req.headers.get("X-CSRF-Token")
    if not expected or not provided:
        return False
    return hmac.compare_digest(expected, provided)


class Middleware:
    """Базовое звено цепочки."""

    def handle(self, request, next_handler):
        raise NotImplementedError


class Chain:
    """Упорядоченный (от внешнего к внутреннему) список звеньев."""

    def __init__(self, *middlewares: Middleware):
        self.middlewares = tuple(middlewares)

    def append(self, *middlewares: Middleware) -> "Chain":
        return Chain(*self.middlewares, *middlewares)

    def then(self, handler):
        """Оборачивает `handler(request) -> Response` всеми звеньями цепочки."""
        for middleware in reversed(self.middlewares):
            handler = partial(middleware.handle, next_handler=handler)
        return handler

    def view(self, func):
        """Адаптирует view-функцию Flask к цепочке.

        Параметры из URL (request.view_args) передаются во view как kwargs.
        """

        def terminal(req):
            return make_response(func(**(req.view_args or {})))

        pipeline = self.then(terminal)

        @wraps(func)
        def endpoint(**_view_args):
            return pipeline(request._get_current_object())

        return endpoint


class RecoverPanic(Middleware):
    """Любое необработанное исключение превращается в 500 и закрытие соединения."""

    def handle(self, request, next_handler):
        try:
            return next_handler(request)
        except Exception as exc:
            response = server_error(exc)
            # Заголовки, выставленные внутренними звеньями до падения
            for name, value in g.get("response_headers", {}).items():
                response.headers[name] = value
            response.headers["Connection"] = "close"
            return response


class LogRequest(Middleware):
    """Пишет в лог адрес клиента, протокол, метод и URI запроса."""

    def handle(self, request, next_handler):
        current_app.logger.info(
            "received request: ip=%s proto=%s method=%s uri=%s",
            request.remote_addr,
            request.environ.get("SERVER_PROTOCOL", ""),
            request.method,
            request_uri(request),
        )
        return next_handler(request)


class SecureHeaders(Middleware):
    """Выставляет фиксированный набор заголовков безопасности на любой ответ."""

    def __init__(self, content_security_policy: str):
        self.headers = {
            "Content-Security-Policy": content_security_policy,
            "Referrer-Policy": "origin-when-cross-origin",
            "X-Content-Type-Options": "nosniff",
            "X-Frame-Options": "deny",
            "X-XSS-Protection": "0",
        }

    def handle(self, request, next_handler):
        headers = g.setdefault("response_headers", {})
        headers.update(self.headers)

        response = next_handler(request)
        for name, value in self.headers.items():
            response.headers[name] = value
        return response


class Authenticate(Middleware):
    """Отмечает запрос как аутентифицированный, если пользователь из сессии существует."""

    def handle(self, request, next_handler):
        g.is_authenticated = bool(current_user.is_authenticated)
        return next_handler(request)


class RequireAuthentication(Middleware):
    """Пропускает дальше только вошедших пользователей."""

    def handle(self, request, next_handler):
        if not current_user.is_authenticated:
            return make_response(login_manager.unauthorized())

        response = next_handler(request)
        # Страницы, требующие входа, не должны оседать в кеше браузера
        response.headers["Cache-Control"] = "no-store"
        return response


class CsrfProtect(Middleware):
    """Отклоняет небезопасные запросы без верного CSRF-токена."""

    def handle(self, request, next_handler):
        if request.method in SAFE_METHODS or is_csrf_valid(request):
            return next_handler(request)

        current_app.logger.warning(
            "csrf token missing or invalid: method=%s uri=%s",
            request.method,
            request_uri(request),
        )
        return client_error(400)
