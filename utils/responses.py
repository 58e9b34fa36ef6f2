"""
Модуль: `utils/responses.py`.
Назначение: Типовые ответы об ошибках клиента и сервера.
"""

import traceback
from http import HTTPStatus

from flask import current_app, make_response, request

PLAIN_TEXT_HEADERS = {"Content-Type": "text/plain; charset=utf-8"}


def request_uri(req=None) -> str:
    """Путь запроса вместе со строкой запроса (если она есть)."""
    req = req or request
    query = req.query_string.decode("latin-1")
    return f"{req.path}?{query}" if query else req.path


def server_error(exc: BaseException):
    """Логирует ошибку с трассировкой и отдаёт пользователю общий 500."""
    current_app.logger.error(
        "%s: method=%s uri=%s",
        exc,
        request.method,
        request_uri(),
        exc_info=exc,
    )

    body = HTTPStatus.INTERNAL_SERVER_ERROR.phrase
    if current_app.debug:
        body = f"{body}\n\n{''.join(traceback.format_exception(exc))}"
    return make_response(body, HTTPStatus.INTERNAL_SERVER_ERROR, PLAIN_TEXT_HEADERS)


def client_error(status: int):
    """Короткий текстовый ответ с кодом ошибки клиента."""
    return make_response(HTTPStatus(status).phrase, status, PLAIN_TEXT_HEADERS)


def not_found():
    """Ответ 404."""
    return client_error(HTTPStatus.NOT_FOUND)
