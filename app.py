"""
Программа: «Snippetbox» – веб-приложение для публикации коротких заметок.
Модуль: app.py – фабрика приложения и точка запуска.

Назначение модуля:
- Сборка Flask-приложения: конфигурация, расширения, хранилище сессий.
- Построение цепочек middleware и регистрация маршрутов.
- Обработчики ошибок и CLI-команда очистки просроченных сессий.
"""

import click
from flask import Flask, redirect, request, session, url_for
from jinja2 import TemplateError
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import HTTPException

from config import Config
from extensions import db, login_manager
import models  # noqa: F401 - регистрирует модели для db.create_all()
from models.snippet import SnippetRepository
from models.user import UserRepository
from routes.auth import register_routes as register_auth_routes
from routes.pages import register_routes as register_page_routes
from utils.cleanup import purge_expired_sessions
from utils.middleware import (
    Authenticate,
    Chain,
    CsrfProtect,
    LogRequest,
    RecoverPanic,
    RequireAuthentication,
    SecureHeaders,
)
from utils.responses import client_error, request_uri, server_error
from utils.sessions import SqlAlchemySessionInterface
from utils.templating import template_filters


class Snippetbox(Flask):
    """Flask-приложение, пропускающее каждый запрос через общую цепочку middleware."""

    standard_pipeline = None

    def full_dispatch_request(self):
        if self.standard_pipeline is None:
            return super().full_dispatch_request()
        return self.standard_pipeline(request._get_current_object())


def create_app(config_object=Config) -> Snippetbox:
    """Фабрика приложения, собирающая все модули воедино."""
    app = Snippetbox(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(app.config["LOG_LEVEL"])

    # Инициализация расширений
    db.init_app(app)
    login_manager.init_app(app)
    # Сессию меняют только обработчики входа/выхода
    login_manager.session_protection = None

    app.session_interface = SqlAlchemySessionInterface()
    app.jinja_env.filters.update(template_filters())

    app.extensions["snippets"] = SnippetRepository()
    app.extensions["users"] = UserRepository()

    @login_manager.unauthorized_handler
    def handle_unauthorized():
        # Запоминаем страницу, чтобы вернуться на неё после входа
        if request.method == "GET":
            session["postLoginRedirectURL"] = request_uri()
        return redirect(url_for("user_login"), code=303)

    # Регистрация роутов по модулям
    dynamic = Chain(Authenticate(), CsrfProtect())
    protected = dynamic.append(RequireAuthentication())
    register_page_routes(app, dynamic, protected)
    register_auth_routes(app, dynamic, protected)

    standard = Chain(
        RecoverPanic(),
        LogRequest(),
        SecureHeaders(app.config["CONTENT_SECURITY_POLICY"]),
    )
    app.standard_pipeline = standard.then(lambda _request: Flask.full_dispatch_request(app))

    @app.errorhandler(HTTPException)
    def handle_http_exception(exc):
        response = client_error(exc.code or 500)
        for name, value in exc.get_headers():
            if name.lower() != "content-type":
                response.headers[name] = value
        return response

    @app.errorhandler(SQLAlchemyError)
    def handle_storage_error(exc):
        db.session.rollback()
        return server_error(exc)

    @app.errorhandler(TemplateError)
    def handle_template_error(exc):
        return server_error(exc)

    @app.cli.command("purge-sessions")
    def purge_sessions_command():
        """Удаляет просроченные сессии из базы данных."""
        removed = purge_expired_sessions()
        click.echo(f"Removed {removed} expired sessions")

    with app.app_context():
        # Создаем отсутствующие таблицы (без изменения существующих колонок)
        db.create_all()

    return app


app = create_app()


if __name__ == "__main__":
    with app.app_context():
        # Очистка просроченных сессий при запуске приложения
        purge_expired_sessions()
    app.run(host=app.config["HOST"], port=app.config["PORT"], debug=app.config["DEBUG"])
