"""Pytest configuration and fixtures."""

import os
import re
from datetime import timedelta

# Переменные окружения должны быть заданы до импорта config
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ["DATABASE_URL"] = "sqlite://"

import pytest

from app import create_app
from config import Config
from extensions import db
from models.snippet import Snippet, SnippetRepository
from models.user import UserRepository
from utils.timeutils import utcnow

CSRF_TOKEN_RE = re.compile(r'<input type="hidden" name="csrf_token" value="([^"]+)">')

ALICE_EMAIL = "alice@example.com"
ALICE_PASSWORD = "pa$$word"


class TestingConfig(Config):
    __test__ = False

    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SESSION_COOKIE_SECURE = False
    LOG_LEVEL = "WARNING"
    # Быстрый хеш для тестов
    PASSWORD_HASH_METHOD = "pbkdf2:sha256:1000"


def extract_csrf_token(body: str) -> str:
    match = CSRF_TOKEN_RE.search(body)
    assert match is not None, "no csrf token found in body"
    return match.group(1)


def _seed():
    UserRepository().insert("Alice", ALICE_EMAIL, ALICE_PASSWORD)

    snippets = SnippetRepository()
    snippets.insert("An old silent pond", "An old silent pond...\nA frog jumps into the pond,", 365)
    snippets.insert("Over the wintry forest", "Over the wintry\nforest, winds howl in rage", 7)

    now = utcnow()
    db.session.add(
        Snippet(
            title="Expired snippet",
            content="Nobody should see this",
            created=now - timedelta(days=8),
            expires=now - timedelta(days=1),
        )
    )
    db.session.commit()


@pytest.fixture
def app():
    """Приложение с чистой in-memory базой и тестовыми данными."""
    app = create_app(TestingConfig)
    with app.app_context():
        _seed()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def csrf_token(client):
    """Возвращает функцию, получающую CSRF-токен со страницы с формой."""

    def _fetch(path: str = "/user/login") -> str:
        response = client.get(path)
        return extract_csrf_token(response.get_data(as_text=True))

    return _fetch


@pytest.fixture
def login(client, csrf_token):
    def _login(email: str = ALICE_EMAIL, password: str = ALICE_PASSWORD):
        token = csrf_token("/user/login")
        return client.post(
            "/user/login",
            data={"email": email, "password": password, "csrf_token": token},
        )

    return _login
