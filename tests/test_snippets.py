"""Snippet repository and handler tests."""

import re
from datetime import timedelta

import pytest

from extensions import db
from models.errors import NoRecordError
from models.snippet import Snippet, SnippetRepository
from utils.timeutils import utcnow


def test_insert_then_get_round_trip(app):
    repo = SnippetRepository()
    with app.app_context():
        snippet_id = repo.insert("Title", "Some content", 7)
        snippet = repo.get(snippet_id)

        assert snippet.title == "Title"
        assert snippet.content == "Some content"
        assert snippet.expires - snippet.created == timedelta(days=7)


def test_get_missing_snippet(app):
    with app.app_context():
        with pytest.raises(NoRecordError):
            SnippetRepository().get(999)


def test_get_expired_snippet(app):
    with app.app_context():
        expired = Snippet.query.filter_by(title="Expired snippet").one()
        with pytest.raises(NoRecordError):
            SnippetRepository().get(expired.id)


def test_latest_is_newest_first_and_skips_expired(app):
    with app.app_context():
        titles = [s.title for s in SnippetRepository().latest()]

    assert titles == ["Over the wintry forest", "An old silent pond"]


def test_latest_respects_limit(app):
    repo = SnippetRepository()
    with app.app_context():
        for i in range(12):
            repo.insert(f"Snippet {i}", "content", 1)

        latest = repo.latest(10)

        assert len(latest) == 10
        assert latest[0].title == "Snippet 11"


def test_home_lists_latest_snippets(client):
    response = client.get("/")
    body = response.get_data(as_text=True)

    assert response.status_code == 200
    assert "An old silent pond" in body
    assert "Over the wintry forest" in body
    assert "Expired snippet" not in body


def test_snippet_view(client):
    response = client.get("/snippet/view/1")

    assert response.status_code == 200
    assert "An old silent pond..." in response.get_data(as_text=True)


@pytest.mark.parametrize(
    "path",
    [
        "/snippet/view/0",
        "/snippet/view/abc",
        "/snippet/view/-1",
        "/snippet/view/1.23",
        "/snippet/view/",
        "/snippet/view/999",
        "/snippet/view/3",
    ],
)
def test_snippet_view_not_found(client, path):
    assert client.get(path).status_code == 404


def test_about_page(client):
    response = client.get("/about")

    assert response.status_code == 200
    assert "About" in response.get_data(as_text=True)


def _create(client, csrf_token, **fields):
    data = {"title": "A new snippet", "content": "Fresh content", "expires": "7"}
    data.update(fields)
    data["csrf_token"] = csrf_token("/snippet/create")
    return client.post("/snippet/create", data=data)


def test_create_form_defaults_to_one_year(client, login):
    login()
    body = client.get("/snippet/create").get_data(as_text=True)

    assert re.search(r'value="365"\s+checked', body)


def test_create_snippet(app, client, login, csrf_token):
    login()
    response = _create(client, csrf_token)

    assert response.status_code == 303
    match = re.fullmatch(r"/snippet/view/(\d+)", response.headers["Location"])
    assert match is not None

    page = client.get(response.headers["Location"]).get_data(as_text=True)
    assert "Snippet successfully created!" in page
    assert "Fresh content" in page

    with app.app_context():
        assert db.session.get(Snippet, int(match.group(1))).title == "A new snippet"


@pytest.mark.parametrize(
    "fields, field, message",
    [
        ({"title": ""}, "title", "This field cannot be blank"),
        ({"title": "x" * 101}, "title", "This field cannot be more than 100 characters long"),
        ({"content": "   "}, "content", "This field cannot be blank"),
        ({"expires": "30"}, "expires", "This field must equal 1, 7, or 365"),
    ],
)
def test_create_snippet_invalid(client, login, csrf_token, fields, field, message):
    login()
    response = _create(client, csrf_token, **fields)

    assert response.status_code == 422
    assert message in response.get_data(as_text=True)


def test_create_snippet_malformed_expires(client, login, csrf_token):
    login()
    response = _create(client, csrf_token, expires="soon")

    assert response.status_code == 400


def test_create_requires_login(client, csrf_token):
    token = csrf_token("/user/login")
    response = client.post(
        "/snippet/create",
        data={"title": "t", "content": "c", "expires": "1", "csrf_token": token},
    )

    assert response.status_code == 303
    assert response.headers["Location"] == "/user/login"


def test_snippet_expiring_now_is_hidden(app, client):
    with app.app_context():
        snippet = db.session.get(Snippet, 1)
        snippet.expires = utcnow() - timedelta(seconds=1)
        db.session.commit()

    assert client.get("/snippet/view/1").status_code == 404
