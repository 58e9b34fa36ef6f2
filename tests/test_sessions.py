"""Server-side session tests."""

from datetime import timedelta

from extensions import db
from models.session import SessionRecord
from utils.cleanup import purge_expired_sessions
from utils.sessions import SqlAlchemySessionInterface
from utils.timeutils import utcnow


def _session_token(client):
    cookie = client.get_cookie("session")
    return cookie.value if cookie is not None else None


def _stored_data(app, token):
    with app.app_context():
        record = db.session.get(SessionRecord, token)
        if record is None:
            return None
        return SqlAlchemySessionInterface.serializer.loads(record.data.decode("utf-8"))


def test_session_is_persisted_server_side(app, client):
    client.get("/user/login")
    token = _session_token(client)

    assert token is not None
    data = _stored_data(app, token)
    assert data is not None
    assert "csrf_token" in data


def test_session_cookie_flags(client):
    response = client.get("/user/login")
    set_cookie = response.headers["Set-Cookie"]

    assert "HttpOnly" in set_cookie
    assert "SameSite=Lax" in set_cookie


def test_unmodified_session_is_not_rewritten(client):
    client.get("/user/login")
    response = client.get("/ping")

    assert "Set-Cookie" not in response.headers


def test_login_rotates_session_token(app, client, login):
    client.get("/user/login")
    before = _session_token(client)

    response = login()
    after = _session_token(client)

    assert response.status_code == 303
    assert before != after
    assert _stored_data(app, before) is None
    assert _stored_data(app, after)["authenticatedUserID"] == 1


def test_logout_rotates_token_and_forgets_user(app, client, login, csrf_token):
    login()
    logged_in = _session_token(client)

    token = csrf_token("/snippet/create")
    response = client.post("/user/logout", data={"csrf_token": token})
    logged_out = _session_token(client)

    assert response.status_code == 303
    assert response.headers["Location"] == "/"
    assert logged_in != logged_out
    assert "authenticatedUserID" not in _stored_data(app, logged_out)

    assert client.get("/account/view").status_code == 303


def test_expired_session_is_ignored(app, client):
    client.get("/user/login")
    token = _session_token(client)

    with app.app_context():
        record = db.session.get(SessionRecord, token)
        record.expiry = utcnow() - timedelta(minutes=1)
        db.session.commit()

    client.get("/user/login")

    assert _session_token(client) != token


def test_flash_is_shown_once(client, csrf_token):
    token = csrf_token("/user/signup")
    client.post(
        "/user/signup",
        data={
            "name": "Carol",
            "email": "carol@example.com",
            "password": "password123",
            "csrf_token": token,
        },
    )

    first = client.get("/user/login").get_data(as_text=True)
    second = client.get("/user/login").get_data(as_text=True)

    assert "Your signup was successful. Please log in." in first
    assert "Your signup was successful. Please log in." not in second


def test_purge_expired_sessions(app):
    now = utcnow()
    serializer = SqlAlchemySessionInterface.serializer

    with app.app_context():
        db.session.add_all(
            [
                SessionRecord(
                    token="expired",
                    data=serializer.dumps({"a": 1}).encode("utf-8"),
                    expiry=now - timedelta(hours=1),
                ),
                SessionRecord(
                    token="alive",
                    data=serializer.dumps({"b": 2}).encode("utf-8"),
                    expiry=now + timedelta(hours=1),
                ),
            ]
        )
        db.session.commit()

        removed = purge_expired_sessions()

        assert removed == 1
        assert db.session.get(SessionRecord, "expired") is None
        assert db.session.get(SessionRecord, "alive") is not None
