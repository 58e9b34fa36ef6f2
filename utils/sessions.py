"""
Модуль: `utils/sessions.py`.
Назначение: Серверные сессии Flask, хранящиеся в таблице sessions.

В cookie лежит только непрозрачный токен; сами данные сериализуются тем же
TaggedJSONSerializer, что и у стандартной cookie-сессии Flask. Flask открывает
сессию при создании контекста запроса и сохраняет её один раз после того, как
ответ сформирован, какой бы обработчик ни отработал.
"""

import secrets

from flask.json.tag import TaggedJSONSerializer
from flask.sessions import SessionInterface, SessionMixin
from werkzeug.datastructures import CallbackDict

from extensions import db
from models.session import SessionRecord
from utils.timeutils import utcnow


def generate_token() -> str:
    """Случайный токен сессии для cookie."""
    return secrets.token_urlsafe(32)


class ServerSideSession(CallbackDict, SessionMixin):
    """Словарь сессии с отслеживанием изменений и ротацией токена."""

    def __init__(self, initial=None, token=None, expiry=None, new=False):
        def on_update(self):
            self.modified = True

        super().__init__(initial, on_update)
        self.token = token or generate_token()
        self.expiry = expiry
        self.new = new
        self.modified = False
        self.previous_token = None

    def renew(self) -> None:
        """Выдаёт сессии новый токен, сохраняя данные и срок жизни.

        Вызывается при смене привилегий (вход, выход), чтобы токен, известный
        до входа, не давал доступа к аутентифицированной сессии.
        """
        if self.previous_token is None and not self.new:
            self.previous_token = self.token
        self.token = generate_token()
        self.modified = True


class SqlAlchemySessionInterface(SessionInterface):
    """Хранилище сессий Flask поверх таблицы sessions."""

    serializer = TaggedJSONSerializer()
    session_class = ServerSideSession

    def open_session(self, app, request):
        token = request.cookies.get(self.get_cookie_name(app))
        if token:
            record = db.session.get(SessionRecord, token)
            if record is not None and record.expiry > utcnow():
                data = self.serializer.loads(record.data.decode("utf-8"))
                return self.session_class(data, token=token, expiry=record.expiry)

        return self.session_class(
            expiry=utcnow() + app.permanent_session_lifetime,
            new=True,
        )

    def save_session(self, app, session, response):
        name = self.get_cookie_name(app)
        domain = self.get_cookie_domain(app)
        path = self.get_cookie_path(app)
        secure = self.get_cookie_secure(app)
        samesite = self.get_cookie_samesite(app)
        httponly = self.get_cookie_httponly(app)

        # renew() всегда помечает сессию изменённой
        if not session.modified:
            return

        if session.previous_token is not None:
            self._delete_record(session.previous_token)
            session.previous_token = None

        if not session:
            self._delete_record(session.token)
            db.session.commit()
            response.delete_cookie(
                name,
                domain=domain,
                path=path,
                secure=secure,
                httponly=httponly,
                samesite=samesite,
            )
            return

        db.session.merge(
            SessionRecord(
                token=session.token,
                data=self.serializer.dumps(dict(session)).encode("utf-8"),
                expiry=session.expiry,
            )
        )
        db.session.commit()

        response.set_cookie(
            name,
            session.token,
            expires=session.expiry,
            httponly=httponly,
            domain=domain,
            path=path,
            secure=secure,
            samesite=samesite,
        )

    @staticmethod
    def _delete_record(token: str) -> None:
        SessionRecord.query.filter_by(token=token).delete(synchronize_session=False)
