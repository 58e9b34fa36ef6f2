"""
Программа: «Snippetbox» – веб-приложение для публикации коротких заметок.
Модуль: models/user.py – модель пользователя и репозиторий учётных записей.

Назначение модуля:
- Описание ORM-модели User (имя, уникальный email, хеш пароля).
- Регистрация, аутентификация по email/паролю и смена пароля.
- Пароль в открытом виде нигде не хранится и не логируется.
"""

from sqlalchemy.exc import IntegrityError
from flask import current_app
from flask_login import UserMixin
from werkzeug.security import check_password_hash, generate_password_hash

from extensions import db
from models.errors import DuplicateEmailError, InvalidCredentialsError, NoRecordError
from utils.timeutils import utcnow


class User(UserMixin, db.Model):
    """Класс `User` описывает учётную запись."""
    __tablename__ = "users"
    __table_args__ = (db.UniqueConstraint("email", name="users_uc_email"),)

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    hashed_password = db.Column(db.String(255), nullable=False)
    created = db.Column(db.DateTime, nullable=False, default=utcnow)

    def __repr__(self):
        return f"<User {self.id} {self.email!r}>"


def _hash_password(password: str) -> str:
    method = current_app.config.get("PASSWORD_HASH_METHOD", "scrypt")
    return generate_password_hash(password, method=method)


class UserRepository:
    """Операции над таблицей users."""

    def __init__(self):
        self._dummy_hash = None

    def insert(self, name: str, email: str, password: str) -> None:
        user = User(
            name=name,
            email=email,
            hashed_password=_hash_password(password),
            created=utcnow(),
        )
        db.session.add(user)
        try:
            db.session.commit()
        except IntegrityError as exc:
            db.session.rollback()
            if "email" in str(exc.orig).lower():
                raise DuplicateEmailError() from exc
            raise

    def authenticate(self, email: str, password: str) -> int:
        """Возвращает id пользователя или бросает InvalidCredentialsError.

        Для несуществующего email всё равно выполняется проверка хеша, чтобы
        время ответа не выдавало, какой из двух случаев произошёл.
        """
        user = User.query.filter_by(email=email).first()
        if user is None:
            check_password_hash(self._get_dummy_hash(), password)
            raise InvalidCredentialsError()

        if not check_password_hash(user.hashed_password, password):
            raise InvalidCredentialsError()

        return user.id

    def get(self, user_id: int | None) -> User:
        user = db.session.get(User, user_id) if user_id is not None else None
        if user is None:
            raise NoRecordError()
        return user

    def update_password(self, user_id: int, new_password: str) -> None:
        user = self.get(user_id)
        user.hashed_password = _hash_password(new_password)
        db.session.commit()

    def _get_dummy_hash(self) -> str:
        if self._dummy_hash is None:
            self._dummy_hash = _hash_password("dummy-password-for-timing")
        return self._dummy_hash
