"""
Программа: «Snippetbox» – веб-приложение для публикации коротких заметок.
Модуль: models/session.py – серверное хранилище сессий.
"""

from extensions import db


class SessionRecord(db.Model):
    """Строка таблицы sessions: токен, сериализованные данные и срок жизни."""
    __tablename__ = "sessions"

    token = db.Column(db.String(64), primary_key=True)
    data = db.Column(db.LargeBinary, nullable=False)
    expiry = db.Column(db.DateTime, nullable=False, index=True)
