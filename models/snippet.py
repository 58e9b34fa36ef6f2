"""
Программа: «Snippetbox» – веб-приложение для публикации коротких заметок.
Модуль: models/snippet.py – модель заметки и репозиторий для работы с ней.

Назначение модуля:
- Описание ORM-модели Snippet (заголовок, текст, время создания и истечения).
- Репозиторий SnippetRepository: вставка, получение по id, последние заметки.
- Просроченные заметки не возвращаются ни одним запросом.
"""

from datetime import timedelta

from extensions import db
from models.errors import NoRecordError
from utils.timeutils import utcnow


class Snippet(db.Model):
    """Класс `Snippet` описывает заметку пользователя."""
    __tablename__ = "snippets"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(100), nullable=False)
    content = db.Column(db.Text, nullable=False)
    created = db.Column(db.DateTime, nullable=False, default=utcnow, index=True)
    expires = db.Column(db.DateTime, nullable=False, index=True)

    def __repr__(self):
        return f"<Snippet {self.id} {self.title!r}>"


class SnippetRepository:
    """Обёртка над таблицей snippets; каждый вызов идёт напрямую в БД."""

    def insert(self, title: str, content: str, expires_days: int) -> int:
        now = utcnow()
        snippet = Snippet(
            title=title,
            content=content,
            created=now,
            expires=now + timedelta(days=expires_days),
        )
        db.session.add(snippet)
        db.session.commit()
        return snippet.id

    def get(self, snippet_id: int) -> Snippet:
        snippet = (
            Snippet.query.filter(Snippet.id == snippet_id, Snippet.expires > utcnow())
            .first()
        )
        if snippet is None:
            raise NoRecordError()
        return snippet

    def latest(self, limit: int = 10) -> list[Snippet]:
        return (
            Snippet.query.filter(Snippet.expires > utcnow())
            .order_by(Snippet.created.desc(), Snippet.id.desc())
            .limit(limit)
            .all()
        )
