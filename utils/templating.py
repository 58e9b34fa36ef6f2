"""
Модуль: `utils/templating.py`.
Назначение: Данные для шаблонов и вспомогательные фильтры Jinja2.
"""

from datetime import datetime

from flask import g, render_template, session

from utils.middleware import ensure_csrf_token
from utils.timeutils import utcnow


def human_date(value: datetime | None) -> str:
    """Форматирует время в UTC, например `02 Jan 2006 at 15:04`."""
    if value is None:
        return ""
    return value.strftime("%d %b %Y at %H:%M")


def template_filters() -> dict:
    """Таблица фильтров, регистрируемых в окружении Jinja2 при старте."""
    return {
        "human_date": human_date,
    }


def new_template_data() -> dict:
    """Собирает общие данные шаблона; новый словарь на каждый запрос."""
    return {
        "current_year": utcnow().year,
        "flash": session.pop("flash", None),
        "is_authenticated": g.get("is_authenticated", False),
        "csrf_token": ensure_csrf_token(),
    }


def render(page: str, data: dict, status: int = 200):
    return render_template(page, **data), status
