"""
Модуль: `utils/timeutils.py`.
Назначение: Единая точка получения текущего времени (naive UTC, как хранится в БД).
"""

from datetime import datetime, timezone


def utcnow() -> datetime:
    """Текущее время в UTC без tzinfo."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
