"""
Модуль: `utils/cleanup.py`.
Назначение: Очистка просроченных сессий из хранилища.
"""

from flask import current_app

from extensions import db
from models.session import SessionRecord
from utils.timeutils import utcnow


def purge_expired_sessions() -> int:
    """Удаляет сессии с истёкшим сроком и возвращает их количество."""
    removed = (
        SessionRecord.query.filter(SessionRecord.expiry <= utcnow())
        .delete(synchronize_session=False)
    )
    db.session.commit()

    current_app.logger.info("purged %d expired sessions", removed)
    return removed
