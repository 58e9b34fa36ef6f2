"""
Модуль: `models/__init__.py`.
Назначение: Импорт моделей для корректной регистрации в SQLAlchemy metadata.
"""

from .errors import DuplicateEmailError, InvalidCredentialsError, ModelError, NoRecordError
from .session import SessionRecord
from .snippet import Snippet, SnippetRepository
from .user import User, UserRepository

__all__ = [
    "DuplicateEmailError",
    "InvalidCredentialsError",
    "ModelError",
    "NoRecordError",
    "SessionRecord",
    "Snippet",
    "SnippetRepository",
    "User",
    "UserRepository",
]
