"""
Программа: «Snippetbox» – веб-приложение для публикации коротких заметок.
Модуль: models/errors.py – доменные ошибки слоя хранения.

Обработчики различают эти исключения и превращают их в понятные пользователю
ответы; всё остальное (ошибки БД) считается ошибкой сервера.
"""


class ModelError(Exception):
    """Базовое исключение моделей."""


class NoRecordError(ModelError):
    def __init__(self, message: str = "models: no matching record found"):
        super().__init__(message)


class InvalidCredentialsError(ModelError):
    def __init__(self, message: str = "models: invalid credentials"):
        super().__init__(message)


class DuplicateEmailError(ModelError):
    def __init__(self, message: str = "models: duplicate email"):
        super().__init__(message)
