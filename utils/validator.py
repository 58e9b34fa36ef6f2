"""
Модуль: `utils/validator.py`.
Назначение: Накопитель ошибок валидации форм и чистые функции-проверки.
"""

import re

EMAIL_RX = re.compile(
    r"^[a-zA-Z0-9.!#$%&'*+/=?^_`{|}~-]+@[a-zA-Z0-9]"
    r"(?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?"
    r"(?:\.[a-zA-Z0-9](?:[a-zA-Z0-9-]{0,61}[a-zA-Z0-9])?)*$"
)


class Validator:
    """Собирает ошибки по полям и общие ошибки формы."""

    def __init__(self):
        self.field_errors: dict[str, str] = {}
        self.non_field_errors: list[str] = []

    def valid(self) -> bool:
        return not self.field_errors and not self.non_field_errors

    def add_field_error(self, key: str, message: str) -> None:
        # Для поля сохраняется только первое сообщение
        self.field_errors.setdefault(key, message)

    def add_non_field_error(self, message: str) -> None:
        self.non_field_errors.append(message)

    def check_field(self, ok: bool, key: str, message: str) -> None:
        if not ok:
            self.add_field_error(key, message)


def not_blank(value: str) -> bool:
    """Значение содержит хотя бы один непробельный символ."""
    return value.strip() != ""


def min_chars(value: str, n: int) -> bool:
    return len(value) >= n


def max_chars(value: str, n: int) -> bool:
    return len(value) <= n


def permitted_value(value, *permitted_values) -> bool:
    return value in permitted_values


def matches(value: str, rx: re.Pattern) -> bool:
    return rx.match(value) is not None


def valid_email(value: str) -> bool:
    """Значение похоже на адрес электронной почты."""
    return matches(value, EMAIL_RX)
