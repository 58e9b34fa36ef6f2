"""
Модуль: `utils/forms.py`.
Назначение: Формы запросов – значения полей плюс накопитель ошибок.

Каждая форма живёт в пределах одного запроса: разбирается из тела POST,
проверяется и при ошибках отдаётся обратно в шаблон.
"""

from dataclasses import dataclass, field

from utils.validator import (
    Validator,
    max_chars,
    min_chars,
    not_blank,
    permitted_value,
    valid_email,
)

PERMITTED_EXPIRES = (1, 7, 365)


class FormDecodeError(ValueError):
    """Тело запроса не удаётся разобрать в поля формы."""


def _get_str(data, key: str) -> str:
    """Строковое значение поля (пустая строка, если поля нет)."""
    return data.get(key) or ""


def _get_int(data, key: str) -> int:
    """Целое значение поля; пустое поле даёт 0."""
    raw = (data.get(key) or "").strip()
    if not raw:
        return 0
    try:
        return int(raw)
    except ValueError as exc:
        raise FormDecodeError(f"field {key!r} must be an integer") from exc


@dataclass
class SnippetCreateForm:
    """Форма создания заметки."""

    title: str = ""
    content: str = ""
    expires: int = 365
    validator: Validator = field(default_factory=Validator)

    @classmethod
    def from_request(cls, data) -> "SnippetCreateForm":
        return cls(
            title=_get_str(data, "title"),
            content=_get_str(data, "content"),
            expires=_get_int(data, "expires"),
        )

    def validate(self) -> bool:
        v = self.validator
        v.check_field(not_blank(self.title), "title", "This field cannot be blank")
        v.check_field(
            max_chars(self.title, 100),
            "title",
            "This field cannot be more than 100 characters long",
        )
        v.check_field(not_blank(self.content), "content", "This field cannot be blank")
        v.check_field(
            permitted_value(self.expires, *PERMITTED_EXPIRES),
            "expires",
            "This field must equal 1, 7, or 365",
        )
        return v.valid()


@dataclass
class UserSignupForm:
    """Форма регистрации."""

    name: str = ""
    email: str = ""
    password: str = ""
    validator: Validator = field(default_factory=Validator)

    @classmethod
    def from_request(cls, data) -> "UserSignupForm":
        return cls(
            name=_get_str(data, "name"),
            email=_get_str(data, "email"),
            password=_get_str(data, "password"),
        )

    def validate(self) -> bool:
        v = self.validator
        v.check_field(not_blank(self.name), "name", "Name field cannot be empty")
        v.check_field(not_blank(self.email), "email", "Email field cannot be empty")
        v.check_field(valid_email(self.email), "email", "Not a valid email address")
        v.check_field(not_blank(self.password), "password", "Password field cannot be empty")
        v.check_field(
            min_chars(self.password, 8),
            "password",
            "Password field cannot be less than 8 characters",
        )
        return v.valid()


@dataclass
class UserLoginForm:
    """Форма входа."""

    email: str = ""
    password: str = ""
    validator: Validator = field(default_factory=Validator)

    @classmethod
    def from_request(cls, data) -> "UserLoginForm":
        return cls(
            email=_get_str(data, "email"),
            password=_get_str(data, "password"),
        )

    def validate(self) -> bool:
        v = self.validator
        v.check_field(not_blank(self.email), "email", "This field cannot be blank")
        v.check_field(valid_email(self.email), "email", "This field must be a valid email address")
        v.check_field(not_blank(self.password), "password", "This field cannot be blank")
        return v.valid()


@dataclass
class PasswordChangeForm:
    """Форма смены пароля."""

    current_password: str = ""
    new_password: str = ""
    new_password_confirmation: str = ""
    validator: Validator = field(default_factory=Validator)

    @classmethod
    def from_request(cls, data) -> "PasswordChangeForm":
        return cls(
            current_password=_get_str(data, "current_password"),
            new_password=_get_str(data, "new_password"),
            new_password_confirmation=_get_str(data, "new_password_confirmation"),
        )

    def validate(self) -> bool:
        v = self.validator
        v.check_field(
            not_blank(self.current_password),
            "current_password",
            "This field cannot be blank",
        )
        v.check_field(
            min_chars(self.new_password, 8) and max_chars(self.new_password, 15),
            "new_password",
            "Password must be between 8 and 15 characters long",
        )
        v.check_field(
            self.new_password == self.new_password_confirmation,
            "new_password_confirmation",
            "Passwords do not match",
        )
        return v.valid()
