"""
Программа: «Snippetbox» – веб-приложение для публикации коротких заметок.
Модуль: routes/auth.py – маршруты аутентификации и личного кабинета.

Назначение модуля:
- Регистрация новых пользователей, вход и выход из системы.
- Просмотр учётной записи и смена пароля.
- Загрузка пользователя из сессии для Flask-Login.
"""

from urllib.parse import urlsplit

from flask import current_app, redirect, request, session, url_for

from extensions import login_manager
from models.errors import DuplicateEmailError, InvalidCredentialsError, NoRecordError
from utils.forms import FormDecodeError, PasswordChangeForm, UserLoginForm, UserSignupForm
from utils.responses import client_error
from utils.templating import new_template_data, render


@login_manager.request_loader
def load_user_from_session(_request):
    """Загружает пользователя Flask-Login по идентификатору из сессии."""
    user_id = session.get("authenticatedUserID")
    if user_id is None:
        return None
    try:
        return current_app.extensions["users"].get(user_id)
    except NoRecordError:
        return None


def _users():
    return current_app.extensions["users"]


def _is_safe_redirect_url(target: str | None) -> bool:
    """Проверяет, что адрес возврата после входа ведёт внутрь приложения."""
    # Разрешаем только локальные абсолютные пути вида /path?query
    if not target or not target.startswith("/"):
        return False
    if target.startswith("//") or target.startswith("/\\"):
        return False
    parts = urlsplit(target)
    return not parts.scheme and not parts.netloc


def user_signup():
    """Страница регистрации с пустой формой."""
    data = new_template_data()
    data["form"] = UserSignupForm()
    return render("signup.html", data)


def user_signup_post():
    """Обработка формы регистрации нового пользователя."""
    try:
        form = UserSignupForm.from_request(request.form)
    except FormDecodeError:
        return client_error(400)

    if not form.validate():
        data = new_template_data()
        data["form"] = form
        return render("signup.html", data, status=422)

    try:
        _users().insert(form.name, form.email, form.password)
    except DuplicateEmailError:
        form.validator.add_field_error("email", "Email address is already in use")
        data = new_template_data()
        data["form"] = form
        return render("signup.html", data, status=422)

    session["flash"] = "Your signup was successful. Please log in."
    return redirect(url_for("user_login"), code=303)


def user_login():
    """Страница входа с пустой формой."""
    data = new_template_data()
    data["form"] = UserLoginForm()
    return render("login.html", data)


def user_login_post():
    """Проверка учётных данных и вход пользователя в систему."""
    try:
        form = UserLoginForm.from_request(request.form)
    except FormDecodeError:
        return client_error(400)

    if not form.validate():
        data = new_template_data()
        data["form"] = form
        return render("login.html", data, status=422)

    try:
        user_id = _users().authenticate(form.email, form.password)
    except InvalidCredentialsError:
        form.validator.add_non_field_error("Email or password is incorrect")
        data = new_template_data()
        data["form"] = form
        return render("login.html", data, status=422)

    # Новый токен при смене привилегий (защита от фиксации сессии)
    session.renew()
    session["authenticatedUserID"] = user_id

    redirect_url = session.pop("postLoginRedirectURL", None)
    if not _is_safe_redirect_url(redirect_url):
        redirect_url = current_app.config["DEFAULT_LOGIN_REDIRECT"]
    return redirect(redirect_url, code=303)


def user_logout_post():
    """Выход из системы с выдачей нового токена сессии."""
    session.renew()
    session.pop("authenticatedUserID", None)

    session["flash"] = "You've been logged out successfully"
    return redirect(url_for("home"), code=303)


def account_view():
    """Страница с данными текущего пользователя."""
    try:
        user = _users().get(session.get("authenticatedUserID"))
    except NoRecordError:
        return redirect(url_for("user_login"), code=303)

    data = new_template_data()
    data["user"] = user
    return render("account.html", data)


def account_password_update():
    """Форма смены пароля."""
    data = new_template_data()
    data["form"] = PasswordChangeForm()
    return render("password.html", data)


def account_password_update_post():
    """Смена пароля после проверки текущего."""
    try:
        form = PasswordChangeForm.from_request(request.form)
    except FormDecodeError:
        return client_error(400)

    if not form.validate():
        data = new_template_data()
        data["form"] = form
        return render("password.html", data, status=422)

    users = _users()
    try:
        user = users.get(session.get("authenticatedUserID"))
    except NoRecordError:
        return redirect(url_for("user_login"), code=303)

    try:
        users.authenticate(user.email, form.current_password)
    except InvalidCredentialsError:
        form.validator.add_field_error("current_password", "Invalid current password")
        data = new_template_data()
        data["form"] = form
        return render("password.html", data, status=422)

    users.update_password(user.id, form.new_password)

    session["flash"] = "Password successfully updated"
    return redirect(url_for("account_view"), code=303)


def register_routes(app, dynamic, protected):
    """Регистрирует маршруты модуля; `dynamic`/`protected` – цепочки middleware."""
    routes = (
        ("GET", "/user/signup", "user_signup", dynamic, user_signup),
        ("POST", "/user/signup", "user_signup_post", dynamic, user_signup_post),
        ("GET", "/user/login", "user_login", dynamic, user_login),
        ("POST", "/user/login", "user_login_post", dynamic, user_login_post),
        ("POST", "/user/logout", "user_logout_post", protected, user_logout_post),
        ("GET", "/account/view", "account_view", protected, account_view),
        (
            "GET",
            "/account/password/update",
            "account_password_update",
            protected,
            account_password_update,
        ),
        (
            "POST",
            "/account/password/update",
            "account_password_update_post",
            protected,
            account_password_update_post,
        ),
    )

    for method, rule, endpoint, chain, view in routes:
        app.add_url_rule(rule, endpoint, chain.view(view), methods=[method])
