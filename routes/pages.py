"""
Программа: «Snippetbox» – веб-приложение для публикации коротких заметок.
Модуль: routes/pages.py – маршруты заметок и служебные страницы.

Назначение модуля:
- Главная страница со списком последних заметок.
- Просмотр заметки по идентификатору и создание новой заметки.
- Страница «О проекте» и проверка живости `/ping`.
"""

from flask import current_app, redirect, request, session, url_for

from models.errors import NoRecordError
from utils.forms import FormDecodeError, SnippetCreateForm
from utils.responses import PLAIN_TEXT_HEADERS, client_error, not_found
from utils.templating import new_template_data, render


def _snippets():
    return current_app.extensions["snippets"]


def ping():
    """Проверка живости сервера."""
    return "OK", 200, PLAIN_TEXT_HEADERS


def home():
    """Последние непросроченные заметки, новые сверху."""
    snippets = _snippets().latest(current_app.config["LATEST_SNIPPETS_LIMIT"])

    data = new_template_data()
    data["snippets"] = snippets
    return render("home.html", data)


def about():
    """Страница «О проекте»."""
    return render("about.html", new_template_data())


def snippet_view(snippet_id: int):
    """Просмотр непросроченной заметки по идентификатору."""
    if snippet_id < 1:
        return not_found()

    try:
        snippet = _snippets().get(snippet_id)
    except NoRecordError:
        return not_found()

    data = new_template_data()
    data["snippet"] = snippet
    return render("view.html", data)


def snippet_create():
    """Форма создания заметки."""
    data = new_template_data()
    # Значение по умолчанию для срока жизни – год
    data["form"] = SnippetCreateForm(expires=365)
    return render("create.html", data)


def snippet_create_post():
    """Проверка формы и сохранение новой заметки."""
    try:
        form = SnippetCreateForm.from_request(request.form)
    except FormDecodeError:
        return client_error(400)

    if not form.validate():
        data = new_template_data()
        data["form"] = form
        return render("create.html", data, status=422)

    snippet_id = _snippets().insert(form.title, form.content, form.expires)

    session["flash"] = "Snippet successfully created!"
    return redirect(url_for("snippet_view", snippet_id=snippet_id), code=303)


def register_routes(app, dynamic, protected):
    """Регистрирует маршруты модуля; `dynamic`/`protected` – цепочки middleware."""
    routes = (
        ("GET", "/ping", "ping", None, ping),
        ("GET", "/", "home", dynamic, home),
        ("GET", "/about", "about", dynamic, about),
        ("GET", "/snippet/view/<int:snippet_id>", "snippet_view", dynamic, snippet_view),
        ("GET", "/snippet/create", "snippet_create", protected, snippet_create),
        ("POST", "/snippet/create", "snippet_create_post", protected, snippet_create_post),
    )

    for method, rule, endpoint, chain, view in routes:
        view_func = chain.view(view) if chain is not None else view
        app.add_url_rule(rule, endpoint, view_func, methods=[method])
