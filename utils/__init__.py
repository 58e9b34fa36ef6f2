"""
Модуль: `utils/__init__.py`.
Назначение: Вспомогательные модули приложения (сессии, middleware, формы, шаблоны).
"""
