"""
Модуль: `routes/__init__.py`.
Назначение: Маршруты приложения, сгруппированные по модулям.
"""
