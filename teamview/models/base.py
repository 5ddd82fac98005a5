"""
Базовый класс для ORM-моделей проекта (пользователи и их личные views).

Команды хранятся не в БД, а в XML-файлах, см. teamview.models.team.
"""

from sqlalchemy.orm import declarative_base

Base = declarative_base()
