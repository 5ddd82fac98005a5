# teamview/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from teamview.core.settings import settings

# Пользователи и их личные views. Команды хранятся в XML, см. teamview.team_store

connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,
)
