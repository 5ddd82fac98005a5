# teamview/core/settings.py
from pathlib import Path
from typing import List, Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    """
    Основные переменные окружения и настройки приложения.
    Значения берутся из окружения или из .env.
    """
    # Database (пользователи и их личные views)
    DATABASE_URL: str = "sqlite:///./teamview.db"

    # Jenkins home: команды хранятся в <JENKINS_HOME>/teams/<name>/config.xml
    JENKINS_HOME: Path = Path("./jenkins_home")
    TEAMS_DIRECTORY_NAME: str = "teams"

    # JWT / Security
    SECRET_KEY: str
    JWT_ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # First Superuser (можно через env)
    FIRST_SUPERUSER_USERNAME: Optional[str] = None
    FIRST_SUPERUSER_EMAIL: Optional[str] = None
    FIRST_SUPERUSER_PASSWORD: Optional[str] = None

    # App meta
    ENV: str = "development"
    DEBUG: bool = True
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Авто-сплит строкового списка ALLOWED_ORIGINS из .env
    @field_validator("ALLOWED_ORIGINS", mode="before")
    @classmethod
    def split_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        return v

    @property
    def teams_root(self) -> Path:
        return Path(self.JENKINS_HOME) / self.TEAMS_DIRECTORY_NAME

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

settings = Settings()
