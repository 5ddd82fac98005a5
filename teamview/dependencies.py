# teamview/dependencies.py

from typing import Generator
from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session
from teamview.core.security import oauth2_scheme, verify_access_token
from teamview.models.user import User
from teamview.models.team import Team
from teamview.database import SessionLocal
from teamview.crud.user import get_user_by_username
from teamview.crud.team import get_team
from teamview.core.exceptions import TeamNotFound
from teamview.team_store import TeamStore, get_team_store

def get_db() -> Generator[Session, None, None]:
    """
    Создает и возвращает сессию базы данных, гарантирует закрытие после использования.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db)
) -> User:
    """
    Декодирует JWT-токен, получает пользователя из базы, если токен валиден.
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    payload = verify_access_token(token)
    if payload is None:
        raise credentials_exception
    username: str | None = payload.get("sub")
    if username is None:
        raise credentials_exception
    user = get_user_by_username(db, username=username)
    if user is None:
        raise credentials_exception
    return user

def get_current_active_user(
    current_user: User = Depends(get_current_user)
) -> User:
    """
    Проверяет, что пользователь активен.
    """
    if not current_user.is_active:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Inactive user")
    return current_user

def get_team_or_404(
    team_name: str,
    store: TeamStore = Depends(get_team_store),
) -> Team:
    """
    Команда по имени из URL (/teams/{team_name}/...), иначе 404.
    """
    try:
        return get_team(store, team_name)
    except TeamNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

def get_target_user_or_404_403(
    user_name: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user)
) -> User:
    """
    Получить пользователя (по username), если текущий пользователь — сам себя или суперюзер,
    иначе 404/403.
    """
    if not current_user.is_superuser and current_user.username != user_name:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized to access this user's views"
        )
    target_user = get_user_by_username(db, user_name)
    if not target_user:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found")
    return target_user
