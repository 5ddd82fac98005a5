#teamview/crud/user_view.py
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from typing import List, Optional
import logging

from teamview.models.user import User
from teamview.models.user_view import UserView
from teamview.models.view import View, LIST_VIEW
from teamview.core.exceptions import PermissionDeniedError, ViewValidationError
from teamview.crud.user import get_user_by_username

logger = logging.getLogger("TeamView.UserViews")

def check_views_read_permission(user_name: str, current_user: User) -> None:
    """
    Читать личные views может сам пользователь или суперюзер.
    """
    if current_user.is_superuser or current_user.username == user_name:
        return
    logger.warning(f"User '{current_user.username}' is not allowed to read the views of '{user_name}'")
    raise PermissionDeniedError(f"Not authorized to read the views of user {user_name}")

def get_user_views(db: Session, user: User) -> List[UserView]:
    return db.query(UserView).filter(UserView.user_id == user.id).order_by(UserView.position, UserView.id).all()

def add_user_view(db: Session, user: User, data: dict) -> UserView:
    """
    Добавить личный view пользователю (имя уникально в пределах пользователя).
    """
    name = (data.get("name") or "").strip()
    if not name:
        raise ViewValidationError("The view name cannot be empty")
    existing = db.query(UserView).filter(UserView.user_id == user.id, UserView.name == name).first()
    if existing:
        raise ViewValidationError(f"A view with name {name} already exists")
    position = db.query(UserView).filter(UserView.user_id == user.id).count()
    user_view = UserView(
        user_id=user.id,
        name=name,
        view_type=data.get("view_type") or LIST_VIEW,
        description=data.get("description"),
        job_names=list(data.get("job_names") or []),
        position=position,
    )
    db.add(user_view)
    try:
        db.commit()
        db.refresh(user_view)
        logger.info(f"Added view '{name}' to user '{user.username}'")
        return user_view
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Integrity error while adding view to user '{user.username}': {e}")
        raise ViewValidationError(f"A view with name {name} already exists")

def fetch_user_views(db: Session, user_name: str, current_user: User) -> Optional[List[View]]:
    """
    Личные views пользователя для импорта в команду, без привязки к владельцу.

    PermissionDeniedError — нет прав на чтение; None — пользователя нет.
    """
    check_views_read_permission(user_name, current_user)
    user = get_user_by_username(db, user_name)
    if user is None:
        return None
    return [uv.to_view().without_owner() for uv in get_user_views(db, user)]
