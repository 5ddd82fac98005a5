#teamview/crud/user.py
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from datetime import datetime, timezone
from typing import Optional
import logging

from teamview.models.user import User
from teamview.models.user_view import UserView
from teamview.models.view import ALL_VIEW
from teamview.core.exceptions import UserValidationError
from teamview.core.security import get_password_hash, verify_password

logger = logging.getLogger("TeamView.Users")

ALL_VIEW_NAME = "all"

def create_user(db: Session, data: dict) -> User:
    """
    Создать пользователя. Как и в Jenkins, у нового пользователя сразу есть личный view "all".
    """
    username = data["username"].strip()
    if get_user_by_username(db, username):
        raise UserValidationError(f"User '{username}' already exists.")
    user = User(
        username=username,
        email=data["email"],
        full_name=data.get("full_name"),
        password_hash=get_password_hash(data["password"]),
        is_active=data.get("is_active", True),
        is_superuser=data.get("is_superuser", False),
        roles=data.get("roles") or [],
    )
    user.views.append(UserView(name=ALL_VIEW_NAME, view_type=ALL_VIEW, position=0))
    db.add(user)
    try:
        db.commit()
        db.refresh(user)
        logger.info(f"Created user '{user.username}' (ID: {user.id})")
        return user
    except IntegrityError as e:
        db.rollback()
        logger.error(f"Integrity error while creating user: {e}")
        raise UserValidationError("User with this username or email already exists.")

def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()

def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()

def user_exists(db: Session, username: Optional[str]) -> bool:
    """
    Есть ли пользователь с таким username.
    """
    if not username:
        return False
    return get_user_by_username(db, username) is not None

def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
    user = get_user_by_username(db, username)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user

def set_last_login(db: Session, user_id: int) -> None:
    user = get_user(db, user_id)
    if not user:
        return
    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
