#teamview/api/user.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from teamview.schemas.user import UserCreate, UserRead
from teamview.schemas.view import ViewCreate, ViewRead
from teamview.crud.user import create_user
from teamview.crud.user_view import add_user_view, get_user_views
from teamview.dependencies import get_db, get_current_active_user, get_target_user_or_404_403
from teamview.models.user import User as DBUser
from teamview.core.exceptions import UserValidationError, ViewValidationError

router = APIRouter(prefix="/users", tags=["Users"])

@router.get("/me", response_model=UserRead)
def read_users_me(current_user: DBUser = Depends(get_current_active_user)):
    """
    Get current logged-in user profile.
    """
    return current_user

@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
def register_user(
    data: UserCreate,
    db: Session = Depends(get_db),
):
    """
    Register a new user.
    """
    try:
        return create_user(db, data.model_dump())
    except UserValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

@router.get("/{user_name}/views", response_model=List[ViewRead])
def list_user_views(
    target_user: DBUser = Depends(get_target_user_or_404_403),
    db: Session = Depends(get_db),
):
    """
    Personal views of a user (self or admin).
    """
    return [ViewRead.model_validate(uv.to_view()) for uv in get_user_views(db, target_user)]

@router.post("/{user_name}/views", response_model=ViewRead, status_code=status.HTTP_201_CREATED)
def create_user_view(
    data: ViewCreate,
    target_user: DBUser = Depends(get_target_user_or_404_403),
    db: Session = Depends(get_db),
):
    """
    Add a personal view (self or admin).
    """
    try:
        user_view = add_user_view(db, target_user, data.model_dump())
    except ViewValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ViewRead.model_validate(user_view.to_view())
