#teamview/api/auth.py
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session
from teamview.schemas.auth import LoginResponse
from teamview.crud.user import authenticate_user, set_last_login
from teamview.core.security import create_access_token
from teamview.dependencies import get_db
from teamview.core.settings import settings
from datetime import timedelta
import logging

router = APIRouter(prefix="/auth", tags=["Auth"])
logger = logging.getLogger("TeamView.Auth")

ACCESS_TOKEN_EXPIRE_MINUTES = settings.ACCESS_TOKEN_EXPIRE_MINUTES

@router.post("/login", response_model=LoginResponse, status_code=status.HTTP_200_OK)
def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db),
):
    """
    Логин по username + password.
    """
    user = authenticate_user(db, form_data.username, form_data.password)
    if not user or not user.is_active:
        logger.warning(f"Failed login attempt for '{form_data.username}'")
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Incorrect username or password")

    access_token, _ = create_access_token(
        data={"sub": user.username, "user_id": user.id, "roles": user.roles},
        expires_delta=timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    set_last_login(db, user.id)
    return LoginResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=ACCESS_TOKEN_EXPIRE_MINUTES * 60,
    )
