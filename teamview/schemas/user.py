#teamview/schemas/user.py
from pydantic import BaseModel, Field, EmailStr, constr
from typing import Optional, List
from datetime import datetime

class UserBase(BaseModel):
    """
    UserBase — базовая схема пользователя (используется для create/read).
    """
    username: constr(min_length=1, max_length=50) = Field(..., examples=["bob"], description="Уникальный username")
    email: EmailStr = Field(..., examples=["bob@example.com"], description="Email пользователя")
    full_name: Optional[str] = Field(None, examples=["Bob Builder"], description="Полное имя")
    is_active: bool = Field(True, description="Пользователь активен")
    is_superuser: bool = Field(False, description="Является суперюзером (админ)")
    roles: List[str] = Field(default_factory=list, description="Роли пользователя")

class UserCreate(UserBase):
    """
    UserCreate — создание пользователя (пароль обязателен).
    """
    password: constr(min_length=8) = Field(..., examples=["StrongPassw0rd!"], description="Пароль пользователя")

class UserRead(UserBase):
    """
    UserRead — схема для выдачи пользователя (response).
    """
    id: int
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
