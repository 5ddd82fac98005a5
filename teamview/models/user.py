#teamview/models/user.py
from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, JSON, func
)
from sqlalchemy.orm import relationship
from teamview.models.base import Base

class User(Base):
    """
    User — аккаунт пользователя. Владеет личными views, которые можно импортировать в команду.
    """
    __tablename__ = "users"

    id: int = Column(Integer, primary_key=True, index=True)
    username: str = Column(String(50), unique=True, nullable=False, index=True, doc="Уникальный username (id в Jenkins)")
    email: str = Column(String(255), unique=True, nullable=False, index=True, doc="Email")
    full_name: str = Column(String(128), nullable=True, doc="Полное имя")
    password_hash: str = Column(String(256), nullable=False, doc="Хэш пароля (никогда не хранить сырой пароль!)")
    is_active: bool = Column(Boolean, default=True, nullable=False, doc="Аккаунт активен")
    is_superuser: bool = Column(Boolean, default=False, nullable=False, doc="Является ли суперюзером")
    roles: list = Column(JSON, default=lambda: [], nullable=False, doc="Список ролей (['developer', 'manager', ...])")
    created_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, doc="Дата создания")
    updated_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False, doc="Дата обновления")
    last_login_at: datetime = Column(DateTime(timezone=True), nullable=True, doc="Последний вход")

    # --- Связи ---
    views = relationship(
        "UserView",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="UserView.position",
    )

    def __repr__(self):
        return (
            f"<User(id={self.id}, username='{self.username}', email='{self.email}', roles={self.roles})>"
        )
