#teamview/models/user_view.py
from datetime import datetime
from sqlalchemy import (
    Column, Integer, String, DateTime, JSON, ForeignKey, UniqueConstraint, func
)
from sqlalchemy.orm import relationship
from teamview.models.base import Base
from teamview.models.view import View, LIST_VIEW

class UserView(Base):
    """
    UserView — личный view пользователя ("My Views"). Источник для импорта views в команду.
    """
    __tablename__ = "user_views"

    id: int = Column(Integer, primary_key=True, index=True)
    user_id: int = Column(Integer, ForeignKey("users.id", ondelete='CASCADE'), nullable=False, index=True, doc="ID владельца")
    name: str = Column(String(128), nullable=False, doc="Имя view")
    view_type: str = Column(String(128), nullable=False, default=LIST_VIEW, doc="Тип view (класс Jenkins)")
    description: str = Column(String(512), nullable=True, doc="Описание")
    job_names: list = Column(JSON, default=lambda: [], nullable=False, doc="Имена jobs в view")
    position: int = Column(Integer, default=0, nullable=False, doc="Порядок отображения")
    created_at: datetime = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, doc="Дата создания")

    user = relationship("User", back_populates="views")

    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_user_views_user_id_name"),
    )

    def to_view(self) -> View:
        return View(
            name=self.name,
            view_type=self.view_type,
            description=self.description,
            job_names=self.job_names or [],
            owner=self.user.username if self.user else None,
        )

    def __repr__(self):
        return f"<UserView(id={self.id}, name='{self.name}', user_id={self.user_id})>"
