#teamview/schemas/team.py
from pydantic import BaseModel, Field
from typing import List, Optional
from teamview.schemas.view import ViewRead

class TeamBase(BaseModel):
    """
    TeamBase — базовая схема для команды.
    """
    name: str = Field(..., examples=["team1"], description="Название команды (оно же имя каталога)")
    description: Optional[str] = Field("", examples=["Platform team"], description="Описание команды")

class TeamCreate(TeamBase):
    """
    TeamCreate — создание новой команды.
    """
    pass

class TeamConfigure(BaseModel):
    """
    TeamConfigure — настройка команды: переименование, описание, primary view (все поля опциональны).
    """
    name: Optional[str] = None
    description: Optional[str] = None
    primary_view_name: Optional[str] = None

class DescriptionSubmit(BaseModel):
    """
    DescriptionSubmit — новое описание команды.
    """
    description: Optional[str] = Field("", description="Описание команды")

class ImportViewsRequest(BaseModel):
    """
    ImportViewsRequest — импорт личных views пользователя в команду.
    """
    user_name: str = Field(..., min_length=1, examples=["bob"], description="Пользователь, чьи views импортируются")

class TeamRead(TeamBase):
    """
    TeamRead — схема для выдачи команды (response).
    """
    url: str
    primary_view_name: Optional[str] = None
    views: List[ViewRead] = Field(default_factory=list)

    @classmethod
    def from_team(cls, team) -> "TeamRead":
        views_property = team.views_property
        return cls(
            name=team.name,
            description=team.description,
            url=team.url,
            primary_view_name=views_property.primary_view_name if views_property else None,
            views=[ViewRead.model_validate(v) for v in views_property.views] if views_property else [],
        )
