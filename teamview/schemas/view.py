#teamview/schemas/view.py
from pydantic import BaseModel, Field
from typing import List, Optional
from teamview.models.view import LIST_VIEW

class ViewCreate(BaseModel):
    """
    ViewCreate — создание view (в команде или в личных views пользователя).
    """
    name: str = Field(..., min_length=1, examples=["Nightly"], description="Имя view")
    view_type: str = Field(LIST_VIEW, description="Класс view в Jenkins")
    description: Optional[str] = Field(None, description="Описание")
    job_names: List[str] = Field(default_factory=list, examples=[["build-main", "build-docs"]], description="Jobs в view")

class ViewRead(BaseModel):
    """
    ViewRead — view в ответе API.
    """
    name: str
    view_type: str
    description: Optional[str] = None
    job_names: List[str] = Field(default_factory=list)
    owner: Optional[str] = None

    class Config:
        from_attributes = True

class TeamViewsRead(BaseModel):
    """
    TeamViewsRead — все views команды и primary view.
    """
    primary_view_name: Optional[str] = None
    primary_view: ViewRead
    views: List[ViewRead]
