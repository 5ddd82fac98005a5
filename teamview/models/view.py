#teamview/models/view.py
from typing import Optional, Tuple
from xml.etree import ElementTree

from pydantic import BaseModel, ConfigDict, Field

LIST_VIEW = "hudson.model.ListView"
ALL_VIEW = "hudson.model.AllView"

DEFAULT_VIEW_NAME = "Default"

class View(BaseModel):
    """
    View — определение dashboard-view. Рендеринг и фильтры остаются за Jenkins,
    здесь важны только имя и принадлежность команде.
    """
    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="Имя view (уникально в пределах команды)")
    view_type: str = Field(LIST_VIEW, description="Класс view в Jenkins")
    description: Optional[str] = Field(None, description="Описание")
    job_names: Tuple[str, ...] = Field(default_factory=tuple, description="Jobs, попадающие в view")
    owner: Optional[str] = Field(None, description="Пользователь-владелец (для личных views)")

    @property
    def is_all_view(self) -> bool:
        return self.view_type == ALL_VIEW

    def without_owner(self) -> "View":
        """Копия view без привязки к владельцу (view переходит к команде)."""
        return self.model_copy(update={"owner": None})

    def to_element(self) -> ElementTree.Element:
        element = ElementTree.Element(self.view_type)
        if self.owner is not None:
            ElementTree.SubElement(element, "owner").text = self.owner
        ElementTree.SubElement(element, "name").text = self.name
        if self.description:
            ElementTree.SubElement(element, "description").text = self.description
        jobs = ElementTree.SubElement(element, "jobNames")
        for job_name in self.job_names:
            ElementTree.SubElement(jobs, "string").text = job_name
        return element

    @classmethod
    def from_element(cls, element: ElementTree.Element) -> Optional["View"]:
        name = element.findtext("name")
        if not name:
            return None
        return cls(
            name=name,
            view_type=element.tag,
            description=element.findtext("description") or None,
            job_names=tuple(s.text or "" for s in element.iterfind("jobNames/string")),
            owner=element.findtext("owner") or None,
        )

    @classmethod
    def default(cls) -> "View":
        return cls(name=DEFAULT_VIEW_NAME, view_type=LIST_VIEW)
