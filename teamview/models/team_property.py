#teamview/models/team_property.py
"""
Расширяемые свойства команды.

Каждый вид свойства регистрируется по своему XML-тегу; у команды не больше
одного экземпляра каждого вида. Ссылка property -> team не сериализуется и
восстанавливается командой после каждой загрузки.
"""
import logging
import threading
from typing import Dict, Iterable, List, Optional, Tuple, Type
from xml.etree import ElementTree

from teamview.core.bulk import BulkChange
from teamview.core.exceptions import ViewValidationError
from teamview.models.view import View

logger = logging.getLogger("TeamView.TeamProperty")

PROPERTY_KINDS: Dict[str, Type["TeamProperty"]] = {}


class TeamProperty:
    """
    TeamProperty — базовый класс свойства команды.
    """
    tag: Optional[str] = None
    url_name: Optional[str] = None
    display_name: Optional[str] = None

    def __init__(self):
        self.team = None

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if cls.tag:
            PROPERTY_KINDS[cls.tag] = cls

    @staticmethod
    def all() -> List[Type["TeamProperty"]]:
        """Все зарегистрированные виды свойств, в порядке регистрации."""
        return list(PROPERTY_KINDS.values())

    @staticmethod
    def from_xml(element: ElementTree.Element) -> Optional["TeamProperty"]:
        kind = PROPERTY_KINDS.get(element.tag)
        if kind is None:
            logger.warning(f"Unknown team property <{element.tag}>, dropping it")
            return None
        try:
            return kind.from_element(element)
        except (ValueError, TypeError) as e:
            logger.warning(f"Failed to read team property <{element.tag}>: {e}")
            return None

    @classmethod
    def new_instance(cls, team) -> Optional["TeamProperty"]:
        """Экземпляр по умолчанию для команды, у которой свойство ещё не сохранено."""
        return cls()

    @classmethod
    def from_element(cls, element: ElementTree.Element) -> "TeamProperty":
        raise NotImplementedError

    def to_element(self) -> ElementTree.Element:
        raise NotImplementedError

    def save(self) -> None:
        if self.team is not None:
            self.team.save()


class TeamViewsProperty(TeamProperty):
    """
    TeamViewsProperty — views команды и primary view. Всегда содержит хотя бы один view.
    """
    tag = "teamviewsproperty"
    url_name = "views"
    display_name = "Views"

    def __init__(self, views: Iterable[View] = (), primary_view_name: Optional[str] = None):
        super().__init__()
        self._lock = threading.RLock()
        self.primary_view_name = primary_view_name
        self._views: Tuple[View, ...] = tuple(views)
        if not self._views:
            # keep the non-empty invariant
            self._views = (View.default(),)

    @property
    def views(self) -> Tuple[View, ...]:
        return self._views

    def get_view(self, name: str) -> Optional[View]:
        for view in self._views:
            if view.name == name:
                return view
        return None

    @property
    def primary_view(self) -> View:
        views = self._views
        if self.primary_view_name is not None:
            for view in views:
                if view.name == self.primary_view_name:
                    return view
        return views[0]

    def add_view(self, view: View) -> None:
        with self._lock:
            if self.get_view(view.name) is not None:
                raise ViewValidationError(f"A view with name {view.name} already exists")
            self._views = self._views + (view,)
        self.save()

    def import_from(self, views: Iterable[View]) -> List[View]:
        """
        Добавляет views из внешнего источника. Пропускает "all"-view и views с занятым именем.
        Владелец у импортированных views сбрасывается.
        """
        added = []
        with BulkChange(self):
            for view in views:
                if view.is_all_view:
                    continue
                if self.get_view(view.name) is not None:
                    logger.info(f"Skipping view '{view.name}', the team already has a view with that name")
                    continue
                imported = view.without_owner()
                self.add_view(imported)
                added.append(imported)
        return added

    def save(self) -> None:
        if BulkChange.contains(self):
            return
        super().save()

    def to_element(self) -> ElementTree.Element:
        element = ElementTree.Element(self.tag)
        if self.primary_view_name is not None:
            ElementTree.SubElement(element, "primaryViewName").text = self.primary_view_name
        views = ElementTree.SubElement(element, "views")
        for view in self._views:
            views.append(view.to_element())
        return element

    @classmethod
    def from_element(cls, element: ElementTree.Element) -> "TeamViewsProperty":
        views = []
        names = set()
        views_element = element.find("views")
        if views_element is not None:
            for child in views_element:
                view = View.from_element(child)
                if view is None or view.name in names:
                    continue
                names.add(view.name)
                views.append(view)
        return cls(views, primary_view_name=element.findtext("primaryViewName") or None)

    def __repr__(self):
        return f"<TeamViewsProperty(primary={self.primary_view_name!r}, views={[v.name for v in self._views]})>"
