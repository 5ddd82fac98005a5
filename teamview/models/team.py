#teamview/models/team.py
import functools
import logging
import threading
from contextlib import nullcontext
from pathlib import Path
from typing import Optional, Tuple, Type, TypeVar
from xml.etree import ElementTree

from teamview.core.bulk import BulkChange
from teamview.core.exceptions import PersistenceError, TeamValidationError
from teamview.core.settings import settings
from teamview.core.xml_file import XmlFile
from teamview.models.team_property import TeamProperty, TeamViewsProperty

logger = logging.getLogger("TeamView.Team")

P = TypeVar("P", bound=TeamProperty)

TEAMS_URL_NAME = "teams"


@functools.total_ordering
class Team:
    """
    Team — именованная группа views. Состояние хранится в <root_dir>/<name>/config.xml.

    Команды равны, если равны их имена, и сортируются по имени.
    """
    CONFIG_FILE_NAME = "config.xml"

    def __init__(self, name: str, description: str = "", root_dir=None):
        if not name:
            raise TeamValidationError("The team name cannot be empty")
        self._lock = threading.RLock()
        self.name = name
        self.description = description or ""
        self.root_dir = Path(root_dir) if root_dir is not None else settings.teams_root
        self.store = None
        self._properties: Tuple[TeamProperty, ...] = ()
        self.load()

    @property
    def url(self) -> str:
        return f"{TEAMS_URL_NAME}/{self.name}/"

    @property
    def config_file(self) -> XmlFile:
        return XmlFile(self.root_dir / self.name / self.CONFIG_FILE_NAME)

    @property
    def properties(self) -> Tuple[TeamProperty, ...]:
        return self._properties

    @property
    def views_property(self) -> Optional[TeamViewsProperty]:
        return self.get_property(TeamViewsProperty)

    def get_property(self, kind: Type[P]) -> Optional[P]:
        for p in self._properties:
            if isinstance(p, kind):
                return p
        return None

    def load(self) -> None:
        """
        Загружает описание и свойства с диска, если файл есть.
        Битый файл логируется, команда остаётся со значениями по умолчанию.
        """
        with self._lock:
            properties = []
            config = self.config_file
            if config.exists():
                try:
                    root = config.read()
                except PersistenceError:
                    logger.exception(f"Failed to load {config.path}")
                else:
                    self.description = root.findtext("description") or ""
                    properties_element = root.find("properties")
                    if properties_element is not None:
                        for element in properties_element:
                            p = TeamProperty.from_xml(element)
                            if p is not None:
                                properties.append(p)

            # defaults go in after loading so that newly registered kinds show up
            for kind in TeamProperty.all():
                if not any(isinstance(p, kind) for p in properties):
                    p = kind.new_instance(self)
                    if p is not None:
                        properties.append(p)
            for p in properties:
                p.team = self
            self._properties = tuple(properties)

    def save(self) -> None:
        with self._lock:
            if BulkChange.contains(self):
                return
            self.config_file.write(self.to_element())
            logger.debug(f"Saved team '{self.name}'")

    def add_property(self, p: TeamProperty) -> None:
        """Заменяет свойство того же вида и сохраняет команду."""
        with self._lock:
            properties = [old for old in self._properties if not isinstance(old, type(p))]
            properties.append(p)
            p.team = self
            self._properties = tuple(properties)
            self.save()

    def set_description(self, description: Optional[str]) -> None:
        with self._lock:
            self.description = description or ""
            self.save()

    def rename(self, new_name: str) -> bool:
        """
        Переименовывает команду и её каталог на диске.

        Возвращает False (и пишет warning), если каталог перенести не удалось;
        имя команды при этом не меняется.
        """
        if not new_name:
            raise TeamValidationError("The team name cannot be empty")
        store = self.store
        with (store.lock if store is not None else nullcontext()), self._lock:
            if new_name == self.name:
                return True
            if store is not None and store.get(new_name) is not None:
                raise TeamValidationError("A team with that name already exists!")
            if not self._rename_on_disk(new_name):
                logger.warning(f"The team with name {self.name} could not be renamed")
                return False
            old_name = self.name
            if store is not None:
                store.remove(old_name)
            self.name = new_name
            if store is not None:
                store.add(self)
            logger.info(f"Renamed team '{old_name}' to '{new_name}'")
            return True

    def _rename_on_disk(self, to: str) -> bool:
        team_directory = self.root_dir / self.name
        new_team_directory = self.root_dir / to
        try:
            if team_directory.is_dir():
                team_directory.rename(new_team_directory)
            else:
                new_team_directory.mkdir(parents=True)
        except OSError as e:
            logger.warning(f"Failed to move {team_directory} to {new_team_directory}: {e}")
            return False
        return True

    def to_element(self) -> ElementTree.Element:
        root = ElementTree.Element("team")
        ElementTree.SubElement(root, "name").text = self.name
        ElementTree.SubElement(root, "description").text = self.description
        properties = ElementTree.SubElement(root, "properties")
        for p in self._properties:
            properties.append(p.to_element())
        return root

    def __eq__(self, other):
        if not isinstance(other, Team):
            return NotImplemented
        return self.name == other.name

    def __lt__(self, other):
        if not isinstance(other, Team):
            return NotImplemented
        return self.name < other.name

    def __hash__(self):
        return hash(self.name)

    def __repr__(self):
        return f"<Team(name='{self.name}')>"
