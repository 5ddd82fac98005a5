# teamview/team_store.py

import logging
import threading
from pathlib import Path
from typing import Dict, List, Optional

from teamview.core.settings import settings
from teamview.models.team import Team

logger = logging.getLogger("TeamView.TeamStore")


class TeamStore:
    """
    Реестр команд в памяти: имя -> Team. Каждая команда лежит в своём каталоге под root_dir.

    add/remove/rename сериализуются через lock, get читает без блокировки.
    """

    def __init__(self, root_dir):
        self.root_dir = Path(root_dir)
        self.lock = threading.RLock()
        self._teams: Dict[str, Team] = {}

    def list_team_names(self) -> List[str]:
        """
        Имена каталогов под root_dir, в которых есть ровно один config.xml.
        Остальные каталоги молча пропускаются.
        """
        if not self.root_dir.is_dir():
            return []
        names = []
        for entry in sorted(self.root_dir.iterdir()):
            if not entry.is_dir():
                continue
            configs = [f for f in entry.iterdir() if f.name == Team.CONFIG_FILE_NAME and f.is_file()]
            if len(configs) == 1:
                names.append(entry.name)
        return names

    def load_all(self) -> None:
        for name in self.list_team_names():
            self.add(Team(name, root_dir=self.root_dir))
        logger.info(f"Loaded {len(self._teams)} team(s) from {self.root_dir}")

    def get(self, name: str) -> Optional[Team]:
        return self._teams.get(name)

    def add(self, team: Team) -> None:
        with self.lock:
            teams = dict(self._teams)
            teams[team.name] = team
            team.store = self
            self._teams = teams

    def remove(self, name: str) -> None:
        with self.lock:
            teams = dict(self._teams)
            teams.pop(name, None)
            self._teams = teams

    def all(self) -> List[Team]:
        return sorted(self._teams.values())

    def __contains__(self, name):
        return name in self._teams

    def __len__(self):
        return len(self._teams)


_store: Optional[TeamStore] = None
_store_lock = threading.Lock()


def init_team_store(root_dir=None) -> TeamStore:
    """Создаёт реестр и загружает с диска все команды (вызывается на старте приложения)."""
    global _store
    store = TeamStore(root_dir if root_dir is not None else settings.teams_root)
    store.load_all()
    with _store_lock:
        _store = store
    return store


def get_team_store() -> TeamStore:
    """Dependency для FastAPI: текущий реестр команд (создаётся при первом обращении)."""
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                store = TeamStore(settings.teams_root)
                store.load_all()
                _store = store
    return _store
