#teamview/crud/team.py
from sqlalchemy.orm import Session
from typing import List, Optional
import logging

from teamview.core.bulk import BulkChange
from teamview.core.exceptions import (
    TeamNotFound,
    TeamRenameError,
    TeamValidationError,
    UserNotFound,
    ViewNotFound,
    ViewValidationError,
)
from teamview.crud.user import user_exists
from teamview.crud.user_view import fetch_user_views
from teamview.models.team import Team
from teamview.models.user import User
from teamview.models.view import View, LIST_VIEW
from teamview.schemas.response import ValidationResult
from teamview.team_store import TeamStore

logger = logging.getLogger("TeamView.Team")

# one path segment on common filesystems
MAX_TEAM_NAME_BYTES = 255

def _validate_team_name(store: TeamStore, name: Optional[str]) -> str:
    name = (name or "").strip()
    if not name:
        raise TeamValidationError("The team name cannot be empty")
    if "/" in name or "\\" in name or "\0" in name or name in (".", ".."):
        raise TeamValidationError(f"Invalid team name: {name}")
    if len(name.encode("utf-8")) > MAX_TEAM_NAME_BYTES:
        raise TeamValidationError(f"The team name cannot be longer than {MAX_TEAM_NAME_BYTES} bytes")
    if store.get(name) is not None:
        raise TeamValidationError(f"A team with name: {name} already exists!")
    return name

def check_team_name(store: TeamStore, value: Optional[str]) -> ValidationResult:
    """
    Проверка имени команды для формы: не пустое и не занятое.
    """
    if not value:
        return ValidationResult.error("Please enter a name!")
    try:
        _validate_team_name(store, value)
    except TeamValidationError as e:
        return ValidationResult.error(str(e))
    return ValidationResult.ok()

def create_team(store: TeamStore, data: dict) -> Team:
    """
    Создать новую команду с уникальным именем и сразу сохранить на диск.
    """
    with store.lock:
        name = _validate_team_name(store, data.get("name"))
        try:
            team = Team(name, data.get("description") or "", root_dir=store.root_dir)
            store.add(team)
            team.save()
        except (OSError, ValueError) as e:
            store.remove(name)
            logger.warning(f"Failed to create team '{name}': {e}")
            raise TeamValidationError(f"Invalid team name: {name}") from e
    logger.info(f"Created team '{team.name}'")
    return team

def get_team(store: TeamStore, name: str) -> Team:
    team = store.get(name)
    if team is None:
        raise TeamNotFound(f"Team {name} does not exist.")
    return team

def get_all_teams(store: TeamStore) -> List[Team]:
    """
    Все команды, по имени.
    """
    return store.all()

def configure_team(store: TeamStore, team: Team, data: dict) -> Team:
    """
    Переименование, описание и primary view за одно сохранение.

    Ошибка переименования на диске поднимается как TeamRenameError, остальные поля
    в этом случае не меняются.
    """
    primary_view_name = data.get("primary_view_name") or None
    views_property = team.views_property
    if primary_view_name and views_property is not None and views_property.get_view(primary_view_name) is None:
        raise ViewNotFound(f"View {primary_view_name} does not exist.")

    new_name = data.get("name")
    if new_name is not None and new_name.strip() != team.name:
        new_name = _validate_team_name(store, new_name)
        if not team.rename(new_name):
            raise TeamRenameError(f"The team with name {team.name} could not be renamed")

    with BulkChange(team):
        if "description" in data:
            team.set_description(data["description"])
        if "primary_view_name" in data and views_property is not None:
            # an empty value clears the primary view
            views_property.primary_view_name = primary_view_name
    logger.info(f"Configured team '{team.name}'")
    return team

def update_description(team: Team, description: Optional[str]) -> Team:
    team.set_description(description)
    logger.info(f"Updated description of team '{team.name}'")
    return team

def check_user_name(db: Session, user_name: Optional[str]) -> ValidationResult:
    """
    Проверка для формы импорта: существует ли пользователь.
    """
    if user_exists(db, user_name):
        return ValidationResult.ok()
    return ValidationResult.error(f"User {user_name} does not exist.")

def import_views_from_user(db: Session, team: Team, user_name: str, current_user: User) -> List[View]:
    """
    Импортирует личные views пользователя в команду. View "all" пропускается.
    """
    if not user_exists(db, user_name):
        raise UserNotFound(f"User {user_name} does not exist.")
    views = fetch_user_views(db, user_name, current_user)
    views_property = team.views_property
    if views is None or views_property is None:
        return []
    added = views_property.import_from(views)
    logger.info(f"Imported {len(added)} view(s) from user '{user_name}' into team '{team.name}'")
    return added

def add_team_view(team: Team, data: dict) -> View:
    name = (data.get("name") or "").strip()
    if not name:
        raise ViewValidationError("The view name cannot be empty")
    view = View(
        name=name,
        view_type=data.get("view_type") or LIST_VIEW,
        description=data.get("description"),
        job_names=tuple(data.get("job_names") or ()),
    )
    team.views_property.add_view(view)
    logger.info(f"Added view '{view.name}' to team '{team.name}'")
    return view

def get_team_view(team: Team, view_name: str) -> View:
    view = team.views_property.get_view(view_name)
    if view is None:
        raise ViewNotFound(f"View {view_name} does not exist.")
    return view

def check_view_exists(team: Team, value: Optional[str], exists: bool) -> ValidationResult:
    """
    exists=True: view должен существовать; exists=False: имя должно быть свободно.
    """
    value = (value or "").strip()
    if not value:
        return ValidationResult.ok()
    found = team.views_property.get_view(value) is not None
    if exists and not found:
        return ValidationResult.error("A view with this name does not exist")
    if not exists and found:
        return ValidationResult.error("A view with this name already exists")
    return ValidationResult.ok()
