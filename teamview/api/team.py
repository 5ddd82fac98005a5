#teamview/api/team.py
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.orm import Session
from typing import List, Optional
from teamview.schemas.team import (
    DescriptionSubmit,
    ImportViewsRequest,
    TeamConfigure,
    TeamCreate,
    TeamRead,
)
from teamview.schemas.view import TeamViewsRead, ViewCreate, ViewRead
from teamview.schemas.response import ValidationResult
from teamview.crud.team import (
    add_team_view,
    check_team_name,
    check_user_name,
    check_view_exists,
    configure_team,
    create_team,
    get_all_teams,
    get_team_view,
    import_views_from_user,
    update_description,
)
from teamview.core.exceptions import (
    PermissionDeniedError,
    TeamRenameError,
    TeamValidationError,
    UserNotFound,
    ViewNotFound,
    ViewValidationError,
)
from teamview.dependencies import get_db, get_current_active_user, get_team_or_404
from teamview.models.team import Team
from teamview.models.team_property import TeamViewsProperty
from teamview.models.user import User as UserModel
from teamview.team_store import TeamStore, get_team_store

router = APIRouter(prefix="/teams", tags=["Teams"])

def _views_read(views_property: TeamViewsProperty) -> TeamViewsRead:
    return TeamViewsRead(
        primary_view_name=views_property.primary_view_name,
        primary_view=ViewRead.model_validate(views_property.primary_view),
        views=[ViewRead.model_validate(v) for v in views_property.views],
    )

@router.get("/", response_model=List[TeamRead])
def list_teams(store: TeamStore = Depends(get_team_store)):
    """
    List all teams, sorted by name.
    """
    return [TeamRead.from_team(team) for team in get_all_teams(store)]

@router.get("/check-name", response_model=ValidationResult)
def check_name(
    value: Optional[str] = Query(None, description="Team name to check"),
    store: TeamStore = Depends(get_team_store),
):
    """
    Validate a new team name: not empty and not already used.
    """
    return check_team_name(store, value)

@router.post("/", response_model=TeamRead, status_code=status.HTTP_201_CREATED)
def create_team_api(
    data: TeamCreate,
    store: TeamStore = Depends(get_team_store),
    user: UserModel = Depends(get_current_active_user),
):
    """
    Create a team. The new team starts with a single "Default" view.
    """
    try:
        team = create_team(store, data.model_dump())
    except TeamValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return TeamRead.from_team(team)

@router.get("/{team_name}", response_model=TeamRead)
def read_team(team: Team = Depends(get_team_or_404)):
    return TeamRead.from_team(team)

@router.post("/{team_name}/configure", response_model=TeamRead)
def configure_team_api(
    data: TeamConfigure,
    team: Team = Depends(get_team_or_404),
    store: TeamStore = Depends(get_team_store),
    user: UserModel = Depends(get_current_active_user),
):
    """
    Rename the team, change its description and/or primary view.
    """
    try:
        team = configure_team(store, team, data.model_dump(exclude_unset=True))
    except TeamValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except ViewNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except TeamRenameError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    return TeamRead.from_team(team)

@router.post("/{team_name}/description", response_model=TeamRead)
def submit_description(
    data: DescriptionSubmit,
    team: Team = Depends(get_team_or_404),
    user: UserModel = Depends(get_current_active_user),
):
    return TeamRead.from_team(update_description(team, data.description))

@router.get("/{team_name}/check-user-name", response_model=ValidationResult)
def check_user_name_api(
    user_name: Optional[str] = Query(None, description="User whose views are to be imported"),
    team: Team = Depends(get_team_or_404),
    db: Session = Depends(get_db),
):
    return check_user_name(db, user_name)

@router.post("/{team_name}/import", response_model=TeamViewsRead)
def import_views_api(
    data: ImportViewsRequest,
    team: Team = Depends(get_team_or_404),
    db: Session = Depends(get_db),
    user: UserModel = Depends(get_current_active_user),
):
    """
    Import the personal views of a user into the team. The "all" view is skipped.
    """
    try:
        import_views_from_user(db, team, data.user_name, user)
    except UserNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PermissionDeniedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    return _views_read(team.views_property)

@router.get("/{team_name}/views", response_model=TeamViewsRead)
def list_team_views(team: Team = Depends(get_team_or_404)):
    return _views_read(team.views_property)

@router.post("/{team_name}/views", response_model=ViewRead, status_code=status.HTTP_201_CREATED)
def create_team_view(
    data: ViewCreate,
    team: Team = Depends(get_team_or_404),
    user: UserModel = Depends(get_current_active_user),
):
    try:
        view = add_team_view(team, data.model_dump())
    except ViewValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    return ViewRead.model_validate(view)

@router.get("/{team_name}/views/check-exists", response_model=ValidationResult)
def check_view_exists_api(
    value: Optional[str] = Query(None, description="View name to check"),
    exists: bool = Query(False, description="Whether the view is expected to exist"),
    team: Team = Depends(get_team_or_404),
):
    return check_view_exists(team, value, exists)

@router.get("/{team_name}/views/{view_name}", response_model=ViewRead)
def read_team_view(view_name: str, team: Team = Depends(get_team_or_404)):
    try:
        return ViewRead.model_validate(get_team_view(team, view_name))
    except ViewNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
