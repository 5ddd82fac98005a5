import logging
import pytest
from xml.etree import ElementTree

from teamview.core.bulk import BulkChange
from teamview.core.exceptions import TeamValidationError
from teamview.models.team import Team
from teamview.models.team_property import TeamViewsProperty
from teamview.models.view import View, DEFAULT_VIEW_NAME
from teamview.team_store import TeamStore

# --- Construction / defaults ---

def test_new_team_has_single_default_view(teams_root):
    team = Team("team1", "desc", root_dir=teams_root)

    assert team.name == "team1"
    assert team.description == "desc"
    views = team.views_property
    assert views is not None
    assert [v.name for v in views.views] == [DEFAULT_VIEW_NAME]
    assert views.primary_view.name == DEFAULT_VIEW_NAME
    assert views.team is team

def test_team_with_empty_name_rejected(teams_root):
    with pytest.raises(TeamValidationError):
        Team("", root_dir=teams_root)

def test_team_url(teams_root):
    assert Team("team1", root_dir=teams_root).url == "teams/team1/"

def test_team_equality_and_ordering(teams_root):
    a = Team("alpha", root_dir=teams_root)
    b = Team("beta", "other description", root_dir=teams_root)

    assert a == Team("alpha", "different", root_dir=teams_root)
    assert a != b
    assert sorted([b, a]) == [a, b]
    assert len({a, Team("alpha", root_dir=teams_root)}) == 1

# --- Persistence ---

def test_save_writes_config_xml(teams_root):
    team = Team("team1", "desc", root_dir=teams_root)
    team.save()

    config = teams_root / "team1" / "config.xml"
    assert config.is_file()
    root = ElementTree.parse(config).getroot()
    assert root.tag == "team"
    assert root.findtext("name") == "team1"
    assert root.findtext("description") == "desc"
    views = root.findall("properties/teamviewsproperty/views/*")
    assert [v.findtext("name") for v in views] == [DEFAULT_VIEW_NAME]

def test_round_trip_primary_view_and_views(teams_root):
    team = Team("team1", "desc", root_dir=teams_root)
    team.views_property.add_view(View(name="view2"))
    team.views_property.primary_view_name = "view2"
    team.save()

    reloaded = Team("team1", root_dir=teams_root)

    assert reloaded.name == "team1"
    assert reloaded.description == "desc"
    views = reloaded.views_property
    assert views.primary_view_name == "view2"
    assert views.primary_view.name == "view2"
    assert {v.name for v in views.views} == {DEFAULT_VIEW_NAME, "view2"}

def test_round_trip_keeps_view_definition(teams_root):
    team = Team("team1", root_dir=teams_root)
    team.views_property.add_view(View(name="nightly", description="Nightly jobs", job_names=("a", "b")))

    view = Team("team1", root_dir=teams_root).views_property.get_view("nightly")

    assert view.description == "Nightly jobs"
    assert view.job_names == ("a", "b")
    assert view.owner is None

def test_load_corrupt_config_falls_back_to_defaults(teams_root, caplog):
    (teams_root / "broken").mkdir()
    (teams_root / "broken" / "config.xml").write_text("<team><name>broken", encoding="utf-8")

    with caplog.at_level(logging.ERROR, logger="TeamView.Team"):
        team = Team("broken", "kept", root_dir=teams_root)

    assert team.description == "kept"
    assert [v.name for v in team.views_property.views] == [DEFAULT_VIEW_NAME]
    assert any("Failed to load" in r.getMessage() for r in caplog.records)

def test_load_drops_unknown_property_and_fills_defaults(teams_root):
    (teams_root / "team1").mkdir()
    (teams_root / "team1" / "config.xml").write_text(
        "<?xml version='1.0' encoding='UTF-8'?>"
        "<team><name>team1</name><description>d</description>"
        "<properties><some.removed.Property><x>1</x></some.removed.Property></properties></team>",
        encoding="utf-8",
    )

    team = Team("team1", root_dir=teams_root)

    assert len(team.properties) == 1
    assert isinstance(team.properties[0], TeamViewsProperty)
    assert team.properties[0].team is team

def test_load_empty_views_restores_default(teams_root):
    (teams_root / "team1").mkdir()
    (teams_root / "team1" / "config.xml").write_text(
        "<team><name>team1</name><properties>"
        "<teamviewsproperty><primaryViewName>gone</primaryViewName><views/></teamviewsproperty>"
        "</properties></team>",
        encoding="utf-8",
    )

    views = Team("team1", root_dir=teams_root).views_property

    assert [v.name for v in views.views] == [DEFAULT_VIEW_NAME]
    assert views.primary_view.name == DEFAULT_VIEW_NAME

def test_add_property_replaces_same_kind(teams_root):
    team = Team("team1", root_dir=teams_root)
    replacement = TeamViewsProperty([View(name="only")], primary_view_name="only")

    team.add_property(replacement)

    assert team.properties == (replacement,)
    assert replacement.team is team
    assert Team("team1", root_dir=teams_root).views_property.primary_view_name == "only"

def test_bulk_change_suppresses_save_until_commit(teams_root):
    team = Team("team1", root_dir=teams_root)
    config = teams_root / "team1" / "config.xml"

    with BulkChange(team):
        team.set_description("bulk")
        assert not config.exists()
    assert config.exists()
    assert Team("team1", root_dir=teams_root).description == "bulk"

def test_bulk_change_abort_on_error(teams_root):
    team = Team("team1", root_dir=teams_root)

    with pytest.raises(RuntimeError):
        with BulkChange(team):
            team.set_description("lost")
            raise RuntimeError("boom")
    assert not (teams_root / "team1" / "config.xml").exists()

# --- Rename ---

def test_rename_moves_directory_and_store_entry(teams_root):
    store = TeamStore(teams_root)
    team = Team("team1", "desc", root_dir=teams_root)
    store.add(team)
    team.save()

    assert team.rename("team2") is True

    assert team.name == "team2"
    assert store.get("team1") is None
    assert store.get("team2") is team
    assert not (teams_root / "team1").exists()
    assert (teams_root / "team2" / "config.xml").is_file()

def test_rename_to_existing_name_rejected(teams_root):
    store = TeamStore(teams_root)
    team = Team("team1", root_dir=teams_root)
    store.add(team)
    store.add(Team("team2", root_dir=teams_root))

    with pytest.raises(TeamValidationError, match="already exists"):
        team.rename("team2")
    assert team.name == "team1"
    assert store.get("team1") is team

def test_rename_unsaved_team_creates_directory(teams_root):
    store = TeamStore(teams_root)
    team = Team("team1", root_dir=teams_root)
    store.add(team)

    assert team.rename("fresh") is True
    assert (teams_root / "fresh").is_dir()

def test_rename_failure_keeps_old_name(teams_root, caplog):
    store = TeamStore(teams_root)
    team = Team("team1", root_dir=teams_root)
    store.add(team)
    team.save()
    # a plain file where the new directory should go
    (teams_root / "blocked").write_text("not a directory", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="TeamView.Team"):
        assert team.rename("blocked") is False

    assert team.name == "team1"
    assert store.get("team1") is team
    assert store.get("blocked") is None
    assert any("could not be renamed" in r.getMessage() for r in caplog.records)
