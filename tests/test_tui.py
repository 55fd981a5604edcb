import pytest

from hunming.config import save_config
from hunming.model import Alias, Config, HunmingError, Platform, Profile
from hunming.paths import AppPaths
from hunming.tui import HELP_TEXT, App, alias_details, build_entries


def _other_platform() -> Platform:
    return Platform.WINDOWS if Platform.current() != Platform.WINDOWS else Platform.MACOS


@pytest.fixture
def paths(tmp_path):
    return AppPaths.from_config_dir(tmp_path / "hunming")


def _save(paths, **aliases):
    save_config(paths, Config(version=1, aliases=aliases))


def test_entries_respect_profile_filter():
    aliases = {"gs": Alias(command=["git", "status"], profile=Profile.WORK)}
    config = Config(version=1, aliases=aliases)

    active = build_entries(config.aliases, Profile.WORK)
    assert active[0].profile_match
    assert active[0].is_active

    inactive = build_entries(config.aliases, Profile.PERSONAL)
    assert not inactive[0].profile_match
    assert not inactive[0].is_active


def test_entries_are_sorted_and_respect_platform():
    aliases = {
        "zz": Alias(command=["echo"], platforms=[_other_platform()]),
        "aa": Alias(command=["echo"]),
    }
    entries = build_entries(aliases, None)
    assert [entry.name for entry in entries] == ["aa", "zz"]
    assert entries[0].is_active
    assert not entries[1].platform_match
    assert entries[1].profile_match
    assert not entries[1].is_active


def test_alias_details_lists_fields():
    alias = Alias(
        description="List files",
        command=["ls", "-lah"],
        tags=["files", "list"],
        bash="ls -lah",
        powershell="Get-ChildItem -Force",
        forward_args=False,
        platforms=[Platform.LINUX],
        profile=Profile.WORK,
    )
    entry = build_entries({"ll": alias}, None)[0]
    details = dict(alias_details(entry, None))
    assert details["Name"] == "ll"
    assert details["State"] == "inactive"
    assert details["Current profile"] == "none"
    assert details["Profile rule"] == "work"
    assert details["Tags"] == "files, list"
    assert details["Command"] == "ls -lah"
    assert details["Forward args"] == "no"
    assert details["Platforms"] == "linux"
    assert details["Profile match"] == "no"
    assert details["Description"] == "List files"
    assert details["Bash"] == "ls -lah"
    assert details["PowerShell"] == "Get-ChildItem -Force"


def test_alias_details_defaults_for_minimal_alias():
    entry = build_entries({"gs": Alias(command=["git", "status"])}, None)[0]
    details = alias_details(entry, Profile.PERSONAL)
    assert [label for label, _ in details] == [
        "Name",
        "State",
        "Current profile",
        "Profile rule",
        "Tags",
        "Command",
        "Forward args",
        "Platforms",
        "Platform match",
        "Profile match",
    ]
    values = dict(details)
    assert values["State"] == "active"
    assert values["Current profile"] == "personal"
    assert values["Profile rule"] == "all"
    assert values["Tags"] == "-"
    assert values["Platforms"] == "all"
    assert values["Forward args"] == "yes"


def test_load_selects_first_entry(paths):
    _save(paths, gs=Alias(command=["git", "status"]), ll=Alias(bash="ls -lah"))
    app = App.load(paths, Profile.WORK)
    assert app.selected == 0
    assert app.selected_entry().name == "gs"
    assert app.profile == Profile.WORK
    assert app.status == HELP_TEXT


def test_load_empty_config_has_no_selection(paths):
    app = App.load(paths)
    assert app.entries == []
    assert app.selected is None
    assert app.selected_entry() is None
    assert paths.config_file.exists()


def test_navigation_wraps(paths):
    _save(
        paths,
        a=Alias(command=["echo", "a"]),
        b=Alias(command=["echo", "b"]),
        c=Alias(command=["echo", "c"]),
    )
    app = App.load(paths)
    app.previous()
    assert app.selected == 2
    app.next()
    assert app.selected == 0
    app.next()
    assert app.selected == 1
    app.previous()
    assert app.selected == 0
    app.last()
    assert app.selected == 2
    app.first()
    assert app.selected == 0


def test_navigation_on_empty_app_is_noop(paths):
    app = App.load(paths)
    app.next()
    app.previous()
    app.first()
    app.last()
    assert app.selected is None


def test_reload_keeps_selected_name(paths):
    _save(paths, gs=Alias(command=["git", "status"]), ll=Alias(bash="ls -lah"))
    app = App.load(paths)
    app.last()
    assert app.selected_entry().name == "ll"

    _save(
        paths,
        aa=Alias(command=["echo"]),
        gs=Alias(command=["git", "status"]),
        ll=Alias(bash="ls -lah"),
    )
    app.reload(paths)
    assert app.selected == 2
    assert app.selected_entry().name == "ll"
    assert app.status == f"reloaded 3 aliases from {paths.config_file}"


def test_reload_falls_back_to_first_when_selected_removed(paths):
    _save(paths, gs=Alias(command=["git", "status"]), ll=Alias(bash="ls -lah"))
    app = App.load(paths)
    app.last()
    _save(paths, gs=Alias(command=["git", "status"]))
    app.reload(paths)
    assert app.selected == 0
    assert [entry.name for entry in app.entries] == ["gs"]


def test_reload_rejects_invalid_config(paths):
    _save(paths, gs=Alias(command=["git", "status"]))
    app = App.load(paths)
    paths.config_file.write_text("version = 1\n\n[aliases.1bad]\ncommand = [\"x\"]\n")
    with pytest.raises(HunmingError, match="invalid alias name"):
        app.reload(paths)
    assert app.selected_entry().name == "gs"