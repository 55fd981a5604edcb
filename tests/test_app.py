from pathlib import Path

import pytest

from hunming.app import main
from hunming.config import load_config, render_template
from hunming.install import show
from hunming.paths import AppPaths
from hunming.profiles import bash_managed_block


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    return tmp_path / "hunming" / "aliases.toml"


@pytest.fixture
def paths(config_file: Path) -> AppPaths:
    return AppPaths.from_config_file(config_file)


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    directory = tmp_path / "home"
    directory.mkdir()
    monkeypatch.setenv("HOME", str(directory))
    monkeypatch.setenv("USERPROFILE", str(directory))
    return directory


def run(capsys, *argv):
    code = main([str(arg) for arg in argv])
    out, err = capsys.readouterr()
    return code, out, err


def test_no_arguments_prints_help(capsys):
    code, out, err = run(capsys)

    assert code == 2
    assert "usage:" in err


def test_add_then_list(capsys, config_file, paths):
    code, _, _ = run(capsys, "--config", config_file, "add", "gs", "git", "status", "--short")
    assert code == 0
    assert paths.bash_script.read_text() == 'gs() {\n  git status --short "$@"\n}\n'

    code, out, _ = run(capsys, "--config", config_file, "list")
    assert code == 0
    assert out.startswith("gs")
    assert "git status --short" in out


def test_add_with_tags_and_profile(capsys, config_file, paths):
    code, _, _ = run(
        capsys, "--config", config_file, "add", "--profile", "work", "--tag", "git",
        "gw", "git", "log",
    )

    assert code == 0
    alias = load_config(paths).aliases["gw"]
    assert alias.command == ["git", "log"]
    assert alias.tags == ["git"]
    assert alias.profile is not None and alias.profile.value == "work"


def test_show_prints_definition(capsys, config_file, paths):
    run(capsys, "--config", config_file, "add", "--tag", "git", "gs", "git", "status")

    code, out, _ = run(capsys, "--config", config_file, "show", "gs")

    assert code == 0
    assert out == show(paths, "gs")


def test_apply_prints_generated_paths(capsys, config_file, paths):
    code, out, _ = run(capsys, "--config", config_file, "apply")

    assert code == 0
    assert out.splitlines() == [
        str(paths.bash_script),
        str(paths.zsh_script),
        str(paths.powershell_script),
    ]


def test_apply_single_shell(capsys, config_file, paths):
    code, out, _ = run(capsys, "--config", config_file, "apply", "--shell", "zsh")

    assert code == 0
    assert out.splitlines() == [str(paths.zsh_script)]


def test_global_profile_filters_rendered_aliases(capsys, config_file, paths):
    run(capsys, "--config", config_file, "add", "--profile", "work", "gw", "echo", "work")

    run(capsys, "--config", config_file, "--profile", "personal", "apply")
    assert paths.bash_script.read_text() == ""

    run(capsys, "--config", config_file, "--profile", "work", "apply")
    assert paths.bash_script.read_text() == 'gw() {\n  echo work "$@"\n}\n'


def test_remove_missing_alias_fails(capsys, config_file):
    code, _, err = run(capsys, "--config", config_file, "remove", "gs")

    assert code == 1
    assert "does not exist" in err
    assert err.startswith("Error: ")


def test_add_existing_alias_requires_force(capsys, config_file, paths):
    run(capsys, "--config", config_file, "add", "gs", "git", "status")
    code, _, err = run(capsys, "--config", config_file, "add", "gs", "git", "log")

    assert code == 1
    assert "use --force" in err
    assert load_config(paths).aliases["gs"].command == ["git", "status"]


def test_template_to_stdout(capsys):
    code, out, _ = run(capsys, "template")

    assert code == 0
    assert out == render_template()


def test_template_to_file(capsys, tmp_path):
    output = tmp_path / "nested" / "aliases.toml"

    code, out, _ = run(capsys, "template", "--output", output)

    assert code == 0
    assert output.read_text() == render_template()
    assert out.strip() == str(output)


def test_completions_command(capsys):
    code, out, _ = run(capsys, "completions", "powershell")

    assert code == 0
    assert "Register-ArgumentCompleter" in out


def test_init_writes_bash_profile(capsys, config_file, paths, home):
    code, _, _ = run(capsys, "--config", config_file, "init", "--shell", "bash")

    assert code == 0
    assert (home / ".bashrc").read_text() == bash_managed_block(paths.bash_script)
    assert not (home / ".zshrc").exists()


def test_backup_and_restore(capsys, config_file, home):
    bashrc = home / ".bashrc"
    bashrc.write_text("bash before\n")

    code, out, _ = run(capsys, "--config", config_file, "backup", "--shell", "bash")
    assert code == 0
    assert out.strip() == str(home / ".bashrc.hunming.bak")

    bashrc.write_text("bash after\n")
    code, out, _ = run(capsys, "--config", config_file, "restore", "--shell", "bash")
    assert code == 0
    assert out.strip() == str(bashrc)
    assert bashrc.read_text() == "bash before\n"


def test_doctor_fix(capsys, config_file, paths, home):
    code, out, _ = run(capsys, "--config", config_file, "doctor", "--fix")

    assert code == 0
    assert "[✓] config file exists" in out
    assert paths.bash_script.exists()


def test_edit_with_failing_editor(capsys, config_file, monkeypatch, tmp_path):
    editor = tmp_path / "no-such-editor"
    monkeypatch.setenv("VISUAL", str(editor))

    code, _, err = run(capsys, "--config", config_file, "edit")

    assert code == 1
    assert "failed to launch editor" in err