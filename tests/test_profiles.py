from pathlib import Path

import pytest

from hunming.model import HunmingError
from hunming.profiles import (
    MANAGED_BLOCK_END,
    MANAGED_BLOCK_START,
    InitShell,
    InitTargets,
    backup_with_targets,
    bash_managed_block,
    insert_managed_block,
    powershell_managed_block,
    restore_with_targets,
    shell_profile_backup_path,
    write_shell_profile,
)

BASH_SCRIPT = "/tmp/hunming/generated/bash.sh"
POWERSHELL_SCRIPT = "/tmp/hunming/generated/powershell.ps1"


@pytest.fixture
def targets(tmp_path: Path) -> InitTargets:
    return InitTargets(
        bash_profile=tmp_path / ".bashrc",
        zsh_profile=tmp_path / ".zshrc",
        powershell_profile=tmp_path / "PowerShell" / "Microsoft.PowerShell_profile.ps1",
    )


def test_inserts_block_into_empty_content():
    block = bash_managed_block(BASH_SCRIPT)
    assert insert_managed_block("", block) == block


def test_appends_block_without_touching_user_content():
    original = 'export PATH="$HOME/bin:$PATH"\n'
    block = bash_managed_block(BASH_SCRIPT)

    result = insert_managed_block(original, block)

    assert result.startswith(original)
    assert MANAGED_BLOCK_START in result
    assert MANAGED_BLOCK_END in result
    assert result.endswith(block)
    assert result == original + "\n" + block


def test_replaces_existing_block():
    original = f"before\n{MANAGED_BLOCK_START}\nold\n{MANAGED_BLOCK_END}\nafter\n"
    block = powershell_managed_block(POWERSHELL_SCRIPT)

    result = insert_managed_block(original, block)

    assert result.startswith("before\n")
    assert result.endswith("after\n")
    assert block in result
    assert "old" not in result


def test_powershell_block_matches_expected_shape():
    assert powershell_managed_block(POWERSHELL_SCRIPT) == (
        "# >>> hunming init >>>\n"
        '$hunmingProfile = "/tmp/hunming/generated/powershell.ps1"\n'
        "if (Test-Path $hunmingProfile) {\n"
        "    . $hunmingProfile\n"
        "}\n"
        "# <<< hunming init <<<\n"
    )


def test_bash_block_matches_expected_shape():
    assert bash_managed_block(BASH_SCRIPT) == (
        "# >>> hunming init >>>\n"
        'if [ -f "/tmp/hunming/generated/bash.sh" ]; then\n'
        '  . "/tmp/hunming/generated/bash.sh"\n'
        "fi\n"
        "# <<< hunming init <<<\n"
    )


def test_appends_with_blank_line_when_content_lacks_newline():
    block = bash_managed_block(BASH_SCRIPT)
    assert insert_managed_block("abc", block) == "abc\n\n" + block


def test_appends_without_extra_blank_line_after_blank_line():
    block = bash_managed_block(BASH_SCRIPT)
    assert insert_managed_block("abc\n\n", block) == "abc\n\n" + block


def test_replaces_block_with_crlf_line_ending():
    original = f"a\r\n{MANAGED_BLOCK_START}\r\nold\r\n{MANAGED_BLOCK_END}\r\nb\r\n"
    block = bash_managed_block(BASH_SCRIPT)
    assert insert_managed_block(original, block) == "a\r\n" + block + "b\r\n"


def test_start_marker_without_end_marker_appends():
    original = f"{MANAGED_BLOCK_START}\n"
    block = bash_managed_block(BASH_SCRIPT)
    assert insert_managed_block(original, block) == original + "\n" + block


def test_insert_is_idempotent():
    block = bash_managed_block(BASH_SCRIPT)
    once = insert_managed_block("user\n", block)
    assert insert_managed_block(once, block) == once


def test_write_shell_profile_creates_a_backup_before_overwriting(tmp_path: Path):
    profile = tmp_path / ".bashrc"
    original = 'export PATH="$HOME/bin:$PATH"\n'
    profile.write_text(original)

    write_shell_profile(profile, bash_managed_block(BASH_SCRIPT))

    backup = tmp_path / ".bashrc.hunming.bak"
    assert backup.read_text() == original
    assert "hunming init" in profile.read_text()


def test_write_shell_profile_creates_missing_file_without_backup(tmp_path: Path):
    profile = tmp_path / "nested" / ".zshrc"
    block = bash_managed_block(BASH_SCRIPT)

    write_shell_profile(profile, block)

    assert profile.read_text() == block
    assert not (tmp_path / "nested" / ".zshrc.hunming.bak").exists()


def test_write_shell_profile_leaves_unchanged_profile_alone(tmp_path: Path):
    profile = tmp_path / ".bashrc"
    block = bash_managed_block(BASH_SCRIPT)
    profile.write_text(block)

    write_shell_profile(profile, block)

    assert profile.read_text() == block
    assert not (tmp_path / ".bashrc.hunming.bak").exists()


def test_shell_profile_backup_path_appends_suffix(tmp_path: Path):
    assert shell_profile_backup_path(tmp_path / ".zshrc") == tmp_path / ".zshrc.hunming.bak"


def test_backup_and_restore_selected_profiles(tmp_path: Path, targets: InitTargets):
    targets.bash_profile.write_text("bash before\n")
    targets.zsh_profile.write_text("zsh before\n")
    targets.powershell_profile.parent.mkdir(parents=True)
    targets.powershell_profile.write_text("powershell before\n")

    result = backup_with_targets(targets, InitShell.BASH)
    assert result.profile_paths == [tmp_path / ".bashrc.hunming.bak"]

    targets.bash_profile.write_text("bash after\n")

    restored = restore_with_targets(targets, InitShell.BASH)
    assert restored.profile_paths == [targets.bash_profile]
    assert targets.bash_profile.read_text() == "bash before\n"


def test_backup_all_shells_skips_missing_profiles(tmp_path: Path, targets: InitTargets):
    targets.zsh_profile.write_text("zsh\n")

    result = backup_with_targets(targets, None)

    assert result.profile_paths == [tmp_path / ".zshrc.hunming.bak"]


def test_backup_fails_when_no_profile_exists(targets: InitTargets):
    with pytest.raises(HunmingError, match="no shell profiles found to back up"):
        backup_with_targets(targets, None)


def test_restore_fails_when_backup_missing(targets: InitTargets):
    targets.bash_profile.write_text("bash\n")
    with pytest.raises(HunmingError, match="backup for .* is missing"):
        restore_with_targets(targets, InitShell.BASH)
    assert targets.bash_profile.read_text() == "bash\n"