"""Shell profile files: the managed block that loads generated scripts, and backups."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from hunming.fsutil import atomic_write
from hunming.model import HunmingError
from hunming.paths import AppPaths

MANAGED_BLOCK_START = "# >>> hunming init >>>"
MANAGED_BLOCK_END = "# <<< hunming init <<<"
BACKUP_SUFFIX = ".hunming.bak"
POWERSHELL_PROFILE_NAME = "Microsoft.PowerShell_profile.ps1"


class InitShell(StrEnum):
    BASH = "bash"
    ZSH = "zsh"
    POWERSHELL = "powershell"


@dataclass(frozen=True)
class InitTargets:
    """Shell profiles that `init`, `backup` and `restore` work on."""

    bash_profile: Path
    zsh_profile: Path
    powershell_profile: Path


@dataclass(frozen=True)
class DoctorTargets:
    """Shell profiles that `doctor` inspects."""

    bash_rc_profile: Path
    bash_login_profile: Path
    zsh_profile: Path
    powershell_profile: Path


@dataclass(frozen=True)
class ProfileResult:
    profile_paths: list[Path] = field(default_factory=list)


def bash_managed_block(script_path: str | os.PathLike[str]) -> str:
    """Block for bash or zsh profiles that sources the generated script."""
    script = os.fspath(script_path)
    return (
        f"{MANAGED_BLOCK_START}\n"
        f'if [ -f "{script}" ]; then\n'
        f'  . "{script}"\n'
        "fi\n"
        f"{MANAGED_BLOCK_END}\n"
    )


def powershell_managed_block(script_path: str | os.PathLike[str]) -> str:
    """Block for a PowerShell profile that dot-sources the generated script."""
    script = os.fspath(script_path)
    return (
        f"{MANAGED_BLOCK_START}\n"
        f'$hunmingProfile = "{script}"\n'
        "if (Test-Path $hunmingProfile) {\n"
        "    . $hunmingProfile\n"
        "}\n"
        f"{MANAGED_BLOCK_END}\n"
    )


def _managed_block_span(content: str) -> tuple[int, int] | None:
    start = content.find(MANAGED_BLOCK_START)
    if start < 0:
        return None
    end_marker = content.find(MANAGED_BLOCK_END, start)
    if end_marker < 0:
        return None

    end = end_marker + len(MANAGED_BLOCK_END)
    if content.startswith("\r\n", end):
        end += 2
    elif content.startswith("\n", end):
        end += 1
    return start, end


def insert_managed_block(existing: str, block: str) -> str:
    """Replace the managed block in ``existing``, or append it after a blank line."""
    span = _managed_block_span(existing)
    if span is not None:
        start, end = span
        return existing[:start] + block + existing[end:]

    if not existing:
        return block

    output = existing
    if not output.endswith("\n"):
        output += "\n"
    if not output.endswith("\n\n"):
        output += "\n"
    return output + block


def _read_text(path: Path) -> str:
    with open(path, encoding="utf-8", newline="") as handle:
        return handle.read()


def write_shell_profile(profile_path: str | os.PathLike[str], block: str) -> None:
    """Put ``block`` into the profile, backing the profile up first if it changes."""
    path = Path(profile_path)
    try:
        existing = _read_text(path)
    except FileNotFoundError:
        existing = ""
    except (OSError, UnicodeDecodeError) as exc:
        raise HunmingError(f"failed to read shell profile at {path}") from exc

    updated = insert_managed_block(existing, block)
    if updated == existing:
        return

    _backup_shell_profile(path)
    atomic_write(path, updated)


def shell_profile_backup_path(profile_path: str | os.PathLike[str]) -> Path:
    path = Path(profile_path)
    if not path.name:
        return path / "hunming.bak"
    return path.with_name(f"{path.name}{BACKUP_SUFFIX}")


def _backup_shell_profile(profile_path: Path) -> Path | None:
    if not profile_path.exists():
        return None
    try:
        content = _read_text(profile_path)
    except (OSError, UnicodeDecodeError) as exc:
        raise HunmingError(f"failed to read shell profile at {profile_path}") from exc
    backup_path = shell_profile_backup_path(profile_path)
    atomic_write(backup_path, content)
    return backup_path


def _restore_shell_profile(profile_path: Path) -> Path:
    backup_path = shell_profile_backup_path(profile_path)
    try:
        content = _read_text(backup_path)
    except (OSError, UnicodeDecodeError) as exc:
        raise HunmingError(f"failed to read backup at {backup_path}") from exc
    atomic_write(profile_path, content)
    return profile_path


def _selected_profile_paths(targets: InitTargets, shell: InitShell | None) -> list[Path]:
    by_shell = {
        InitShell.BASH: targets.bash_profile,
        InitShell.ZSH: targets.zsh_profile,
        InitShell.POWERSHELL: targets.powershell_profile,
    }
    if shell is None:
        return list(by_shell.values())
    return [by_shell[shell]]


def backup_with_targets(targets: InitTargets, shell: InitShell | None = None) -> ProfileResult:
    """Copy each selected, existing profile next to itself with a backup suffix."""
    backups = [
        backup_path
        for profile in _selected_profile_paths(targets, shell)
        if (backup_path := _backup_shell_profile(profile)) is not None
    ]
    if not backups:
        raise HunmingError("no shell profiles found to back up")
    return ProfileResult(profile_paths=backups)


def restore_with_targets(targets: InitTargets, shell: InitShell | None = None) -> ProfileResult:
    """Restore every selected profile from its backup; all backups must exist."""
    profiles = _selected_profile_paths(targets, shell)
    for profile in profiles:
        backup_path = shell_profile_backup_path(profile)
        if not backup_path.exists():
            raise HunmingError(f"backup for {profile} is missing at {backup_path}")

    return ProfileResult(profile_paths=[_restore_shell_profile(profile) for profile in profiles])


def backup(paths: AppPaths, shell: InitShell | None = None) -> ProfileResult:
    return backup_with_targets(default_init_targets(), shell)


def restore(paths: AppPaths, shell: InitShell | None = None) -> ProfileResult:
    return restore_with_targets(default_init_targets(), shell)


def _home_dir(purpose: str) -> Path:
    try:
        return Path.home()
    except RuntimeError as exc:
        raise HunmingError(f"failed to determine home directory for hunming {purpose}") from exc


def _powershell_profile(home: Path) -> Path:
    if sys.platform.startswith("win"):
        return home / "Documents" / "PowerShell" / POWERSHELL_PROFILE_NAME
    return home / ".config" / "powershell" / POWERSHELL_PROFILE_NAME


def default_init_targets() -> InitTargets:
    home = _home_dir("init")
    return InitTargets(
        bash_profile=home / ".bashrc",
        zsh_profile=home / ".zshrc",
        powershell_profile=_powershell_profile(home),
    )


def default_doctor_targets() -> DoctorTargets:
    home = _home_dir("doctor")
    return DoctorTargets(
        bash_rc_profile=home / ".bashrc",
        bash_login_profile=home / ".bash_profile",
        zsh_profile=home / ".zshrc",
        powershell_profile=_powershell_profile(home),
    )