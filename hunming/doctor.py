"""Health checks for an installation, with optional safe repairs."""

from __future__ import annotations

import os
import sys
from pathlib import Path

from hunming.config import default_config, load_config_from_path, save_config
from hunming.install import apply
from hunming.model import Config, HunmingError, Profile
from hunming.paths import AppPaths
from hunming.profiles import (
    DoctorTargets,
    bash_managed_block,
    default_doctor_targets,
    powershell_managed_block,
    write_shell_profile,
)

_BASHRC_SOURCE_PATTERNS = (
    ". ~/.bashrc",
    "source ~/.bashrc",
    '. "$HOME/.bashrc"',
    'source "$HOME/.bashrc"',
    ". ${HOME}/.bashrc",
    "source ${HOME}/.bashrc",
)

_DEFAULT_PATHEXT = (".COM", ".EXE", ".BAT", ".CMD")


class _Report:
    def __init__(self) -> None:
        self.lines: list[str] = []

    def ok(self, message: str) -> None:
        self.lines.append(f"[✓] {message}")

    def warn(self, message: str) -> None:
        self.lines.append(f"[!] {message}")

    def finish(self) -> str:
        return "".join(f"{line}\n" for line in self.lines)


def _inspect_config(paths: AppPaths) -> Config | str | None:
    """The loaded config, the error text if it is invalid, or None if it is missing."""
    if not paths.config_file.exists():
        return None
    try:
        return load_config_from_path(paths.config_file)
    except HunmingError as exc:
        return str(exc)


def _write_all_profiles(paths: AppPaths, targets: DoctorTargets) -> None:
    write_shell_profile(targets.bash_rc_profile, bash_managed_block(paths.bash_script))
    write_shell_profile(targets.zsh_profile, bash_managed_block(paths.zsh_script))
    write_shell_profile(
        targets.powershell_profile, powershell_managed_block(paths.powershell_script)
    )


def _repair(
    paths: AppPaths,
    targets: DoctorTargets,
    state: Config | str | None,
    profile: Profile | None,
) -> None:
    if isinstance(state, str):
        return
    if state is None:
        save_config(paths, default_config())
    apply(paths, None, profile)
    _write_all_profiles(paths, targets)


def _check_profile_block(report: _Report, label: str, path: Path, block: str) -> None:
    try:
        with open(path, encoding="utf-8", newline="") as handle:
            content = handle.read()
    except FileNotFoundError:
        report.warn(f"{label} missing")
        return
    except (OSError, UnicodeDecodeError) as exc:
        report.warn(f"failed to read {label} at {path}: {exc}")
        return

    if block in content:
        report.ok(f"{label} contains humming managed block")
    else:
        report.warn(f"{label} does not contain humming managed block")


def _profile_sources_bash_rc(path: Path) -> bool:
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return False
    return any(pattern in content for pattern in _BASHRC_SOURCE_PATTERNS)


def _command_candidates(directory: Path, name: str, on_windows: bool) -> list[Path]:
    candidates = [directory / name]
    if not on_windows:
        return candidates

    pathext = os.environ.get("PATHEXT")
    extensions = (
        [item for item in pathext.split(";") if item] if pathext is not None else _DEFAULT_PATHEXT
    )
    if not Path(name).suffix:
        candidates.extend(directory / f"{name}{ext}" for ext in extensions)
    return candidates


def command_exists(name: str) -> bool:
    """Whether a file called ``name`` exists in any directory on PATH."""
    path_var = os.environ.get("PATH")
    if path_var is None:
        return False

    on_windows = sys.platform.startswith("win")
    return any(
        candidate.is_file()
        for directory in path_var.split(os.pathsep)
        for candidate in _command_candidates(Path(directory), name, on_windows)
    )


def doctor(
    paths: AppPaths,
    fix: bool = False,
    profile: Profile | None = None,
    targets: DoctorTargets | None = None,
) -> str:
    """Check config, generated scripts and shell profiles; with ``fix``, repair first."""
    if targets is None:
        targets = default_doctor_targets()

    if fix:
        _repair(paths, targets, _inspect_config(paths), profile)

    state = _inspect_config(paths)
    report = _Report()

    if state is None:
        report.warn("config file missing")
    elif isinstance(state, str):
        report.warn(f"config file is invalid: {state}")
    else:
        report.ok("config file exists")

    for label, script in (
        ("bash", paths.bash_script),
        ("zsh", paths.zsh_script),
        ("powershell", paths.powershell_script),
    ):
        if script.exists():
            report.ok(f"generated {label} file exists")
        else:
            report.warn(f"generated {label} file missing")

    _check_profile_block(
        report, "~/.bashrc", targets.bash_rc_profile, bash_managed_block(paths.bash_script)
    )
    _check_profile_block(
        report, "~/.zshrc", targets.zsh_profile, bash_managed_block(paths.zsh_script)
    )

    if _profile_sources_bash_rc(targets.bash_login_profile):
        report.ok("~/.bash_profile sources ~/.bashrc")
    else:
        report.warn("~/.bash_profile does not source ~/.bashrc")

    _check_profile_block(
        report,
        "PowerShell profile",
        targets.powershell_profile,
        powershell_managed_block(paths.powershell_script),
    )

    report.warn("PowerShell execution policy may block profile loading")

    if isinstance(state, Config):
        report.ok("no duplicated alias names")
        shadowed = [name for name in sorted(state.aliases) if command_exists(name)]
        if shadowed:
            for name in shadowed:
                report.warn(f'alias "{name}" shadows existing command')
        else:
            report.ok("no aliases shadow existing command")

    return report.finish()