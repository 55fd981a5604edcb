"""The alias manager's commands: apply, edit, add, remove, list, show and init."""

from __future__ import annotations

import os
import subprocess
import sys
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from hunming.config import default_config, load_config, save_config
from hunming.fsutil import atomic_write
from hunming.model import Alias, HunmingError, Profile
from hunming.paths import AppPaths
from hunming.profiles import (
    InitShell,
    InitTargets,
    bash_managed_block,
    default_init_targets,
    powershell_managed_block,
    write_shell_profile,
)
from hunming.render import render_bash_with_profile, render_powershell_with_profile
from hunming.validation import validate_alias_name


@dataclass(frozen=True)
class ApplyResult:
    bash_script: Path
    zsh_script: Path
    powershell_script: Path


@dataclass(frozen=True)
class InitResult:
    config_file: Path
    bash_profile: Path
    zsh_profile: Path
    powershell_profile: Path
    bash_script: Path
    zsh_script: Path
    powershell_script: Path


def apply(
    paths: AppPaths, shell: InitShell | None = None, profile: Profile | None = None
) -> ApplyResult:
    """Regenerate the shell scripts from the configuration."""
    config = load_config(paths)
    paths.ensure_generated_dir()

    outputs = [
        (InitShell.BASH, paths.bash_script, render_bash_with_profile),
        (InitShell.ZSH, paths.zsh_script, render_bash_with_profile),
        (InitShell.POWERSHELL, paths.powershell_script, render_powershell_with_profile),
    ]
    for target_shell, script, render in outputs:
        if shell is None or shell == target_shell:
            atomic_write(script, render(config, profile))

    return ApplyResult(
        bash_script=paths.bash_script,
        zsh_script=paths.zsh_script,
        powershell_script=paths.powershell_script,
    )


def _resolve_editor() -> list[str]:
    for key in ("VISUAL", "EDITOR"):
        value = os.environ.get(key, "").strip()
        if value:
            return value.split()
    return ["notepad"] if sys.platform.startswith("win") else ["vi"]


def _open_in_editor(config_file: Path) -> None:
    program, *args = _resolve_editor()
    try:
        completed = subprocess.run([program, *args, str(config_file)], check=False)
    except OSError as exc:
        raise HunmingError(f"failed to launch editor `{program}`") from exc
    if completed.returncode != 0:
        raise HunmingError(f"editor `{program}` exited with status {completed.returncode}")


def edit(
    paths: AppPaths,
    profile: Profile | None = None,
    opener: Callable[[Path], None] | None = None,
) -> ApplyResult:
    """Open the configuration with ``opener`` (the user's editor by default), then apply."""
    paths.ensure_config_dir()
    if not paths.config_file.exists():
        save_config(paths, default_config())

    (opener or _open_in_editor)(paths.config_file)
    return apply(paths, None, profile)


def _normalize_optional(value: str | None) -> str | None:
    if value is None:
        return None
    trimmed = value.strip()
    return trimmed or None


def _normalize_tags(tags: Iterable[str]) -> list[str]:
    trimmed = (tag.strip() for tag in tags)
    return list(dict.fromkeys(tag for tag in trimmed if tag))


def add(
    paths: AppPaths,
    name: str,
    bash: str | None = None,
    powershell: str | None = None,
    profile: Profile | None = None,
    tags: Iterable[str] = (),
    command: Iterable[str] = (),
    force: bool = False,
    render_profile: Profile | None = None,
) -> ApplyResult:
    """Add (or with ``force`` replace) an alias, save and regenerate scripts."""
    validate_alias_name(name)
    config = load_config(paths)

    if name in config.aliases and not force:
        raise HunmingError(f"alias `{name}` already exists; use --force to overwrite")

    config.aliases[name] = Alias(
        command=list(command),
        tags=_normalize_tags(tags),
        bash=_normalize_optional(bash),
        powershell=_normalize_optional(powershell),
        forward_args=True,
        profile=profile,
    )

    save_config(paths, config)
    return apply(paths, None, render_profile)


def remove(paths: AppPaths, name: str, render_profile: Profile | None = None) -> ApplyResult:
    """Delete an alias, save and regenerate scripts."""
    validate_alias_name(name)
    config = load_config(paths)

    if config.aliases.pop(name, None) is None:
        raise HunmingError(f"alias `{name}` does not exist")

    save_config(paths, config)
    return apply(paths, None, render_profile)


def _format_tags(tags: list[str]) -> str:
    return ", ".join(tags) if tags else "-"


def _describe_with_profile(detail: str | None, profile: str | None) -> str:
    detail = detail or ""
    if profile is None:
        return detail
    if not detail:
        return f"profile: {profile}"
    return f"profile: {profile} | {detail}"


def _describe_alias(alias: Alias) -> tuple[str, str]:
    has_bash = bool(alias.bash and alias.bash.strip())
    has_powershell = bool(alias.powershell and alias.powershell.strip())
    profile = alias.profile.value if alias.profile is not None else None
    prefix = f"profile: {profile} | " if profile is not None else ""

    if has_bash and has_powershell:
        return "shell", f"{prefix}bash: {alias.bash} | powershell: {alias.powershell}"
    if has_bash:
        return "bash", _describe_with_profile(alias.bash, profile)
    if has_powershell:
        return "powershell", _describe_with_profile(alias.powershell, profile)
    if alias.command:
        detail = " ".join(alias.command)
        if not alias.forward_args:
            detail += " (no args)"
        return "command", prefix + detail
    return "command", f"profile: {profile}" if profile is not None else ""


def list_aliases(paths: AppPaths) -> str:
    """A table of all aliases: name, kind, tags and what they run."""
    config = load_config(paths)
    if not config.aliases:
        return "No aliases configured.\n"

    rows = [
        (name, *_describe_alias(alias), _format_tags(alias.tags))
        for name, alias in sorted(config.aliases.items())
    ]
    name_width = max(len(name) for name, _, _, _ in rows)
    kind_width = max(len(kind) for _, kind, _, _ in rows)
    tags_width = max(4, max(len(tags) for _, _, _, tags in rows))

    return "".join(
        f"{name:<{name_width}}  {kind:<{kind_width}}  {tags:<{tags_width}}  {detail}\n"
        for name, kind, detail, tags in rows
    )


_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def _quote(value: str) -> str:
    escaped = "".join(
        _STRING_ESCAPES.get(ch) or (ch if ch.isprintable() else f"\\u{{{ord(ch):x}}}")
        for ch in value
    )
    return f'"{escaped}"'


def _quote_list(values: Iterable[str]) -> str:
    return "[" + ", ".join(_quote(value) for value in values) + "]"


def _render_alias_definition(name: str, alias: Alias) -> str:
    lines = [f"[aliases.{name}]"]
    if alias.description is not None:
        lines.append(f"description = {_quote(alias.description)}")
    if alias.command:
        lines.append(f"command = {_quote_list(alias.command)}")
    if alias.tags:
        lines.append(f"tags = {_quote_list(alias.tags)}")
    if alias.profile is not None:
        lines.append(f"profile = {_quote(alias.profile.value)}")
    if alias.bash is not None:
        lines.append(f"bash = {_quote(alias.bash)}")
    if alias.powershell is not None:
        lines.append(f"powershell = {_quote(alias.powershell)}")
    if not alias.forward_args:
        lines.append("forward_args = false")
    if alias.platforms:
        lines.append(f"platforms = {_quote_list(p.value for p in alias.platforms)}")
    return "".join(f"{line}\n" for line in lines)


def show(paths: AppPaths, name: str) -> str:
    """The alias's definition as a TOML table."""
    validate_alias_name(name)
    config = load_config(paths)
    alias = config.aliases.get(name)
    if alias is None:
        raise HunmingError(f"alias `{name}` does not exist")
    return _render_alias_definition(name, alias)


def init(
    paths: AppPaths,
    shell: InitShell | None = None,
    profile: Profile | None = None,
    targets: InitTargets | None = None,
) -> InitResult:
    """Create config and scripts, and hook the scripts into the shell profiles."""
    if targets is None:
        targets = default_init_targets()

    paths.ensure_config_dir()
    paths.ensure_generated_dir()
    if not paths.config_file.exists():
        save_config(paths, default_config())

    result = apply(paths, None, profile)

    hooks = [
        (InitShell.BASH, targets.bash_profile, bash_managed_block(paths.bash_script)),
        (InitShell.ZSH, targets.zsh_profile, bash_managed_block(paths.zsh_script)),
        (
            InitShell.POWERSHELL,
            targets.powershell_profile,
            powershell_managed_block(paths.powershell_script),
        ),
    ]
    for target_shell, profile_path, block in hooks:
        if shell is None or shell == target_shell:
            write_shell_profile(profile_path, block)

    return InitResult(
        config_file=paths.config_file,
        bash_profile=targets.bash_profile,
        zsh_profile=targets.zsh_profile,
        powershell_profile=targets.powershell_profile,
        bash_script=result.bash_script,
        zsh_script=result.zsh_script,
        powershell_script=result.powershell_script,
    )