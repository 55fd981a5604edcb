"""Rendering of aliases into shell function definitions."""

from __future__ import annotations

from collections.abc import Callable

from hunming.model import Alias, Config, Profile


def _active(alias: Alias, profile: Profile | None) -> bool:
    return alias.is_active_for_current_platform() and alias.is_active_for_profile(profile)


def _bash_function(name: str, alias: Alias, profile: Profile | None) -> str | None:
    if not _active(alias, profile):
        return None

    if alias.command:
        command = " ".join(alias.command)
    elif alias.bash is not None:
        command = alias.bash.strip()
    else:
        return None

    if not command.strip():
        return None

    body = f'  {command} "$@"' if alias.forward_args else f"  {command}"
    return f"{name}() {{\n{body}\n}}\n"


def _powershell_function(name: str, alias: Alias, profile: Profile | None) -> str | None:
    if not _active(alias, profile):
        return None

    explicit = alias.powershell.strip() if alias.powershell is not None else ""
    if explicit:
        command = explicit
    elif alias.command:
        command = " ".join(alias.command)
    else:
        return None

    if not command.strip():
        return None

    body = f"    {command} @args" if alias.forward_args else f"    {command}"
    return f"function {name} {{\n{body}\n}}\n"


def _render(
    config: Config,
    profile: Profile | None,
    render_one: Callable[[str, Alias, Profile | None], str | None],
) -> str:
    functions = (
        render_one(name, config.aliases[name], profile) for name in sorted(config.aliases)
    )
    return "\n\n".join(function for function in functions if function is not None)


def render_bash(config: Config) -> str:
    return render_bash_with_profile(config, None)


def render_bash_with_profile(config: Config, profile: Profile | None) -> str:
    return _render(config, profile, _bash_function)


def render_zsh(config: Config) -> str:
    return render_bash(config)


def render_powershell(config: Config) -> str:
    return render_powershell_with_profile(config, None)


def render_powershell_with_profile(config: Config, profile: Profile | None) -> str:
    return _render(config, profile, _powershell_function)