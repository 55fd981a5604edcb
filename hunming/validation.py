"""Checks applied to aliases before they are saved or after they are loaded."""

from __future__ import annotations

import re

from hunming.model import Alias, Config, HunmingError

_NAME_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_-]*")


def validate_config(config: Config) -> None:
    for name in sorted(config.aliases):
        validate_alias(name, config.aliases[name])


def validate_alias(name: str, alias: Alias) -> None:
    validate_alias_name(name)

    has_command = bool(alias.command)
    has_bash = alias.bash is not None and bool(alias.bash.strip())
    has_powershell = alias.powershell is not None and bool(alias.powershell.strip())
    if not (has_command or has_bash or has_powershell):
        raise HunmingError(f"alias `{name}` must define command, bash, or powershell")

    seen: set[str] = set()
    for tag in alias.tags:
        trimmed = tag.strip()
        if not trimmed:
            raise HunmingError(f"alias `{name}` has an empty tag")
        if trimmed != tag:
            raise HunmingError(
                f"alias `{name}` has a tag with surrounding whitespace: `{tag}`"
            )
        if tag in seen:
            raise HunmingError(f"alias `{name}` has duplicate tag `{tag}`")
        seen.add(tag)


def validate_alias_name(name: str) -> None:
    if not _NAME_PATTERN.fullmatch(name):
        raise HunmingError(
            f"invalid alias name `{name}`: must match ^[A-Za-z_][A-Za-z0-9_-]*$"
        )