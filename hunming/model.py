"""Data model for alias definitions and the configuration that holds them."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class HunmingError(Exception):
    """Raised for every user-facing failure of the alias manager."""


class Platform(StrEnum):
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"

    @classmethod
    def current(cls) -> Platform:
        """Return the platform the program is running on."""
        if sys.platform.startswith("win"):
            return cls.WINDOWS
        if sys.platform == "darwin":
            return cls.MACOS
        return cls.LINUX


class Profile(StrEnum):
    WORK = "work"
    PERSONAL = "personal"


def _optional_str(data: dict[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise HunmingError(f"invalid type for `{key}`: expected a string")
    return value


def _str_list(data: dict[str, Any], key: str) -> list[str]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise HunmingError(f"invalid type for `{key}`: expected a list of strings")
    return list(value)


def _enum_value(enum_type: type[StrEnum], value: Any, key: str) -> Any:
    if not isinstance(value, str):
        raise HunmingError(f"invalid type for `{key}`: expected a string")
    try:
        return enum_type(value)
    except ValueError:
        choices = ", ".join(f"`{member.value}`" for member in enum_type)
        raise HunmingError(
            f"unknown variant `{value}` for `{key}`, expected one of {choices}"
        ) from None


@dataclass
class Alias:
    """One alias: a shared command or per-shell command lines."""

    description: str | None = None
    command: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    bash: str | None = None
    powershell: str | None = None
    forward_args: bool = True
    platforms: list[Platform] = field(default_factory=list)
    profile: Profile | None = None

    def is_active_for_current_platform(self) -> bool:
        return not self.platforms or Platform.current() in self.platforms

    def is_active_for_profile(self, profile: Profile | None) -> bool:
        if self.profile is None:
            return True
        return profile is not None and profile == self.profile

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Alias:
        if not isinstance(data, dict):
            raise HunmingError("invalid alias definition: expected a table")

        forward_args = data.get("forward_args", True)
        if not isinstance(forward_args, bool):
            raise HunmingError("invalid type for `forward_args`: expected a boolean")

        raw_platforms = data.get("platforms", [])
        if not isinstance(raw_platforms, list):
            raise HunmingError("invalid type for `platforms`: expected a list")
        platforms = [_enum_value(Platform, item, "platforms") for item in raw_platforms]

        raw_profile = data.get("profile")
        profile = None if raw_profile is None else _enum_value(Profile, raw_profile, "profile")

        return cls(
            description=_optional_str(data, "description"),
            command=_str_list(data, "command"),
            tags=_str_list(data, "tags"),
            bash=_optional_str(data, "bash"),
            powershell=_optional_str(data, "powershell"),
            forward_args=forward_args,
            platforms=platforms,
            profile=profile,
        )

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.description is not None:
            result["description"] = self.description
        result["command"] = list(self.command)
        result["tags"] = list(self.tags)
        if self.bash is not None:
            result["bash"] = self.bash
        if self.powershell is not None:
            result["powershell"] = self.powershell
        result["forward_args"] = self.forward_args
        result["platforms"] = [platform.value for platform in self.platforms]
        if self.profile is not None:
            result["profile"] = self.profile.value
        return result


@dataclass
class Config:
    """The full set of aliases, keyed by alias name."""

    version: int = 1
    aliases: dict[str, Alias] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Config:
        if not isinstance(data, dict):
            raise HunmingError("invalid config: expected a table")

        version = data.get("version", 1)
        if not isinstance(version, int) or isinstance(version, bool) or version < 0:
            raise HunmingError("invalid type for `version`: expected a non-negative integer")

        raw_aliases = data.get("aliases", {})
        if not isinstance(raw_aliases, dict):
            raise HunmingError("invalid type for `aliases`: expected a table")

        aliases = {name: Alias.from_dict(raw_aliases[name]) for name in sorted(raw_aliases)}
        return cls(version=version, aliases=aliases)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "aliases": {name: self.aliases[name].to_dict() for name in sorted(self.aliases)},
        }