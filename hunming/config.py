"""Loading, saving and templating of the aliases configuration file."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from hunming.fsutil import atomic_write
from hunming.model import Alias, Config, HunmingError
from hunming.paths import AppPaths
from hunming.validation import validate_config

TEMPLATE_EXAMPLES = """# Examples:
# Uncomment one block and edit it to match your needs.
#
# [aliases.gs]
# command = ["git", "status", "--short"]
# tags = ["git", "status"]
#
# [aliases.ll]
# bash = "ls -lah"
# powershell = "Get-ChildItem -Force"
#
# [aliases.gs-work]
# command = ["git", "status", "--short"]
# profile = "work"
#
# [aliases.open]
# command = ["xdg-open", "."]
# platforms = ["linux"]
"""


def default_config() -> Config:
    return Config()


def dumps_config(config: Config) -> str:
    """Serialize a configuration to TOML text ending in a newline."""
    content = tomli_w.dumps(config.to_dict())
    if not content.endswith("\n"):
        content += "\n"
    return content


def loads_config(text: str) -> Config:
    """Parse TOML text into a configuration, without includes or validation."""
    try:
        data = tomllib.loads(text)
    except tomllib.TOMLDecodeError as exc:
        raise HunmingError(f"invalid TOML: {exc}") from exc
    return Config.from_dict(data)


def load_config(paths: AppPaths) -> Config:
    """Load the configuration, creating a default file if none exists."""
    if not paths.config_file.exists():
        config = default_config()
        save_config(paths, config)
        return config
    return load_config_from_path(paths.config_file)


def load_config_from_path(config_file: str | os.PathLike[str]) -> Config:
    return _load(Path(config_file), [])


def save_config(paths: AppPaths, config: Config) -> None:
    paths.ensure_config_dir()
    validate_config(config)
    atomic_write(paths.config_file, dumps_config(config))


def render_template() -> str:
    return dumps_config(default_config()) + "\n" + TEMPLATE_EXAMPLES


def _parse_document(config_file: Path, content: str) -> tuple[Config, list[str]]:
    try:
        data = tomllib.loads(content)
        config = Config.from_dict(data)
        include = data.get("include", [])
        if not isinstance(include, list) or not all(isinstance(item, str) for item in include):
            raise HunmingError("invalid type for `include`: expected a list of strings")
    except (tomllib.TOMLDecodeError, HunmingError) as exc:
        raise HunmingError(f"failed to parse config file at {config_file}") from exc
    return config, include


def _load(config_file: Path, stack: list[Path]) -> Config:
    try:
        canonical = config_file.resolve(strict=True)
    except OSError as exc:
        raise HunmingError(f"failed to resolve config file at {config_file}") from exc

    if canonical in stack:
        raise HunmingError(f"circular include detected at {config_file}")

    stack.append(canonical)
    try:
        try:
            content = config_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise HunmingError(f"failed to read config file at {config_file}") from exc

        document, includes = _parse_document(config_file, content)
        config = Config(version=document.version, aliases={})

        for include in includes:
            include_file = _resolve_include_path(config_file, include)
            try:
                included = _load(include_file, stack)
            except HunmingError as exc:
                raise HunmingError(
                    f"failed to load included config file at {include_file}"
                ) from exc

            if included.version != config.version:
                raise HunmingError(
                    f"included config file at {include_file} uses version "
                    f"{included.version} but expected {config.version}"
                )
            _merge_aliases(config.aliases, included.aliases, include_file)

        _merge_aliases(config.aliases, document.aliases, config_file)
        validate_config(config)
        config.aliases = {name: config.aliases[name] for name in sorted(config.aliases)}
        return config
    finally:
        stack.pop()


def _merge_aliases(target: dict[str, Alias], source: dict[str, Alias], source_file: Path) -> None:
    for name, alias in sorted(source.items()):
        if name in target:
            raise HunmingError(
                f"alias `{name}` is defined more than once while loading {source_file}"
            )
        target[name] = alias


def _resolve_include_path(config_file: Path, include: str) -> Path:
    include_path = Path(include)
    if include_path.is_absolute():
        return include_path
    return config_file.parent / include_path


def _as_dict(config: Config) -> dict[str, Any]:
    return config.to_dict()