"""Locations of the configuration file and the generated shell scripts."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path

from hunming.model import HunmingError

APP_NAME = "hunming"
GENERATED_DIR_NAME = "generated"
CONFIG_FILE_NAME = "aliases.toml"
BASH_FILE_NAME = "bash.sh"
ZSH_FILE_NAME = "zsh.sh"
POWERSHELL_FILE_NAME = "powershell.ps1"


@dataclass(frozen=True)
class AppPaths:
    config_dir: Path
    config_file: Path
    generated_dir: Path
    bash_script: Path
    zsh_script: Path
    powershell_script: Path

    @classmethod
    def default(cls) -> AppPaths:
        """Paths under the user's home (or roaming AppData on Windows)."""
        try:
            home = Path.home()
        except RuntimeError as exc:
            raise HunmingError("failed to determine home directory for hunming") from exc

        if sys.platform.startswith("win"):
            appdata = os.environ.get("APPDATA")
            base = Path(appdata) if appdata else home / "AppData" / "Roaming"
            return cls.from_windows_appdata(base)
        return cls.from_unix_home(home)

    @classmethod
    def from_config_file(cls, config_file: str | os.PathLike[str]) -> AppPaths:
        config_file = Path(config_file)
        parent = config_file.parent if str(config_file.parent) else Path(".")
        base = cls.from_config_dir(parent)
        return cls(
            config_dir=base.config_dir,
            config_file=config_file,
            generated_dir=base.generated_dir,
            bash_script=base.bash_script,
            zsh_script=base.zsh_script,
            powershell_script=base.powershell_script,
        )

    @classmethod
    def from_config_dir(cls, config_dir: str | os.PathLike[str]) -> AppPaths:
        config_dir = Path(config_dir)
        generated_dir = config_dir / GENERATED_DIR_NAME
        return cls(
            config_dir=config_dir,
            config_file=config_dir / CONFIG_FILE_NAME,
            generated_dir=generated_dir,
            bash_script=generated_dir / BASH_FILE_NAME,
            zsh_script=generated_dir / ZSH_FILE_NAME,
            powershell_script=generated_dir / POWERSHELL_FILE_NAME,
        )

    @classmethod
    def from_unix_home(cls, home_dir: str | os.PathLike[str]) -> AppPaths:
        return cls.from_config_dir(Path(home_dir) / ".config" / APP_NAME)

    @classmethod
    def from_windows_appdata(cls, appdata_dir: str | os.PathLike[str]) -> AppPaths:
        return cls.from_config_dir(Path(appdata_dir) / APP_NAME)

    def ensure_config_dir(self) -> None:
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise HunmingError(
                f"failed to create config directory at {self.config_dir}"
            ) from exc

    def ensure_generated_dir(self) -> None:
        try:
            self.generated_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise HunmingError(
                f"failed to create generated directory at {self.generated_dir}"
            ) from exc