"""Command-line argument parser."""

from __future__ import annotations

import argparse
from pathlib import Path

from hunming.model import Profile
from hunming.profiles import InitShell

VERSION = "0.1.0"

CONFIG_HELP = "Path to aliases.toml."
PROFILE_HELP = "Active profile for scoped aliases."


def _add_shell_option(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument("--shell", type=InitShell, choices=list(InitShell), help=help_text)


def build_parser() -> argparse.ArgumentParser:
    """The parser for the ``hunming`` command and all its subcommands."""
    parser = argparse.ArgumentParser(prog="hunming", description="Cross-platform alias manager")
    parser.add_argument("-V", "--version", action="version", version=f"hunming {VERSION}")
    parser.add_argument("--config", type=Path, metavar="FILE", help=CONFIG_HELP)
    parser.add_argument("--profile", type=Profile, choices=list(Profile), help=PROFILE_HELP)

    # Global options may also follow the subcommand.
    config_only = argparse.ArgumentParser(add_help=False)
    config_only.add_argument(
        "--config", type=Path, metavar="FILE", default=argparse.SUPPRESS, help=CONFIG_HELP
    )
    global_options = argparse.ArgumentParser(add_help=False, parents=[config_only])
    global_options.add_argument(
        "--profile",
        type=Profile,
        choices=list(Profile),
        default=argparse.SUPPRESS,
        help=PROFILE_HELP,
    )

    commands = parser.add_subparsers(dest="subcommand", metavar="COMMAND", required=True)

    def command(name: str, help_text: str, *, parent=global_options) -> argparse.ArgumentParser:
        return commands.add_parser(
            name, help=help_text, description=help_text, parents=[parent]
        )

    init = command("init", "Initialize the configuration file.")
    _add_shell_option(init, "Initialize only one shell profile.")

    add = command("add", "Add a new alias definition.", parent=config_only)
    add.add_argument("--force", action="store_true", help="Overwrite an existing alias.")
    add.add_argument("--bash", help="Bash command to run for this alias.")
    add.add_argument("--powershell", help="PowerShell command to run for this alias.")
    add.add_argument(
        "--profile",
        dest="alias_profile",
        type=Profile,
        choices=list(Profile),
        help="Work or personal profile to assign to this alias.",
    )
    add.add_argument(
        "--tag",
        dest="tags",
        action="append",
        default=[],
        help="Tag to assign to this alias. Repeat to add more tags.",
    )
    add.add_argument("name", help="Alias name to create.")
    add.add_argument("command", nargs=argparse.REMAINDER, help="Command to run for this alias.")

    remove = command("remove", "Remove an alias definition.")
    remove.add_argument("name", help="Alias name to remove.")

    command("list", "List known aliases.")

    show = command("show", "Show an alias definition.")
    show.add_argument("name", help="Alias name to display.")

    apply = command("apply", "Apply the generated scripts.")
    _add_shell_option(apply, "Generate only one shell script.")

    backup = command("backup", "Back up shell profiles before changes.")
    _add_shell_option(backup, "Back up only one shell profile.")

    restore = command("restore", "Restore shell profiles from the last backup.")
    _add_shell_option(restore, "Restore only one shell profile.")

    completions = command("completions", "Generate shell completions.")
    completions.add_argument(
        "shell",
        type=InitShell,
        choices=list(InitShell),
        help="Shell to generate completions for.",
    )

    template = command("template", "Export an aliases.toml template.")
    template.add_argument(
        "--output",
        type=Path,
        metavar="FILE",
        help="Write the template to a file instead of stdout.",
    )

    command("edit", "Edit the configuration file.")
    command("tui", "Open the interactive terminal UI.")

    doctor = command("doctor", "Check the current installation.")
    doctor.add_argument("--fix", action="store_true", help="Attempt safe repairs.")

    return parser