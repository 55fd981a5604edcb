"""Entry point of the ``hunming`` command."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence

from hunming.cli import build_parser
from hunming.completion import generate_completions
from hunming.config import render_template
from hunming.doctor import doctor
from hunming.fsutil import atomic_write
from hunming.install import add, apply, edit, init, list_aliases, remove, show
from hunming.model import HunmingError
from hunming.paths import AppPaths
from hunming.profiles import InitShell, backup, restore


def _resolve_paths(args: argparse.Namespace) -> AppPaths:
    if args.config is not None:
        return AppPaths.from_config_file(args.config)
    return AppPaths.default()


def _run(args: argparse.Namespace) -> None:
    paths = _resolve_paths(args)
    profile = args.profile

    match args.subcommand:
        case "init":
            init(paths, args.shell, profile)
        case "add":
            command = list(args.command)
            if command[:1] == ["--"]:
                command = command[1:]
            add(
                paths,
                args.name,
                args.bash,
                args.powershell,
                args.alias_profile,
                args.tags,
                command,
                args.force,
                profile,
            )
        case "remove":
            remove(paths, args.name, profile)
        case "list":
            print(list_aliases(paths), end="")
        case "show":
            print(show(paths, args.name), end="")
        case "apply":
            result = apply(paths, args.shell, profile)
            scripts = {
                InitShell.BASH: result.bash_script,
                InitShell.ZSH: result.zsh_script,
                InitShell.POWERSHELL: result.powershell_script,
            }
            selected = scripts.values() if args.shell is None else [scripts[args.shell]]
            for script in selected:
                print(script)
        case "backup":
            for path in backup(paths, args.shell).profile_paths:
                print(path)
        case "restore":
            for path in restore(paths, args.shell).profile_paths:
                print(path)
        case "completions":
            print(generate_completions(args.shell), end="")
        case "template":
            content = render_template()
            if args.output is not None:
                atomic_write(args.output, content)
                print(args.output)
            else:
                print(content, end="")
        case "edit":
            edit(paths, profile)
        case "tui":
            from hunming.tui import run

            run(paths, profile)
        case "doctor":
            print(doctor(paths, args.fix, profile), end="")


def _format_error(exc: BaseException) -> str:
    causes = []
    cause = exc.__cause__
    while cause is not None:
        causes.append(str(cause))
        cause = cause.__cause__

    text = f"Error: {exc}"
    if len(causes) == 1:
        text += f"\n\nCaused by:\n    {causes[0]}"
    elif causes:
        text += "\n\nCaused by:\n" + "\n".join(
            f"    {index}: {message}" for index, message in enumerate(causes)
        )
    return text


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; returns the process exit status."""
    parser = build_parser()
    arguments = sys.argv[1:] if argv is None else list(argv)
    if not arguments:
        parser.print_help(sys.stderr)
        return 2

    args = parser.parse_args(arguments)
    try:
        _run(args)
    except HunmingError as exc:
        print(_format_error(exc), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())