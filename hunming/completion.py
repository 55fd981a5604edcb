"""Shell completion scripts for the ``hunming`` command."""

from __future__ import annotations

from dataclasses import dataclass

from hunming.model import Profile
from hunming.profiles import InitShell

_PROGRAM = "hunming"
_SHELLS = tuple(shell.value for shell in InitShell)
_PROFILES = tuple(profile.value for profile in Profile)


@dataclass(frozen=True)
class _Option:
    flag: str
    help: str
    value: str | None = None
    choices: tuple[str, ...] = ()


@dataclass(frozen=True)
class _Command:
    name: str
    help: str
    options: tuple[_Option, ...] = ()
    choices: tuple[str, ...] = ()


_GLOBAL_OPTIONS = (
    _Option("--config", "Path to aliases.toml.", "file"),
    _Option("--profile", "Active profile for scoped aliases.", "profile", _PROFILES),
)


def _shell_option(help_text: str) -> _Option:
    return _Option("--shell", help_text, "shell", _SHELLS)


_COMMANDS = (
    _Command("init", "Initialize the configuration file.", (
        _shell_option("Initialize only one shell profile."),
    )),
    _Command("add", "Add a new alias definition.", (
        _Option("--force", "Overwrite an existing alias."),
        _Option("--bash", "Bash command to run for this alias.", "command"),
        _Option("--powershell", "PowerShell command to run for this alias.", "command"),
        _Option("--profile", "Work or personal profile to assign to this alias.",
                "profile", _PROFILES),
        _Option("--tag", "Tag to assign to this alias.", "tag"),
    )),
    _Command("remove", "Remove an alias definition."),
    _Command("list", "List known aliases."),
    _Command("show", "Show an alias definition."),
    _Command("apply", "Apply the generated scripts.", (
        _shell_option("Generate only one shell script."),
    )),
    _Command("backup", "Back up shell profiles before changes.", (
        _shell_option("Back up only one shell profile."),
    )),
    _Command("restore", "Restore shell profiles from the last backup.", (
        _shell_option("Restore only one shell profile."),
    )),
    _Command("completions", "Generate shell completions.", choices=_SHELLS),
    _Command("template", "Export an aliases.toml template.", (
        _Option("--output", "Write the template to a file instead of stdout.", "file"),
    )),
    _Command("edit", "Edit the configuration file."),
    _Command("tui", "Open the interactive terminal UI."),
    _Command("doctor", "Check the current installation.", (
        _Option("--fix", "Attempt safe repairs."),
    )),
)


def _value_options() -> list[_Option]:
    seen: set[str] = set()
    result = []
    for option in (*_GLOBAL_OPTIONS, *(o for c in _COMMANDS for o in c.options)):
        if option.value is not None and option.flag not in seen:
            seen.add(option.flag)
            result.append(option)
    return result


def _global_value_flags() -> list[str]:
    return [option.flag for option in _GLOBAL_OPTIONS if option.value is not None]


def _top_level_words() -> list[str]:
    return [
        *(command.name for command in _COMMANDS),
        *(option.flag for option in _GLOBAL_OPTIONS),
        "--help",
        "--version",
    ]


def _command_words(command: _Command) -> list[str]:
    return [*(option.flag for option in command.options), *command.choices, "--help"]


def _bash_script() -> str:
    cases: dict[str, list[str]] = {}
    for option in _value_options():
        if option.choices:
            action = f'COMPREPLY=($(compgen -W "{" ".join(option.choices)}" -- "$cur"))'
        elif option.value == "file":
            action = 'COMPREPLY=($(compgen -f -- "$cur"))'
        else:
            action = "COMPREPLY=()"
        cases.setdefault(action, []).append(option.flag)

    value_cases = []
    for action, flags in cases.items():
        value_cases += [
            f"        {'|'.join(flags)})",
            f"            {action}",
            "            return 0",
            "            ;;",
        ]

    command_cases = [
        '        "")',
        f'            opts="{" ".join(_top_level_words())}"',
        "            ;;",
    ]
    for command in _COMMANDS:
        command_cases += [
            f"        {command.name})",
            f'            opts="{" ".join(_command_words(command))}"',
            "            ;;",
        ]
    command_cases += ["        *)", '            opts="--help"', "            ;;"]

    lines = [
        "_hunming() {",
        "    local cur prev subcommand opts i",
        "    COMPREPLY=()",
        '    cur="${COMP_WORDS[COMP_CWORD]}"',
        '    prev="${COMP_WORDS[COMP_CWORD-1]}"',
        '    subcommand=""',
        "    i=1",
        '    while [ "$i" -lt "$COMP_CWORD" ]; do',
        '        case "${COMP_WORDS[i]}" in',
        f"            {'|'.join(_global_value_flags())})",
        "                i=$((i + 2))",
        "                continue",
        "                ;;",
        "            -*)",
        "                ;;",
        "            *)",
        '                subcommand="${COMP_WORDS[i]}"',
        "                break",
        "                ;;",
        "        esac",
        "        i=$((i + 1))",
        "    done",
        "",
        '    case "$prev" in',
        *value_cases,
        "    esac",
        "",
        '    case "$subcommand" in',
        *command_cases,
        "    esac",
        "",
        '    COMPREPLY=($(compgen -W "$opts" -- "$cur"))',
        "    return 0",
        "}",
        "",
        f"complete -F _hunming -o bashdefault -o default {_PROGRAM}",
    ]
    return "\n".join(lines) + "\n"


def _zsh_escape(text: str) -> str:
    escaped = text.replace("\\", "\\\\").replace("[", "\\[").replace("]", "\\]")
    escaped = escaped.replace(":", "\\:")
    return escaped.replace("'", "'\\''")


def _zsh_option_spec(option: _Option) -> str:
    head = f"{option.flag}[{_zsh_escape(option.help)}]"
    if option.value is None:
        return f"'{head}'"
    if option.choices:
        action = f"({' '.join(option.choices)})"
    elif option.value == "file":
        action = "_files"
    else:
        action = " "
    return f"'{head}:{option.value}:{action}'"


_ZSH_HELP_SPEC = "'(-h --help)'{-h,--help}'[Print help]'"


def _zsh_arguments(specs: list[str], indent: str) -> list[str]:
    continued = [f"{indent}    {spec} \\" for spec in specs[:-1]]
    return [f"{indent}_arguments \\", *continued, f"{indent}    {specs[-1]}"]


def _zsh_script() -> str:
    command_entries = [
        f"        '{_zsh_escape(command.name)}:{_zsh_escape(command.help)}'"
        for command in _COMMANDS
    ]

    top_specs = [
        *(_zsh_option_spec(option) for option in _GLOBAL_OPTIONS),
        _ZSH_HELP_SPEC,
        "'(-V --version)'{-V,--version}'[Print version]'",
        "'1: :->command'",
        "'*:: :->args'",
    ]
    top_arguments = _zsh_arguments(top_specs, "    ")
    top_arguments[0] = "    _arguments -C \\"

    command_cases = []
    for command in _COMMANDS:
        specs = [_zsh_option_spec(option) for option in command.options]
        if command.choices:
            specs.append(f"'1:{command.choices and 'shell'}:({' '.join(command.choices)})'")
        specs.append(_ZSH_HELP_SPEC)
        command_cases += [
            f"                {command.name})",
            *_zsh_arguments(specs, "                    "),
            "                    ;;",
        ]

    lines = [
        f"#compdef {_PROGRAM}",
        "",
        "_hunming() {",
        '    local curcontext="$curcontext" state line',
        "    local -a commands",
        "    commands=(",
        *command_entries,
        "    )",
        "",
        *top_arguments,
        "",
        "    case $state in",
        "        command)",
        "            _describe -t commands 'hunming command' commands",
        "            ;;",
        "        args)",
        '            curcontext="${curcontext%:*:*}:hunming-$words[1]:"',
        "            case $words[1] in",
        *command_cases,
        "            esac",
        "            ;;",
        "    esac",
        "}",
        "",
        'if [ "$funcstack[1]" = "_hunming" ]; then',
        '    _hunming "$@"',
        "else",
        f"    compdef _hunming {_PROGRAM}",
        "fi",
    ]
    return "\n".join(lines) + "\n"


def _ps_quote(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


def _ps_array(words: list[str] | tuple[str, ...]) -> str:
    return "@(" + ", ".join(_ps_quote(word) for word in words) + ")"


def _powershell_script() -> str:
    value_cases = [
        f"        {_ps_quote(option.flag)} {{ {_ps_array(option.choices)} }}"
        for option in _value_options()
    ]
    command_cases = [f"                '' {{ {_ps_array(_top_level_words())} }}"]
    command_cases += [
        f"                {_ps_quote(command.name)} {{ {_ps_array(_command_words(command))} }}"
        for command in _COMMANDS
    ]

    lines = [
        f"Register-ArgumentCompleter -Native -CommandName {_ps_quote(_PROGRAM)} -ScriptBlock {{",
        "    param($wordToComplete, $commandAst, $cursorPosition)",
        "",
        "    $elements = @(",
        "        $commandAst.CommandElements |",
        "            Select-Object -Skip 1 |",
        "            Where-Object { $_.Extent.EndOffset -lt $cursorPosition } |",
        "            ForEach-Object { $_.ToString() }",
        "    )",
        "",
        "    $subcommand = ''",
        "    $skipNext = $false",
        "    foreach ($element in $elements) {",
        "        if ($skipNext) { $skipNext = $false; continue }",
        f"        if ({_ps_array(_global_value_flags())} -contains $element) "
        "{ $skipNext = $true; continue }",
        "        if ($element.StartsWith('-')) { continue }",
        "        $subcommand = $element",
        "        break",
        "    }",
        "    $previous = if ($elements.Count -gt 0) { $elements[-1] } else { '' }",
        "",
        "    $candidates = switch ($previous) {",
        *value_cases,
        "        default {",
        "            switch ($subcommand) {",
        *command_cases,
        "                default { @('--help') }",
        "            }",
        "        }",
        "    }",
        "",
        "    $candidates |",
        '        Where-Object { $_ -like "$wordToComplete*" } |',
        "        ForEach-Object {",
        "            [System.Management.Automation.CompletionResult]::new("
        "$_, $_, 'ParameterValue', $_)",
        "        }",
        "}",
    ]
    return "\n".join(lines) + "\n"


def generate_completions(shell: InitShell | str) -> str:
    """The completion script for ``shell``; raises ValueError for unknown shells."""
    generators = {
        InitShell.BASH: _bash_script,
        InitShell.ZSH: _zsh_script,
        InitShell.POWERSHELL: _powershell_script,
    }
    return generators[InitShell(shell)]()