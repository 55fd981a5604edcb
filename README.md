# hunming

A cross-platform alias manager. You describe your aliases once in a single
`aliases.toml` file; hunming generates matching shell functions for Bash, Zsh
and PowerShell and hooks them into your shell profiles.

## Installation

```
pip install .
```

This installs the `hunming` command. The only runtime dependency is
`tomli-w`.

## Quick start

```
hunming init
hunming add gs -- git status --short
hunming add --bash "ls -lah" --powershell "Get-ChildItem -Force" --tag files ll
hunming list
```

Open a new shell and `gs` and `ll` are available.

With `add`, put the options before the alias name: everything after the name
is taken as the command. A leading `--` before the command is dropped.

## Configuration

By default the configuration lives in `~/.config/hunming/aliases.toml`
(`%APPDATA%\hunming\aliases.toml` on Windows). Generated scripts are written
to the `generated/` directory next to it as `bash.sh`, `zsh.sh` and
`powershell.ps1`. Use `--config FILE` to point at another file; the
`generated/` directory is then placed next to that file. If the configuration
file does not exist, it is created with default contents the first time it is
needed.

```toml
version = 1
include = ["shared.toml"]

[aliases.gs]
description = "Git status short"
command = ["git", "status", "--short"]
tags = ["git", "status"]

[aliases.ll]
bash = "ls -lah"
powershell = "Get-ChildItem -Force"

[aliases.gs-work]
command = ["git", "status", "--short"]
profile = "work"

[aliases.open]
command = ["xdg-open", "."]
platforms = ["linux"]
forward_args = false
```

- For Bash and Zsh, `command` is used when set, otherwise `bash`.
- For PowerShell, `powershell` is used when set, otherwise `command`.
- `forward_args` (default `true`) passes the function's arguments on
  (`"$@"` in Bash/Zsh, `@args` in PowerShell).
- `platforms` limits an alias to `windows`, `macos` or `linux`.
- `profile` (`work` or `personal`) limits an alias to runs with the matching
  global `--profile`.
- `include` loads further files, resolved relative to the including file.
  Included files must use the same `version`, an alias may be defined only
  once across all files, and circular includes are rejected.

Every alias must define at least one of `command`, `bash` or `powershell`.
Tags must be non-empty, without surrounding whitespace and not repeated.
Alias names must match `^[A-Za-z_][A-Za-z0-9_-]*$`.

## Commands

| Command | What it does |
| --- | --- |
| `hunming init [--shell SHELL]` | Create the config, generate all scripts, add a managed block to the shell profiles |
| `hunming add [--force] [--bash CMD] [--powershell CMD] [--profile P] [--tag T]... NAME [COMMAND...]` | Add an alias (or replace it with `--force`) and regenerate scripts |
| `hunming remove NAME` | Remove an alias and regenerate scripts |
| `hunming list` | List all aliases with their kind, tags and what they run |
| `hunming show NAME` | Print an alias definition as a TOML table |
| `hunming apply [--shell SHELL]` | Regenerate scripts and print their paths |
| `hunming backup [--shell SHELL]` | Copy shell profiles to `*.hunming.bak` and print the backup paths |
| `hunming restore [--shell SHELL]` | Restore shell profiles from their backups |
| `hunming completions SHELL` | Print a completion script |
| `hunming template [--output FILE]` | Print or write a commented `aliases.toml` template |
| `hunming edit` | Open the config in `$VISUAL`, `$EDITOR`, or `vi` (`notepad` on Windows), then regenerate scripts |
| `hunming tui` | Browse aliases in a terminal UI |
| `hunming doctor [--fix]` | Check the installation; with `--fix`, repair it first |

`SHELL` is one of `bash`, `zsh` or `powershell`.

The global options `--config FILE` and `--profile work|personal` go before
the command name; for every command except `add` they may also follow it.
Within `add`, `--profile` sets the new alias's own profile, not the profile
used for rendering.

Failures are printed to standard error as `Error: ...` and the command exits
with status 1.

## Shell profiles

`init` inserts a block delimited by `# >>> hunming init >>>` and
`# <<< hunming init <<<` that sources the generated script. The profiles are
`~/.bashrc`, `~/.zshrc` and the PowerShell profile
(`~/.config/powershell/Microsoft.PowerShell_profile.ps1`, or
`~/Documents/PowerShell/Microsoft.PowerShell_profile.ps1` on Windows).
Running `init` again replaces the block in place and leaves the rest of the
file untouched. Before a profile is changed, its previous content is saved
next to it with a `.hunming.bak` suffix, which `restore` reads back.

## Doctor

`hunming doctor` reports, line by line with `[✓]` or `[!]`, whether the
config file exists and is valid, whether the generated scripts exist, whether
`~/.bashrc`, `~/.zshrc` and the PowerShell profile contain the managed block,
whether `~/.bash_profile` sources `~/.bashrc`, and which alias names shadow a
command found on `PATH`. With `--fix`, a missing config is created, scripts are
regenerated and the managed blocks are written; an invalid config is left
as it is.

## Using it from Python

The command's work is available as functions, for example:

```python
from hunming.paths import AppPaths
from hunming.install import add, list_aliases

paths = AppPaths.from_config_dir("/tmp/hunming")
add(paths, "gs", command=["git", "status", "--short"])
print(list_aliases(paths))
```

`hunming.install` also has `apply`, `edit`, `remove`, `show` and `init`;
`hunming.profiles` has `backup`, `restore` and the managed-block helpers;
`hunming.doctor.doctor`, `hunming.render` and `hunming.config` cover checks,
script rendering and reading and writing the configuration. Errors are raised
as `hunming.model.HunmingError`.

## Limitations

- The terminal UI is read-only: it lists aliases and their details and can
  reload the configuration, but cannot add, change or remove aliases.
- The terminal UI uses the standard `curses` module, which is not part of
  Python on Windows.