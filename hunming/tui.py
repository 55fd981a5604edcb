"""Interactive terminal browser for the configured aliases."""

from __future__ import annotations

import textwrap
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from hunming.config import load_config
from hunming.model import Alias, Profile
from hunming.paths import AppPaths

HELP_TEXT = "q/Esc quit  r reload  ↑/↓ move  Home/End jump"
_POLL_MS = 200
_ESCAPE = 27


@dataclass
class AliasEntry:
    """One alias together with whether it applies here and now."""

    name: str
    alias: Alias
    is_active: bool
    platform_match: bool
    profile_match: bool


def build_entries(aliases: Mapping[str, Alias], profile: Profile | None) -> list[AliasEntry]:
    """Entries for every alias, in name order, matched against ``profile``."""
    entries = []
    for name in sorted(aliases):
        alias = aliases[name]
        platform_match = alias.is_active_for_current_platform()
        profile_match = alias.is_active_for_profile(profile)
        entries.append(
            AliasEntry(
                name=name,
                alias=alias,
                is_active=platform_match and profile_match,
                platform_match=platform_match,
                profile_match=profile_match,
            )
        )
    return entries


def _yes_no(value: bool) -> str:
    return "yes" if value else "no"


def _joined(values: list[str], empty: str) -> str:
    return ", ".join(values) if values else empty


def alias_details(entry: AliasEntry, profile: Profile | None) -> list[tuple[str, str]]:
    """The labelled fields shown in the details pane for ``entry``."""
    alias = entry.alias
    lines = [
        ("Name", entry.name),
        ("State", "active" if entry.is_active else "inactive"),
        ("Current profile", profile.value if profile is not None else "none"),
        ("Profile rule", alias.profile.value if alias.profile is not None else "all"),
        ("Tags", _joined(alias.tags, "-")),
        ("Command", " ".join(alias.command) if alias.command else "-"),
        ("Forward args", _yes_no(alias.forward_args)),
        ("Platforms", _joined([p.value for p in alias.platforms], "all")),
        ("Platform match", _yes_no(entry.platform_match)),
        ("Profile match", _yes_no(entry.profile_match)),
    ]
    if alias.description is not None:
        lines.append(("Description", alias.description))
    if alias.bash is not None:
        lines.append(("Bash", alias.bash))
    if alias.powershell is not None:
        lines.append(("PowerShell", alias.powershell))
    return lines


@dataclass
class App:
    """State of the browser: the entries, the selection and the status line."""

    paths: AppPaths
    profile: Profile | None
    entries: list[AliasEntry] = field(default_factory=list)
    selected: int | None = None
    status: str = HELP_TEXT

    @classmethod
    def load(cls, paths: AppPaths, profile: Profile | None = None) -> App:
        config = load_config(paths)
        entries = build_entries(config.aliases, profile)
        return cls(
            paths=paths,
            profile=profile,
            entries=entries,
            selected=0 if entries else None,
        )

    def reload(self, paths: AppPaths) -> None:
        """Re-read the configuration, keeping the selected alias when it still exists."""
        current = self.selected_entry()
        selected_name = current.name if current is not None else None
        config = load_config(paths)
        self.entries = build_entries(config.aliases, self.profile)

        names = [entry.name for entry in self.entries]
        if selected_name in names:
            self.selected = names.index(selected_name)
        else:
            self.selected = 0 if self.entries else None
        self.status = f"reloaded {len(self.entries)} aliases from {paths.config_file}"

    def selected_entry(self) -> AliasEntry | None:
        if self.selected is None or not 0 <= self.selected < len(self.entries):
            return None
        return self.entries[self.selected]

    def next(self) -> None:
        if not self.entries:
            return
        if self.selected is not None and self.selected + 1 < len(self.entries):
            self.selected += 1
        else:
            self.selected = 0

    def previous(self) -> None:
        if not self.entries:
            return
        if not self.selected:
            self.selected = len(self.entries) - 1
        else:
            self.selected -= 1

    def first(self) -> None:
        if self.entries:
            self.selected = 0

    def last(self) -> None:
        if self.entries:
            self.selected = len(self.entries) - 1


@dataclass(frozen=True)
class _Styles:
    active: int
    inactive: int
    selected_name: int
    highlight: int
    label: int


def _make_styles(curses) -> _Styles:
    if not curses.has_colors():
        return _Styles(0, curses.A_DIM, curses.A_BOLD, curses.A_REVERSE, curses.A_BOLD)

    curses.start_color()
    background = -1
    try:
        curses.use_default_colors()
    except curses.error:
        background = curses.COLOR_BLACK
    curses.init_pair(1, curses.COLOR_GREEN, background)
    curses.init_pair(2, curses.COLOR_WHITE, background)
    curses.init_pair(3, curses.COLOR_CYAN, background)
    return _Styles(
        active=curses.color_pair(1),
        inactive=curses.color_pair(2) | curses.A_DIM,
        selected_name=curses.color_pair(2) | curses.A_BOLD,
        highlight=curses.color_pair(3) | curses.A_BOLD,
        label=curses.color_pair(3) | curses.A_BOLD,
    )


def _put(curses, window, y: int, x: int, text: str, width: int, attr: int = 0) -> int:
    """Write clipped text; returns the column after it."""
    if width <= 0:
        return x
    clipped = text[:width]
    try:
        window.addnstr(y, x, clipped, width, attr)
    except curses.error:
        pass
    return x + len(clipped)


def _panel(curses, screen, top: int, left: int, height: int, width: int, title: str):
    """Draw a bordered, titled panel; returns its window, or None if it does not fit."""
    if height < 2 or width < 2:
        return None
    try:
        window = screen.derwin(height, width, top, left)
        window.box()
    except curses.error:
        return None
    _put(curses, window, 0, 1, title, width - 2)
    return window


def _draw_list(curses, window, app: App, styles: _Styles) -> None:
    height, width = window.getmaxyx()
    rows, inner = height - 2, width - 2
    if rows <= 0:
        return
    if not app.entries:
        _put(curses, window, 1, 1, "No aliases configured.", inner)
        return

    selected = app.selected or 0
    offset = max(0, selected - rows + 1)
    for row, entry in enumerate(app.entries[offset : offset + rows]):
        index = offset + row
        is_selected = index == app.selected
        status_style = styles.active if entry.is_active else styles.inactive
        y, x, limit = row + 1, 1, 1 + inner
        if is_selected:
            x = _put(curses, window, y, x, "> ", limit - x, styles.highlight)
            marker_style = name_style = rest_style = styles.highlight
        else:
            x = _put(curses, window, y, x, "  ", limit - x)
            marker_style, name_style, rest_style = status_style, status_style, 0
        marker = ">" if is_selected else " "
        x = _put(curses, window, y, x, f"{marker} ", limit - x, marker_style)
        if is_selected:
            name_style = styles.selected_name | styles.highlight
        x = _put(curses, window, y, x, entry.name, limit - x, name_style)
        _put(curses, window, y, x, f"  [{_joined(entry.alias.tags, '-')}]", limit - x, rest_style)


def _draw_details(curses, window, app: App, styles: _Styles) -> None:
    height, width = window.getmaxyx()
    rows, inner = height - 2, width - 2
    if rows <= 0 or inner <= 0:
        return

    entry = app.selected_entry()
    if entry is None:
        lines = [(None, line) for line in textwrap.wrap(
            "Select an alias to inspect its details.", inner)]
    else:
        lines = []
        for label, value in alias_details(entry, app.profile):
            prefix = f"{label}: "
            wrapped = textwrap.wrap(prefix + value, inner) or [prefix.strip()]
            lines.append((prefix, wrapped[0]))
            lines.extend((None, line) for line in wrapped[1:])

    for row, (prefix, line) in enumerate(lines[:rows]):
        y = row + 1
        if prefix is not None and line.startswith(prefix.rstrip()):
            label_part = line[: len(prefix)] if line.startswith(prefix) else line
            x = _put(curses, window, y, 1, label_part, inner, styles.label)
            _put(curses, window, y, x, line[len(label_part):], 1 + inner - x)
        else:
            _put(curses, window, y, 1, line, inner)


def _draw(curses, screen, app: App, styles: _Styles) -> None:
    screen.erase()
    height, width = screen.getmaxyx()
    header_height, footer_height = 3, 3
    body_height = height - header_height - footer_height

    if body_height < 3 or width < 10:
        _put(curses, screen, 0, 0, "Terminal too small", width - 1)
        screen.refresh()
        return

    profile = app.profile.value if app.profile is not None else "all profiles"
    header = _panel(curses, screen, 0, 0, header_height, width, "Status")
    if header is not None:
        text = (
            f"HunMing TUI  |  {len(app.entries)} aliases  |  {profile}  |  "
            f"{app.paths.config_file}"
        )
        _put(curses, header, 1, 1, text, width - 2)

    list_width = width * 40 // 100
    aliases = _panel(curses, screen, header_height, 0, body_height, list_width, "Aliases")
    if aliases is not None:
        _draw_list(curses, aliases, app, styles)

    details = _panel(
        curses, screen, header_height, list_width, body_height, width - list_width, "Details"
    )
    if details is not None:
        _draw_details(curses, details, app, styles)

    footer = _panel(curses, screen, height - footer_height, 0, footer_height, width, "Help")
    if footer is not None:
        _put(curses, footer, 1, 1, app.status, width - 2)

    screen.refresh()


def _event_loop(screen, curses, app: App, paths: AppPaths) -> None:
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    screen.keypad(True)
    screen.timeout(_POLL_MS)
    try:
        curses.mousemask(curses.ALL_MOUSE_EVENTS)
    except curses.error:
        pass
    styles = _make_styles(curses)

    moves = {
        curses.KEY_UP: app.previous,
        ord("k"): app.previous,
        curses.KEY_DOWN: app.next,
        ord("j"): app.next,
        curses.KEY_HOME: app.first,
        ord("g"): app.first,
        curses.KEY_END: app.last,
        ord("G"): app.last,
    }

    while True:
        _draw(curses, screen, app, styles)
        key = screen.getch()
        if key == -1:
            continue
        if key in (ord("q"), _ESCAPE):
            break
        if key in moves:
            moves[key]()
        elif key == ord("r"):
            try:
                app.reload(paths)
            except Exception as exc:  # shown to the user; the browser keeps running
                app.status = f"reload failed: {exc}"


def run(paths: AppPaths, profile: Profile | None = None) -> None:
    """Open the alias browser until the user quits."""
    import curses

    app = App.load(paths, profile)
    curses.wrapper(_event_loop, curses, app, paths)


def _config_path(app: App) -> Path:
    return app.paths.config_file