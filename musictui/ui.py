"""Screen layout and curses rendering of the application."""

from __future__ import annotations

import curses
import enum
from dataclasses import dataclass
from itertools import islice
from typing import Any

from .app import App, InputMode, View

GAUGE_COLOR_PAIR = 1
HIGHLIGHT_SYMBOL = ">> "
LIBRARY_ITEMS = ("Tracks", "Albums", "Artists", "Play Queue")
EMPTY_PROGRESS_LABEL = "00:00/00:00"

_BOX_TOP = ("┌", "─", "┐")
_BOX_BOTTOM = ("└", "─", "┘")
_BOX_SIDE = "│"


@dataclass(frozen=True)
class Rect:
    """A rectangle of terminal cells."""

    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def inner(self) -> Rect:
        """The area left inside a one-cell border."""
        return Rect(
            min(self.x + 1, self.right),
            min(self.y + 1, self.bottom),
            max(0, self.width - 2),
            max(0, self.height - 2),
        )


@dataclass(frozen=True)
class Areas:
    header: Rect
    search: Rect
    sidebar: Rect
    content: Rect
    player: Rect


class Modifier(enum.Flag):
    NONE = 0
    BOLD = enum.auto()
    REVERSED = enum.auto()
    DIM = enum.auto()


@dataclass(frozen=True)
class Span:
    """A piece of styled text."""

    text: str
    modifier: Modifier = Modifier.NONE


def _split_rows(area: Rect, heights: list[int]) -> list[Rect]:
    rects = []
    y = area.y
    for height in heights:
        rects.append(Rect(area.x, y, area.width, height))
        y += height
    return rects


def split_layout(area: Rect) -> Areas:
    """Divide the screen into header, search box, sidebar, content and player."""
    main_height = min(10, area.height)
    rest = area.height - main_height
    fixed = []
    for wanted in (1, 3, 6):
        height = min(wanted, rest)
        fixed.append(height)
        rest -= height
    header_height, search_height, player_height = fixed
    main_height += rest

    header, search, main, player = _split_rows(
        area, [header_height, search_height, main_height, player_height]
    )
    sidebar_width = area.width * 35 // 100
    sidebar = Rect(main.x, main.y, sidebar_width, main.height)
    content = Rect(main.x + sidebar_width, main.y, area.width - sidebar_width, main.height)
    return Areas(header=header, search=search, sidebar=sidebar, content=content, player=player)


def calculate_progress(app: App) -> tuple[float, str]:
    """Return the played fraction of the current song and its time label."""
    song = app.now_playing
    if song is not None and song.duration > 0:
        ratio = min(1.0, max(0.0, app.playback_seconds / song.duration))
        played, total = app.playback_seconds, song.duration
        label = (
            f"{played // 60:02}:{played % 60:02}/{total // 60:02}:{total % 60:02}"
        )
        return ratio, label
    return 0.0, EMPTY_PROGRESS_LABEL


def build_status_line(app: App) -> list[Span]:
    """The spans of the status line shown above the progress bar."""
    mode = " NORMAL " if app.input_mode is InputMode.NORMAL else " SEARCH "
    view = "RESULTS" if app.current_view is View.RESULTS else "QUEUE"
    song = app.now_playing
    playing = f"▶ {song.artist} - {song.title}" if song is not None else "▶ nothing"
    hint = "" if app.input_mode is InputMode.NORMAL else "  enter:confirm  esc:cancel"
    return [
        Span(mode, Modifier.BOLD | Modifier.REVERSED),
        Span(" "),
        Span(view, Modifier.BOLD),
        Span(" | "),
        Span(playing),
        Span(" "),
        Span(hint, Modifier.DIM),
    ]


def queue_lines(app: App) -> list[str]:
    """One line per listed song."""
    return [f"{song.artist} - {song.title}" for song in app.items]


def content_title(view: View) -> str:
    if view is View.QUEUE:
        return "Music-TUI (1* Queue, 2- Results)"
    return "Music-TUI (1- Queue, 2* Results)"


def _attr(modifier: Modifier) -> int:
    attr = curses.A_NORMAL
    if Modifier.BOLD in modifier:
        attr |= curses.A_BOLD
    if Modifier.REVERSED in modifier:
        attr |= curses.A_REVERSE
    if Modifier.DIM in modifier:
        attr |= curses.A_DIM
    return attr


def _gauge_attr() -> int:
    try:
        if curses.has_colors():
            return curses.color_pair(GAUGE_COLOR_PAIR) | curses.A_REVERSE
    except curses.error:
        pass
    return curses.A_REVERSE


def _put(window: Any, area: Rect, y: int, x: int, text: str, attr: int = 0) -> int:
    """Write text clipped to an area; return the columns written."""
    if not (area.y <= y < area.bottom) or x < area.x:
        return 0
    available = area.right - x
    if available <= 0 or not text:
        return 0
    clipped = text[:available]
    try:
        window.addnstr(y, x, clipped, available, attr)
    except curses.error:
        pass
    return len(clipped)


def _render_block(window: Any, area: Rect, title: str, borders: bool = True) -> None:
    if area.width <= 0 or area.height <= 0:
        return
    if not borders:
        _put(window, area, area.y, area.x, title)
        return
    if area.width >= 2 and area.height >= 2:
        left, fill, right = _BOX_TOP
        _put(window, area, area.y, area.x, left + fill * (area.width - 2) + right)
        for row in range(area.y + 1, area.bottom - 1):
            _put(window, area, row, area.x, _BOX_SIDE)
            _put(window, area, row, area.right - 1, _BOX_SIDE)
        left, fill, right = _BOX_BOTTOM
        _put(window, area, area.bottom - 1, area.x, left + fill * (area.width - 2) + right)
    title_area = Rect(area.x + 1, area.y, max(0, area.width - 2), 1)
    _put(window, title_area, area.y, title_area.x, title)


def _render_list(
    window: Any, area: Rect, title: str, lines: list[str], selected: int | None
) -> None:
    _render_block(window, area, title)
    inner = area.inner()
    if inner.height <= 0 or inner.width <= 0:
        return
    offset = 0
    if selected is not None and selected >= inner.height:
        offset = selected - inner.height + 1
    visible = islice(enumerate(lines), offset, offset + inner.height)
    for row, (index, line) in enumerate(visible):
        y = inner.y + row
        if selected is None:
            _put(window, inner, y, inner.x, line)
        elif index == selected:
            text = (HIGHLIGHT_SYMBOL + line).ljust(inner.width)
            _put(window, inner, y, inner.x, text, curses.A_REVERSE)
        else:
            _put(window, inner, y, inner.x, " " * len(HIGHLIGHT_SYMBOL) + line)


def _render_header(window: Any, app: App, header: Rect, search: Rect) -> None:
    title = "Music-TUI"
    if header.height > 0:
        x = header.x + max(0, (header.width - len(title)) // 2)
        _put(window, header, header.y, x, title)
    _render_block(window, search, "Search")
    inner = search.inner()
    if inner.height > 0:
        _put(window, inner, inner.y, inner.x, app.input)


def _render_sidebar(window: Any, area: Rect) -> None:
    library_height = min(8, area.height)
    library = Rect(area.x, area.y, area.width, library_height)
    playlists = Rect(area.x, area.y + library_height, area.width, area.height - library_height)
    _render_list(window, library, "Library", list(LIBRARY_ITEMS), None)
    _render_block(window, playlists, "Playlists")


def _render_content(window: Any, app: App, area: Rect) -> None:
    title = content_title(app.current_view)
    if app.current_view is View.QUEUE:
        _render_list(window, area, title, queue_lines(app), app.selected)
    else:
        _render_block(window, area, title)


def _render_status(window: Any, app: App, area: Rect) -> None:
    x = area.x
    for span in build_status_line(app):
        _put(window, area, area.y, x, span.text, _attr(span.modifier))
        x += len(span.text)


def _render_progress(window: Any, app: App, area: Rect) -> None:
    if area.width <= 0 or area.height <= 0:
        return
    ratio, label = calculate_progress(app)
    filled = round(area.width * ratio)
    gauge = _gauge_attr()
    for row in range(area.y, area.bottom):
        _put(window, area, row, area.x, " " * filled, gauge)
    label_y = area.y + area.height // 2
    label_x = area.x + max(0, (area.width - len(label)) // 2)
    split = max(0, min(len(label), area.x + filled - label_x))
    _put(window, area, label_y, label_x, label[:split], gauge)
    _put(window, area, label_y, label_x + split, label[split:])


def _render_player(window: Any, app: App, area: Rect) -> None:
    _render_block(window, area, "Now Playing")
    inner = area.inner()
    status_height = min(1, inner.height)
    status = Rect(inner.x, inner.y, inner.width, status_height)
    progress = Rect(inner.x, inner.y + status_height, inner.width, inner.height - status_height)
    if status.height > 0:
        _render_status(window, app, status)
    _render_progress(window, app, progress)


def _place_cursor(window: Any, app: App, search: Rect) -> None:
    searching = app.input_mode is InputMode.SEARCH
    try:
        curses.curs_set(1 if searching else 0)
    except curses.error:
        pass
    if searching:
        try:
            window.move(search.y + 1, search.x + 1 + len(app.input))
        except curses.error:
            pass


def draw(window: Any, app: App) -> None:
    """Render the whole interface onto a curses window."""
    rows, cols = window.getmaxyx()
    areas = split_layout(Rect(0, 0, cols, rows))
    window.erase()
    _render_header(window, app, areas.header, areas.search)
    _render_sidebar(window, areas.sidebar)
    _render_content(window, app, areas.content)
    _render_player(window, app, areas.player)
    _place_cursor(window, app, areas.search)
    window.refresh()