import pytest

from musictui.app import App, InputMode, View
from musictui.songs import Song
from musictui.ui import (
    Areas,
    Modifier,
    Rect,
    build_status_line,
    calculate_progress,
    content_title,
    draw,
    queue_lines,
    split_layout,
)


class FakePlayer:
    playing = False

    def stop(self):
        self.playing = False


class FakeWindow:
    def __init__(self, rows=24, cols=80):
        self.rows = rows
        self.cols = cols
        self.grid = [[" "] * cols for _ in range(rows)]
        self.cursor = None
        self.refreshed = 0

    def getmaxyx(self):
        return self.rows, self.cols

    def erase(self):
        self.grid = [[" "] * self.cols for _ in range(self.rows)]

    def addnstr(self, y, x, text, n, attr=0):
        for offset, ch in enumerate(text[:n]):
            if 0 <= y < self.rows and 0 <= x + offset < self.cols:
                self.grid[y][x + offset] = ch

    def move(self, y, x):
        self.cursor = (y, x)

    def refresh(self):
        self.refreshed += 1

    def text(self):
        return "\n".join("".join(row) for row in self.grid)


def make_app():
    return App(player=FakePlayer(), search_songs=lambda q: [], resolve_song=None)


def make_song(title="Ghost", artist="Justin", duration=200):
    return Song(id="id1", title=title, artist=artist, album="Album", duration=duration)


@pytest.mark.parametrize("width,height", [(80, 24), (120, 40), (33, 20)])
def test_split_layout_covers_whole_area(width, height):
    areas = split_layout(Rect(0, 0, width, height))
    assert isinstance(areas, Areas)
    assert areas.header.height == 1
    assert areas.search.height == 3
    assert areas.player.height == 6
    assert areas.sidebar.height == areas.content.height
    total = areas.header.height + areas.search.height + areas.sidebar.height + areas.player.height
    assert total == height
    assert areas.sidebar.width + areas.content.width == width
    assert areas.content.x == areas.sidebar.x + areas.sidebar.width
    assert areas.player.y == areas.sidebar.y + areas.sidebar.height


def test_split_layout_small_screen_keeps_main_area():
    areas = split_layout(Rect(0, 0, 40, 12))
    assert areas.sidebar.height >= 10
    heights = [areas.header.height, areas.search.height, areas.sidebar.height, areas.player.height]
    assert sum(heights) == 12
    assert min(heights) >= 0


def test_rect_inner_shrinks_by_border():
    rect = Rect(2, 3, 10, 5)
    inner = rect.inner()
    assert (inner.x, inner.y) == (rect.x + 1, rect.y + 1)
    assert (inner.width, inner.height) == (rect.width - 2, rect.height - 2)


def test_progress_without_song():
    assert calculate_progress(make_app()) == (0.0, "00:00/00:00")


def test_progress_with_zero_duration():
    app = make_app()
    app.now_playing = make_song(duration=0)
    app.playback_seconds = 30
    assert calculate_progress(app) == (0.0, "00:00/00:00")


def test_progress_label_and_ratio():
    app = make_app()
    app.now_playing = make_song(duration=200)
    app.playback_seconds = 65
    ratio, label = calculate_progress(app)
    assert label == "01:05/03:20"
    assert 0.0 < ratio < 1.0
    assert ratio == pytest.approx(app.playback_seconds / app.now_playing.duration)


def test_progress_ratio_is_clamped():
    app = make_app()
    app.now_playing = make_song(duration=100)
    app.playback_seconds = 150
    ratio, _ = calculate_progress(app)
    assert ratio == 1.0


def test_status_line_normal_mode():
    spans = build_status_line(make_app())
    assert spans[0].text == " NORMAL "
    assert spans[0].modifier == Modifier.BOLD | Modifier.REVERSED
    assert spans[2].text == "QUEUE"
    assert spans[4].text == "▶ nothing"
    assert spans[-1].text == ""
    assert spans[-1].modifier == Modifier.DIM


def test_status_line_search_mode_with_song():
    app = make_app()
    app.input_mode = InputMode.SEARCH
    app.current_view = View.RESULTS
    app.now_playing = make_song(title="CHIHIRO", artist="Billie")
    text = "".join(span.text for span in build_status_line(app))
    assert text.startswith(" SEARCH ")
    assert "RESULTS" in text
    assert "▶ Billie - CHIHIRO" in text
    assert text.endswith("  enter:confirm  esc:cancel")


def test_queue_lines():
    app = make_app()
    app.items = [make_song("Ghost", "Justin"), make_song("Coffee", "Beabadoobee")]
    assert queue_lines(app) == ["Justin - Ghost", "Beabadoobee - Coffee"]


def test_content_titles():
    assert content_title(View.QUEUE) == "Music-TUI (1* Queue, 2- Results)"
    assert content_title(View.RESULTS) == "Music-TUI (1- Queue, 2* Results)"


def test_draw_renders_all_panels():
    app = make_app()
    app.items = [make_song("Ghost", "Justin"), make_song("Coffee", "Beabadoobee")]
    app.selected = 1
    window = FakeWindow()
    draw(window, app)
    screen = window.text()
    for expected in ("Music-TUI", "Search", "Library", "Tracks", "Play Queue",
                     "Playlists", "Now Playing", " NORMAL ", "00:00/00:00",
                     content_title(View.QUEUE)):
        assert expected in screen
    assert ">> Beabadoobee - Coffee" in screen
    assert "   Justin - Ghost" in screen
    assert window.refreshed == 1


def test_draw_results_view_has_no_items():
    app = make_app()
    app.items = [make_song("Ghost", "Justin")]
    app.current_view = View.RESULTS
    window = FakeWindow()
    draw(window, app)
    screen = window.text()
    assert content_title(View.RESULTS) in screen
    assert "Justin - Ghost" not in screen


def test_draw_places_cursor_in_search_box():
    app = make_app()
    app.input_mode = InputMode.SEARCH
    app.input = "lofi"
    window = FakeWindow()
    draw(window, app)
    search = split_layout(Rect(0, 0, window.cols, window.rows)).search
    assert window.cursor == (search.y + 1, search.x + 1 + len(app.input))
    assert "lofi" in window.text().splitlines()[search.y + 1]


def test_draw_on_tiny_window_does_not_fail():
    app = make_app()
    window = FakeWindow(rows=5, cols=8)
    draw(window, app)
    assert window.refreshed == 1
    assert len(window.text().splitlines()) == 5