"""Application state and the actions that change it."""

from __future__ import annotations

import enum
import queue
import threading
from dataclasses import dataclass
from typing import Callable, Union

from .player import Player, PlayerError
from .songs import ApiError, Song, SongWithUrl, get_song_with_url, search

STREAM_BITRATE = 320


class Action(enum.Enum):
    """Things the user (or the clock) can ask the application to do."""

    QUIT = enum.auto()
    DOWN = enum.auto()
    UP = enum.auto()
    ENTER_SEARCH = enum.auto()
    EXIT_SEARCH = enum.auto()
    SUBMIT_SEARCH = enum.auto()
    BACKSPACE = enum.auto()
    SWITCH_RESULT_VIEW = enum.auto()
    SWITCH_QUEUE_VIEW = enum.auto()
    TICK = enum.auto()
    TOGGLE_PAUSE = enum.auto()
    SEEK_FORWARD = enum.auto()
    SEEK_BACKWARD = enum.auto()
    NONE = enum.auto()


@dataclass(frozen=True)
class InputChar:
    """A character typed into the search box."""

    char: str


AnyAction = Union[Action, InputChar]


@dataclass(frozen=True)
class StartedPlayback:
    """Sent once a song's stream URL has been resolved."""

    data: SongWithUrl


class InputMode(enum.Enum):
    NORMAL = "normal"
    SEARCH = "search"


class View(enum.Enum):
    RESULTS = "results"
    QUEUE = "queue"


class App:
    """Everything the interface shows, and the reactions to user actions."""

    def __init__(
        self,
        player: Player | None = None,
        search_songs: Callable[[str], list[Song]] = search,
        resolve_song: Callable[[Song, int], SongWithUrl] = get_song_with_url,
    ) -> None:
        self.items: list[Song] = []
        self.selected: int | None = None
        self.input_mode = InputMode.NORMAL
        self.input = ""
        self.now_playing: Song | None = None
        self.current_view = View.QUEUE
        self.playback_seconds = 0
        self.player = player if player is not None else Player()
        self.events: queue.Queue[StartedPlayback] = queue.Queue()
        self._search_songs = search_songs
        self._resolve_song = resolve_song

    def next(self) -> None:
        """Move the selection one item down, stopping at the last item."""
        if self.selected is None or not self.items:
            self.selected = 0
        elif self.selected < len(self.items) - 1:
            self.selected += 1

    def prev(self) -> None:
        """Move the selection one item up, stopping at the first item."""
        if self.selected is None or self.selected == 0:
            self.selected = 0
        else:
            self.selected -= 1

    def perform_search(self, query: str) -> None:
        """Replace the items with the results of a search."""
        try:
            self.items = list(self._search_songs(query))
        except ApiError:
            self.items = []
        self.selected = 0

    def handle_action(self, action: AnyAction) -> bool:
        """Apply an action; return True when the application should quit."""
        if self.input_mode is InputMode.NORMAL:
            return self._handle_normal(action)
        self._handle_search(action)
        return False

    def _handle_normal(self, action: AnyAction) -> bool:
        if action is Action.QUIT:
            self.player.stop()
            return True
        if action is Action.DOWN:
            self.next()
        elif action is Action.UP:
            self.prev()
        elif action is Action.ENTER_SEARCH:
            self.input_mode = InputMode.SEARCH
        elif action is Action.SUBMIT_SEARCH:
            self.play_selected()
        elif action is Action.SWITCH_RESULT_VIEW:
            self.current_view = View.RESULTS
        elif action is Action.SWITCH_QUEUE_VIEW:
            self.current_view = View.QUEUE
        elif action is Action.TOGGLE_PAUSE:
            try:
                self.player.toggle_pause()
            except PlayerError:
                pass
        elif action is Action.SEEK_FORWARD:
            try:
                delta = self.player.seek(True)
            except PlayerError:
                pass
            else:
                self.playback_seconds += delta
        elif action is Action.SEEK_BACKWARD:
            try:
                delta = self.player.seek(False)
            except PlayerError:
                pass
            else:
                self.playback_seconds = max(0, self.playback_seconds - abs(delta))
        elif action is Action.TICK:
            self._tick()
        return False

    def _tick(self) -> None:
        if not self.player.playing or self.now_playing is None:
            return
        if self.playback_seconds < self.now_playing.duration:
            self.playback_seconds += 1
        else:
            self.player.stop()
            self.now_playing = None

    def _handle_search(self, action: AnyAction) -> None:
        if isinstance(action, InputChar):
            self.input += action.char
        elif action is Action.EXIT_SEARCH:
            self.input_mode = InputMode.NORMAL
        elif action is Action.SUBMIT_SEARCH:
            self.perform_search(self.input)
            self.input = ""
            self.input_mode = InputMode.NORMAL
        elif action is Action.BACKSPACE:
            self.input = self.input[:-1]

    def play_selected(self) -> threading.Thread | None:
        """Resolve the selected song in the background; return the worker thread."""
        if self.selected is None or not 0 <= self.selected < len(self.items):
            return None
        song = self.items[self.selected]
        worker = threading.Thread(
            target=self._resolve_in_background, args=(song,), daemon=True
        )
        worker.start()
        return worker

    def _resolve_in_background(self, song: Song) -> None:
        try:
            data = self._resolve_song(song, STREAM_BITRATE)
        except ApiError:
            return
        self.events.put(StartedPlayback(data))

    def process_events(self) -> None:
        """Start playback for every song resolved since the last call."""
        while True:
            try:
                event = self.events.get_nowait()
            except queue.Empty:
                return
            self.now_playing = event.data.song
            self.playback_seconds = 0
            try:
                self.player.play(event.data.stream_url)
            except PlayerError:
                pass