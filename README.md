# musictui

A small terminal music player. Search an online song catalogue, move through
the results and stream the selected track. Audio is played by `mpv`, which is
started in the background and controlled over its IPC socket
(`/tmp/music-tui-mpv`).

## Requirements

- Python 3.10 or later
- A POSIX system with curses. The player talks to mpv over a Unix socket.
- `mpv` installed and on your `PATH`

## Installation

```
pip install .
```

To run the test suite, install the test extra and run pytest:

```
pip install ".[test]"
pytest
```

## Usage

Start the player:

```
musictui
```

`musictui --help` prints a short description; the command takes no other
options.

The screen has these parts, from top to bottom:

- a title line
- a search box
- a library sidebar next to the main list of songs
- a "Now Playing" panel with a status line (mode, view, current song) and a
  progress bar showing elapsed and total time

When no key is pressed for a second, the elapsed time of the playing song
advances by one second.

### Keys in normal mode

| Key               | Action                          |
|-------------------|---------------------------------|
| `/`               | start typing a search           |
| `Enter`           | play the selected song          |
| `j` / `Down`      | move the selection down         |
| `k` / `Up`        | move the selection up           |
| `1`               | show the queue view             |
| `2`               | show the results view           |
| `p` / `Space`     | pause or resume                 |
| `f` / `Right`     | seek forward 5 seconds          |
| `b` / `Left`      | seek back 5 seconds             |
| `q`               | stop playback and quit          |

### Keys in search mode

| Key         | Action                                   |
|-------------|------------------------------------------|
| any char    | add it to the query                      |
| `Backspace` | remove the last character                |
| `Enter`     | run the search and return to normal mode |
| `Esc`       | leave search mode without searching      |

A search fetches up to twenty songs and replaces the list. If the search
fails, the list is left empty. Songs are streamed at 320 kbps. When a song
reaches its end, playback stops and the status line shows "nothing".

## What it does not do

- The queue view lists the results of the last search; there is no separate
  play queue.
- The results view shows only an empty frame.
- The "Library" sidebar entries and the "Playlists" panel are labels only;
  they cannot be selected and hold no saved songs or playlists.
- Nothing is stored between runs.

## Library use

The catalogue client can be used on its own:

```python
from musictui.songs import search, get_song_with_url

songs = search("coffee")
first = songs[0]
print(first.artist, "-", first.title, first.duration)

track = get_song_with_url(first, 160)
print(track.stream_url)
```

`musictui.songs` also offers `get_song_details`, `get_stream_url`,
`search_and_get_url`, `parse_search_results` (turns a decoded search response
into `Song` objects) and `convert_auth_url` (rewrites a signed media URL into a
CDN URL of the given bitrate; 12, 48, 96, 160 and 320 are supported, anything
else falls back to 320). Network or response problems raise
`musictui.songs.ApiError`.

`musictui.player.Player` starts and controls mpv directly through `play`,
`toggle_pause`, `seek` and `stop`. The socket path, the mpv executable and the
connection timeout can be passed to its constructor, and it can be used as a
context manager that stops playback on exit. It raises
`musictui.player.PlayerError` when mpv cannot be started or reached.

`musictui.app.App` holds the application state and reacts to
`musictui.app.Action` values through `handle_action`; `musictui.ui.draw`
renders it onto a curses window.