"""Song search and stream URL resolution against the JioSaavn web API."""

from __future__ import annotations

import html
import re
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import requests

API_URL = "https://www.jiosaavn.com/api.php"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:109.0) Gecko/20100101 Firefox/121.0"
)
DEFAULT_BITRATE = 320
REQUEST_TIMEOUT = 30.0

UNKNOWN_ARTIST = "Unknown Artist"
UNKNOWN_ALBUM = "Unknown Album"

_SUPPORTED_BITRATES = frozenset({12, 48, 96, 160, 320})
_QUALITY_SUFFIX = re.compile(r"_\d+\.mp4")
_CDN_HOST_REWRITES = (
    ("web.saavncdn.com", "aac.saavncdn.com"),
    ("ac.cf.saavncdn.com", "aac.saavncdn.com"),
    ("aac.cf.saavncdn.com", "aac.saavncdn.com"),
)
_U64_LIMIT = 2**64


class ApiError(Exception):
    """Raised when the music API cannot be reached or answers unexpectedly."""


@dataclass(frozen=True)
class Song:
    """A track found by a search."""

    id: str
    title: str
    artist: str
    album: str
    duration: int


@dataclass(frozen=True)
class SongWithUrl:
    """A track together with a URL its audio can be streamed from."""

    song: Song
    stream_url: str


def _get_json(url: str) -> Any:
    try:
        response = requests.get(
            url, headers={"User-Agent": USER_AGENT}, timeout=REQUEST_TIMEOUT
        )
        return response.json()
    except (requests.RequestException, ValueError) as exc:
        raise ApiError(f"request to music API failed: {exc}") from exc


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def _parse_duration(value: Any) -> int:
    if not isinstance(value, str):
        return 0
    digits = value[1:] if value.startswith("+") else value
    if not (digits.isascii() and digits.isdigit()):
        return 0
    number = int(digits)
    return number if number < _U64_LIMIT else 0


def _parse_song(entry: Any) -> Song:
    if not isinstance(entry, dict):
        raise ApiError("search result entry is not an object")
    song_id = entry.get("id")
    title = entry.get("title")
    if not isinstance(song_id, str) or not isinstance(title, str):
        raise ApiError("search result entry lacks an id or a title")

    more_info = _as_dict(entry.get("more_info"))
    primary = _as_dict(more_info.get("artistMap")).get("primary_artists") or []
    artist = UNKNOWN_ARTIST
    if isinstance(primary, list) and primary:
        name = _as_dict(primary[0]).get("name")
        if isinstance(name, str):
            artist = name
    album = more_info.get("album")
    if not isinstance(album, str):
        album = UNKNOWN_ALBUM

    return Song(
        id=song_id,
        title=html.unescape(title),
        artist=html.unescape(artist),
        album=html.unescape(album),
        duration=_parse_duration(more_info.get("duration")),
    )


def parse_search_results(data: Any) -> list[Song]:
    """Turn a decoded search response into songs."""
    results = _as_dict(data).get("results")
    if not isinstance(results, list):
        raise ApiError("search response has no result list")
    return [_parse_song(entry) for entry in results]


def convert_auth_url(auth_url: str, bitrate: int) -> str:
    """Rewrite a signed media URL into a plain CDN URL of the given quality."""
    suffix = str(bitrate) if bitrate in _SUPPORTED_BITRATES else str(DEFAULT_BITRATE)
    converted = auth_url.split("?", 1)[0]
    for old, new in _CDN_HOST_REWRITES:
        converted = converted.replace(old, new)
    return _QUALITY_SUFFIX.sub(lambda _m: f"_{suffix}.mp4", converted, count=1)


def search(query: str) -> list[Song]:
    """Search the catalogue and return up to twenty songs."""
    encoded_query = query.replace(" ", "+")
    url = (
        f"{API_URL}?p=1&q={encoded_query}&_format=json&_marker=0"
        "&api_version=4&ctx=web6dot0&n=20&__call=search.getResults"
    )
    return parse_search_results(_get_json(url))


def get_song_details(song_id: str) -> str:
    """Return the encrypted media URL of a song."""
    url = (
        f"{API_URL}?__call=song.getDetails&pids={song_id}"
        "&api_version=4&_format=json&_marker=0&ctx=web6dot0"
    )
    songs = _as_dict(_get_json(url)).get("songs")
    if isinstance(songs, list) and songs:
        more_info = _as_dict(_as_dict(songs[0]).get("more_info"))
        encrypted = more_info.get("encrypted_media_url")
        if isinstance(encrypted, str):
            return encrypted
    raise ApiError("Failed to get encrypted media URL")


def get_stream_url(encrypted_url: str, bitrate: int) -> str:
    """Exchange an encrypted media URL for a streamable one."""
    url = (
        f"{API_URL}?__call=song.generateAuthToken&url={quote(encrypted_url, safe='')}"
        f"&bitrate={bitrate}&api_version=4&_format=json&ctx=web6dot0&_marker=0"
    )
    auth_url = _as_dict(_get_json(url)).get("auth_url")
    if not isinstance(auth_url, str):
        raise ApiError("Failed to get auth URL")
    return convert_auth_url(auth_url, bitrate)


def get_song_with_url(song: Song, bitrate: int) -> SongWithUrl:
    """Resolve the stream URL of a song."""
    encrypted_url = get_song_details(song.id)
    return SongWithUrl(song=song, stream_url=get_stream_url(encrypted_url, bitrate))


def search_and_get_url(query: str, bitrate: int) -> SongWithUrl:
    """Search and resolve the stream URL of the first hit."""
    songs = search(query)
    if not songs:
        raise ApiError("No songs found")
    return get_song_with_url(songs[0], bitrate)