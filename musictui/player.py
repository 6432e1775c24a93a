"""Audio playback through an mpv process controlled over its IPC socket."""

from __future__ import annotations

import os
import socket
import subprocess
import time

SOCKET = "/tmp/music-tui-mpv"
SEEK_STEP = 5

_PAUSE_COMMAND = b'{"command": ["cycle", "pause"]}'
_SEEK_FORWARD_COMMAND = b'{"command": ["seek", 5, "relative"]}'
_SEEK_BACKWARD_COMMAND = b'{"command": ["seek", -5, "relative"]}'


class PlayerError(Exception):
    """Raised when mpv cannot be started or controlled."""


class Player:
    """Plays one stream at a time in a background mpv process."""

    def __init__(
        self,
        socket_path: str = SOCKET,
        executable: str = "mpv",
        connect_timeout: float = 2.0,
    ) -> None:
        self.socket_path = socket_path
        self.executable = executable
        self.connect_timeout = connect_timeout
        self.process: subprocess.Popen | None = None
        self.socket: socket.socket | None = None
        self.playing = False

    def __enter__(self) -> Player:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def play(self, url: str) -> None:
        """Start playing a URL, replacing whatever is playing now."""
        previous, self.process = self.process, None
        if previous is not None:
            previous.kill()
            try:
                os.remove(self.socket_path)
            except OSError:
                pass

        try:
            child = subprocess.Popen(
                [
                    self.executable,
                    url,
                    "--no-video",
                    "--quiet",
                    f"--input-ipc-server={self.socket_path}",
                ],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as exc:
            raise PlayerError(f"cannot start {self.executable}: {exc}") from exc

        try:
            conn = self._connect_socket()
        except PlayerError:
            child.kill()
            raise

        self._close_socket()
        self.process = child
        self.socket = conn
        self.playing = True

    def stop(self) -> None:
        """Stop playback and drop the control connection."""
        process, self.process = self.process, None
        if process is not None:
            try:
                process.kill()
            except OSError:
                pass
        self._close_socket()
        self.playing = False

    def toggle_pause(self) -> None:
        """Pause or resume playback."""
        self._send(_PAUSE_COMMAND)
        self.playing = not self.playing

    def seek(self, forward: bool) -> int:
        """Seek five seconds and return the signed offset applied."""
        self._send(_SEEK_FORWARD_COMMAND if forward else _SEEK_BACKWARD_COMMAND)
        return SEEK_STEP if forward else -SEEK_STEP

    def _send(self, command: bytes) -> None:
        if self.socket is None:
            raise PlayerError("mpv is not connected")
        try:
            self.socket.sendall(command + b"\n")
        except OSError as exc:
            raise PlayerError(f"cannot write to mpv: {exc}") from exc

    def _close_socket(self) -> None:
        conn, self.socket = self.socket, None
        if conn is not None:
            try:
                conn.close()
            except OSError:
                pass

    def _connect_socket(self) -> socket.socket:
        deadline = time.monotonic() + self.connect_timeout
        while time.monotonic() < deadline:
            conn = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
            try:
                conn.connect(self.socket_path)
            except OSError:
                conn.close()
                time.sleep(0.05)
            else:
                return conn
        raise PlayerError("Failed to connect to mpv IPC socket")