"""Terminal music player that searches a song catalogue and streams through mpv."""

__version__ = "0.1.0"
__all__ = ["__version__"]