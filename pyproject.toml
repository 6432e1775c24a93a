[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "musictui"
version = "0.1.0"
description = "A terminal music player that searches an online catalogue and streams tracks through mpv"
requires-python = ">=3.10"
dependencies = [
    "requests",
]
keywords = ["music", "tui", "terminal", "player", "mpv", "curses", "streaming"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Players",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[project.scripts]
musictui = "musictui.main:main"

[tool.hatch.build.targets.wheel]
packages = ["musictui"]

[tool.pytest.ini_options]
addopts = "-ra"
