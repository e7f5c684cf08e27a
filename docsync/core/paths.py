"""Path helpers."""

import os


def resolve_home(path: str) -> str:
    """Expand a leading ``~`` to the current user's $HOME.

    Anything after the marker is joined onto the home directory, so
    ``~/docs/notes.org`` becomes ``$HOME/docs/notes.org``. Paths that do not
    start with ``~`` are returned unchanged.
    """
    if not path.startswith("~"):
        return path

    home = os.environ["HOME"]
    rest = path[1:].lstrip("/")
    return os.path.join(home, rest) if rest else home
