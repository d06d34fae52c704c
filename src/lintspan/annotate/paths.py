"""Path matching between linter output and the annotated buffer."""

from __future__ import annotations

import os
from collections.abc import Iterable

# Linter path for content read from stdin
STDIN_PATH = "-"


def is_same_file(reference: str, candidate: str) -> bool:
    """True if ``candidate`` names the same file as ``reference``.

    Both paths are made absolute before comparison. The stdin marker always
    matches, since the buffer itself was piped to the linter.
    """
    if candidate == STDIN_PATH:
        return True
    return os.path.abspath(reference) == os.path.abspath(candidate)


def is_lintable_file(path: str, extensions: Iterable[str] = (".styl",)) -> bool:
    """True if ``path`` has one of the linter's source extensions."""
    _, ext = os.path.splitext(path)
    return ext in set(extensions)
