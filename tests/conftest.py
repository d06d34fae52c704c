"""Root conftest.py for test configuration.

Ensures local src/ directory takes priority over any installed packages.
"""

import sys
from collections.abc import Callable
from pathlib import Path

import pytest

# Insert local src directory at the beginning of sys.path
_src_dir = Path(__file__).parent.parent / "src"
if str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

from lintspan.annotate.buffer import DocumentBuffer  # noqa: E402


@pytest.fixture
def make_buffer() -> Callable[..., DocumentBuffer]:
    """Build a DocumentBuffer from lines joined with newlines."""

    def _make(*lines: str, path: str | None = None) -> DocumentBuffer:
        return DocumentBuffer.from_text("\n".join(lines), path=path)

    return _make
