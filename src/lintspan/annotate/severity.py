"""Severity classification."""

from __future__ import annotations

from lintspan.annotate.models import Severity


def classify_severity(token: str | None, force_downgrade: bool = False) -> Severity:
    """Map a linter severity token to WARNING or ERROR.

    Only ``error`` (any case) is an error. ``force_downgrade`` reports
    everything as a warning.
    """
    if force_downgrade or token is None:
        return Severity.WARNING
    return Severity.ERROR if token.lower() == "error" else Severity.WARNING
