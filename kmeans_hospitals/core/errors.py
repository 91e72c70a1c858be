"""Error taxonomy for the dashboard.

Every failure that can reach a user is a :class:`KMeansDashboardError`;
the Dash callbacks catch that base class and show ``str(exc)`` in the
error banner.
"""

from __future__ import annotations


class KMeansDashboardError(Exception):
    """Base class for errors surfaced to the user as a single message."""


class TransportError(KMeansDashboardError):
    """Network failure or a non-2xx response from the K-Means API."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class DecodeError(KMeansDashboardError):
    """The API answered with malformed JSON or an unexpected payload shape."""


class InvariantViolation(KMeansDashboardError):
    """Assignments do not line up with neighborhoods or hospitals."""
