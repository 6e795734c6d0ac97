"""Exceptions raised by the SiteCheck client."""

from typing import Optional


class SiteCheckError(Exception):
    """Base class for every error surfaced to the CLI."""


class MalformedResponse(SiteCheckError):
    """The API answered with something that is not a valid scan report.

    The undecoded payload is kept in ``raw`` so the caller can show it.
    """

    def __init__(self, message: str, raw: bytes = b""):
        super().__init__(message)
        self.raw = raw


class TransportFailure(SiteCheckError):
    """Network or HTTP level failure while talking to the API."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
