"""Error taxonomy for upstream provider calls.

Structural failures (missing credentials, unreachable or rejecting upstreams)
raise one of these. Malformed individual fields never do: the normalizers
absorb them.
"""
from __future__ import annotations

from typing import Optional


class MoversError(Exception):
    """Base class for all errors surfaced to API consumers."""


class ConfigurationError(MoversError):
    """A required setting, such as a provider credential, is missing."""


class UpstreamError(MoversError):
    def __init__(self, provider: str, message: str):
        super().__init__(message)
        self.provider = provider


class UpstreamTransportError(UpstreamError):
    """The upstream call failed at the transport level or returned a non-success status."""

    def __init__(self, provider: str, message: str, status_code: Optional[int] = None):
        super().__init__(provider, message)
        self.status_code = status_code


class UpstreamBusinessError(UpstreamError):
    """The upstream answered, but with a note or message instead of data."""
