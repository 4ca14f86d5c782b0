"""Exception types raised by the scanner core and its collaborators."""

from __future__ import annotations


class TubeScanError(Exception):
    """Base class for every error raised by tubescan."""


class InvalidReference(TubeScanError, ValueError):
    """The input is not a usable reference to a YouTube channel or video."""


class InvalidReferenceKind(InvalidReference):
    """The URL cannot be parsed or does not point at a YouTube host."""


class UnsupportedFormat(InvalidReference):
    """YouTube host, but no known channel/video path pattern matched."""


class DataSourceError(TubeScanError):
    """The YouTube Data API failed or returned nothing for the request."""

    def __init__(self, message: str, status: int = 502):
        super().__init__(message)
        self.status = status


class QuotaExceeded(DataSourceError):
    def __init__(self, message: str = "YouTube API quota exceeded. Wait until midnight PT or use a different API key."):
        super().__init__(message, status=429)


class AiRequestError(TubeScanError):
    """The text-generation service failed or returned an empty answer."""
