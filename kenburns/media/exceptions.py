# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""Media-layer exceptions for clean abstraction from library-specific errors.

These exceptions provide a consistent interface for error handling across the
collaborators the source walker drives (aiohttp, Pillow, ElementTree and the
filesystem) without exposing library-specific exception types to the walker.

Design Pattern:
    Collaborators convert library errors into these types at their boundary.
    The walker catches MediaSourceError per visited location, logs it and
    moves on; nothing here ever crosses the delivery channel.
"""


class MediaSourceError(Exception):
    """Base exception for media source errors.

    Attributes:
        source_url: URL or path of the source that caused the error
        error_code: Numeric error code (e.g., errno, HTTP status)
        retryable: Whether the next pass over the source may succeed
    """

    def __init__(
        self,
        message: str,
        source_url: str | None = None,
        error_code: int | None = None,
        retryable: bool = False,
    ):
        super().__init__(message)
        self.source_url = source_url
        self.error_code = error_code
        self.retryable = retryable


class MediaNetworkError(MediaSourceError):
    """Network/HTTP/I/O errors (typically retryable).

    Raised for:
    - HTTP errors (5xx and unexpected statuses)
    - Network connection failures
    - Timeouts, when a timeout is configured
    """

    def __init__(
        self,
        message: str,
        source_url: str | None = None,
        error_code: int | None = None,
        retryable: bool = True,
    ):
        super().__init__(message, source_url, error_code, retryable)


class MediaFormatError(MediaSourceError):
    """Unsupported or oversized content (not retryable).

    Raised for:
    - Content types the walker does not know how to handle
    - Bodies or files over the configured size limit
    """

    def __init__(self, message: str, source_url: str | None = None):
        super().__init__(message, source_url, retryable=False)


class FeedParseError(MediaFormatError):
    """Feed document is not well-formed XML or has no root element."""


class MediaDecodeError(MediaSourceError):
    """Image bytes could not be decoded into an RGBA raster."""

    def __init__(
        self,
        message: str,
        source_url: str | None = None,
        error_code: int | None = None,
        retryable: bool = False,
    ):
        super().__init__(message, source_url, error_code, retryable)


class MediaNotFoundError(MediaSourceError):
    """Media file or resource not found.

    Raised for:
    - Local file vanished between listing and reading
    - HTTP 404 / 410

    Marked retryable because the walker re-reads every source on each pass.
    """

    def __init__(self, message: str, source_url: str | None = None, error_code: int | None = None):
        super().__init__(message, source_url, error_code, retryable=True)
