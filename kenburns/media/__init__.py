# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""Media handling modules for locations, decoding, feeds and the source walker."""

# Media-layer exceptions (clean abstraction from library-specific errors)
from .exceptions import (
    FeedParseError,
    MediaDecodeError,
    MediaFormatError,
    MediaNetworkError,
    MediaNotFoundError,
    MediaSourceError,
)
from .feeds import is_feed_content_type, resolve_enclosures, resolve_reference
from .images import Image, decode_image, is_image_content_type, is_jpeg_filename, load_image_file
from .sources import Location, LocationKind
from .walker import SourceWalker, directory_sort_key, list_directory


__all__ = [
    "FeedParseError",
    "Image",
    "Location",
    "LocationKind",
    "MediaDecodeError",
    "MediaFormatError",
    "MediaNetworkError",
    "MediaNotFoundError",
    "MediaSourceError",
    "SourceWalker",
    "decode_image",
    "directory_sort_key",
    "is_feed_content_type",
    "is_image_content_type",
    "is_jpeg_filename",
    "list_directory",
    "load_image_file",
    "resolve_enclosures",
    "resolve_reference",
]
