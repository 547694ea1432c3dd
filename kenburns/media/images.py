# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

import logging
import time
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

import numpy as np
from PIL import Image as PILImage
from PIL import UnidentifiedImageError

from ..config import Config
from .exceptions import MediaDecodeError, MediaFormatError, MediaNotFoundError, MediaSourceError


JPEG_EXTENSIONS = (".jpg", ".jpeg")

# Raster MIME types treated like image/jpeg on the HTTP path
IMAGE_CONTENT_TYPES = frozenset({
    "image/jpeg",
    "image/jpg",
    "image/pjpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "image/bmp",
})


def _format_size_mb(size_bytes: int) -> str:
    """Format size in bytes as MB string."""
    return f"{size_bytes / 1024 / 1024:.1f}MB"


def media_type(content_type: str | None) -> str:
    """Strip parameters from a Content-Type value and lowercase it."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()


def is_image_content_type(content_type: str | None) -> bool:
    return media_type(content_type) in IMAGE_CONTENT_TYPES


def is_jpeg_filename(name: str) -> bool:
    return name.lower().endswith(JPEG_EXTENSIONS)


@dataclass(frozen=True, eq=False)
class Image:
    """Decoded RGBA8 raster, rows flipped so row 0 is the bottom of the picture.

    The pixel array is read-only; an Image has exactly one owner at a time and
    is handed over whole through the delivery channel.
    """

    width: int
    height: int
    pixels: np.ndarray
    source: str = ""

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def __repr__(self) -> str:
        return f"Image({self.width}x{self.height}, source={self.source!r})"


def decode_image(data: bytes, source: str = "", flip: bool = True) -> Image:
    """Decode compressed image bytes into an RGBA8 Image.

    Args:
        data: encoded image (JPEG at minimum; anything Pillow reads works)
        source: path or URL the bytes came from, kept for diagnostics
        flip: store rows bottom-up, matching GL texture coordinates

    Raises:
        MediaDecodeError: Pillow could not identify or decode the data
    """
    try:
        with PILImage.open(BytesIO(data)) as pil_img:
            rgba = pil_img.convert("RGBA")
    except (UnidentifiedImageError, PILImage.DecompressionBombError, OSError, SyntaxError, ValueError) as e:
        raise MediaDecodeError(f"cannot decode image: {e}", source) from e

    pixels = np.asarray(rgba, dtype=np.uint8)
    if flip:
        pixels = pixels[::-1]
    pixels = np.ascontiguousarray(pixels)
    pixels.setflags(write=False)

    height, width = pixels.shape[:2]
    if width == 0 or height == 0:
        raise MediaDecodeError(f"image has no pixels: {width}x{height}", source)
    return Image(width=width, height=height, pixels=pixels, source=source)


def load_image_file(path: str) -> Image:
    """Read and decode a local image file.

    Raises:
        MediaNotFoundError: the file disappeared before it could be read
        MediaFormatError: the file exceeds image.max_bytes
        MediaSourceError: any other I/O failure
        MediaDecodeError: the content is not a decodable image
    """
    logger = logging.getLogger("images")
    max_bytes = Config().get("image.max_bytes")
    path_obj = Path(path)

    t1 = time.perf_counter()
    try:
        file_size = path_obj.stat().st_size
        if file_size > max_bytes:
            raise MediaFormatError(
                f"Image too large: {_format_size_mb(file_size)} (max {_format_size_mb(max_bytes)})", path
            )
        data = path_obj.read_bytes()
    except FileNotFoundError as e:
        raise MediaNotFoundError(f"cannot open source: {path}", path) from e
    except OSError as e:
        raise MediaSourceError(f"cannot read {path}: {e}", path, error_code=e.errno) from e
    t2 = time.perf_counter()

    image = decode_image(data, path)
    t3 = time.perf_counter()
    logger.debug(
        f"loaded {path_obj.name} {image.width}x{image.height} in "
        f"{(t2 - t1) * 1e6:.0f} + {(t3 - t2) * 1e6:.0f} us"
    )
    return image
