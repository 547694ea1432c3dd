# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""
Shared pytest fixtures for kenburns tests.
"""
from io import BytesIO

import pytest
from PIL import Image

from kenburns.config import Config


def encode_image(size=(16, 8), color=(200, 30, 30), fmt="JPEG") -> bytes:
    """Encode a solid-colour test image."""
    buf = BytesIO()
    Image.new("RGB", size, color).save(buf, format=fmt)
    return buf.getvalue()


@pytest.fixture(autouse=True)
def default_config():
    """Every test starts from the default configuration."""
    Config.load(None)
    yield Config()
    Config.load(None)


@pytest.fixture
def jpeg_bytes():
    return encode_image()


@pytest.fixture
def write_jpeg():
    """Write a small JPEG to a path, creating parent directories."""

    def _write(path, size=(16, 8)):
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(encode_image(size))
        return path

    return _write


@pytest.fixture
def make_image_bytes():
    return encode_image
