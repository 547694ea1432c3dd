# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""Surface conversion for the pygame host."""
import numpy as np
import pytest

pygame = pytest.importorskip("pygame")

from kenburns.media.images import Image  # noqa: E402
from kenburns.render.pygame_renderer import image_to_surface  # noqa: E402


def make_image(width, height):
    pixels = np.zeros((height, width, 4), dtype=np.uint8)
    # bottom row (stored first) red, everything else blue
    pixels[..., 2] = 255
    pixels[..., 3] = 255
    pixels[0, :] = (255, 0, 0, 255)
    pixels.setflags(write=False)
    return Image(width=width, height=height, pixels=pixels, source="test")


def test_rows_are_flipped_back_to_top_down():
    surface = image_to_surface(make_image(4, 3))

    assert surface.get_size() == (4, 3)
    assert tuple(surface.get_at((0, 2)))[:3] == (255, 0, 0)
    assert tuple(surface.get_at((0, 0)))[:3] == (0, 0, 255)


def test_large_image_is_scaled_down_once():
    surface = image_to_surface(make_image(400, 300), max_size=(40, 30))
    assert surface.get_size() == (40, 30)


def test_small_image_is_not_scaled_up():
    surface = image_to_surface(make_image(40, 30), max_size=(400, 300))
    assert surface.get_size() == (40, 30)
