# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""pygame host for the presentation state machine.

Each slot is drawn as a full-viewport picture scaled by its aspect correction
and zoom, centred, with the slot's alpha applied to the whole surface.
"""

import logging
from typing import Optional

import numpy as np
import pygame

from ..media.images import Image
from ..presentation.state import PictureSlot, PresentationState, cover_size, slot_transform


def image_to_surface(image: Image, max_size: Optional[tuple[int, int]] = None) -> pygame.Surface:
    """Convert a decoded Image into a display-format surface.

    Image rows are stored bottom-up; pygame wants them top-down. When
    max_size is given and the image is larger, it is scaled down once here
    so per-frame scaling works on the smaller surface.
    """
    pixels = np.ascontiguousarray(image.pixels[::-1])
    surface = pygame.image.frombuffer(pixels.tobytes(), (image.width, image.height), "RGBA")
    if max_size is not None and image.width > max_size[0] and image.height > max_size[1]:
        surface = pygame.transform.smoothscale(surface, max_size)
    if pygame.display.get_surface() is not None:
        surface = surface.convert()
    return surface


class PygameRenderer:
    """Window owning the display; only the foreground thread may use it."""

    def __init__(self, width: int, height: int, fullscreen: bool = True, title: str = "KenBurns"):
        pygame.init()
        pygame.display.set_caption(title)
        if fullscreen:
            self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
            pygame.mouse.set_visible(False)
        else:
            self.screen = pygame.display.set_mode((width, height))
        self.clock = pygame.time.Clock()
        w, h = self.screen.get_size()
        logging.getLogger("render").info(f"display {w}x{h} fullscreen={fullscreen}")

    @property
    def aspect_ratio(self) -> float:
        w, h = self.screen.get_size()
        return w / h

    def poll_events(self) -> bool:
        """Drain window events; False once the user asked to quit."""
        running = True
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                running = False
            elif e.type == pygame.KEYUP and e.key in (pygame.K_ESCAPE, pygame.K_q):
                running = False
        return running

    def render(self, state: PresentationState, now: int) -> None:
        self.screen.fill((0, 0, 0))
        for slot in state.slots():
            self._render_picture(slot, now)
        pygame.display.flip()

    def _render_picture(self, slot: PictureSlot, now: int) -> None:
        if slot.texture is None:
            # largest size the slot is drawn at: the start of a zoom out
            max_size = cover_size(self.screen.get_size(), slot.image.aspect_ratio, 1.0 + slot.timing.zoom_amount)
            slot.texture = image_to_surface(slot.image, max_size)

        sw, sh = self.screen.get_size()
        sx, sy, alpha = slot_transform(slot, self.aspect_ratio, now)
        w, h = max(int(sw * sx), 1), max(int(sh * sy), 1)

        surf = pygame.transform.smoothscale(slot.texture, (w, h))
        surf.set_alpha(int(alpha * 255))
        self.screen.blit(surf, ((sw - w) // 2, (sh - h) // 2))

    def tick(self, fps: int) -> None:
        self.clock.tick(fps)

    def close(self) -> None:
        pygame.quit()
