# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

import logging
import time

from ..presentation.state import PresentationState, slot_transform


class HeadlessRenderer:
    """Drives the state machine without a window; logs what would be drawn."""

    def __init__(self, width: int = 1280, height: int = 720):
        self.width = width
        self.height = height
        self.logger = logging.getLogger("render")
        self.logger.info(f"headless display {width}x{height}")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def poll_events(self) -> bool:
        return True

    def render(self, state: PresentationState, now: int) -> None:
        if not self.logger.isEnabledFor(logging.DEBUG):
            return
        for slot in state.slots():
            sx, sy, alpha = slot_transform(slot, self.aspect_ratio, now)
            self.logger.debug(f"draw {slot.image!r} scale=({sx:.3f}, {sy:.3f}) alpha={alpha:.2f}")

    def tick(self, fps: int) -> None:
        time.sleep(1.0 / fps)

    def close(self) -> None:
        pass
