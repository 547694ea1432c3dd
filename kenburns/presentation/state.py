# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""Two-slot presentation state machine.

A slot becomes `next` when a decoded image is polled from the pipeline, fades
in over the transition window while `current` keeps zooming underneath, and
is promoted to `current` once the fade has completed. Polling starts again
when `current` enters its final transition window; if nothing is available
the current picture simply lingers.
"""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from ..media.images import Image
from .timing import SHOW_DURATION, TRANSITION_DURATION, ZOOM_AMOUNT, get_us


class ZoomDirection(Enum):
    IN = "in"
    OUT = "out"

    def __invert__(self) -> "ZoomDirection":
        return ZoomDirection.OUT if self is ZoomDirection.IN else ZoomDirection.IN


@dataclass
class TimingState:
    """Per-slot timing; every derived value is a pure function of now - start."""

    start_us: int
    zoom_direction: ZoomDirection
    show_duration: int = SHOW_DURATION
    transition_duration: int = TRANSITION_DURATION
    zoom_amount: float = ZOOM_AMOUNT

    def age(self, now: int) -> int:
        return max(now - self.start_us, 0)

    def has_transitioned(self, now: int) -> bool:
        """True once the fade-in has fully completed."""
        return self.age(now) > self.transition_duration

    def overflowing_t(self, now: int) -> float:
        """Fraction of the show duration elapsed; exceeds 1.0 when lingering."""
        return self.age(now) / self.show_duration

    def alpha(self, now: int) -> float:
        """Linear fade-in over the transition window, then held at 1."""
        return min(self.age(now) / self.transition_duration, 1.0)

    def zoom(self, now: int) -> float:
        t = self.overflowing_t(now)
        if self.zoom_direction is ZoomDirection.IN:
            # linear zoom in, keeps growing while lingering
            time_zoom = t
        else:
            # easing zoom out that stops at 1.0 before borders would show
            time_zoom = max(1.0 - t, 0.0) ** 2
        return 1.0 + self.zoom_amount * time_zoom


@dataclass(eq=False)
class PictureSlot:
    image: Image
    timing: TimingState
    # renderer-owned cache (e.g. a converted surface), filled lazily
    texture: Any = field(default=None, repr=False)


def aspect_correction(viewport_aspect: float, image_aspect: float) -> tuple[float, float]:
    """Scale factors (x, y) that make the image cover the viewport without distortion."""
    if viewport_aspect > image_aspect:
        # too wide, stretch y
        return 1.0, viewport_aspect / image_aspect
    # too tall, stretch x
    return image_aspect / viewport_aspect, 1.0


def cover_size(viewport: tuple[int, int], image_aspect: float, zoom: float = 1.0) -> tuple[int, int]:
    """Pixel size of a picture drawn to cover the viewport at the given zoom."""
    vw, vh = viewport
    sx, sy = aspect_correction(vw / vh, image_aspect)
    return max(math.ceil(vw * sx * zoom), 1), max(math.ceil(vh * sy * zoom), 1)


def slot_transform(slot: PictureSlot, viewport_aspect: float, now: int) -> tuple[float, float, float]:
    """(scale_x, scale_y, alpha) for drawing a slot as a full-viewport quad."""
    sx, sy = aspect_correction(viewport_aspect, slot.image.aspect_ratio)
    zoom = slot.timing.zoom(now)
    return sx * zoom, sy * zoom, slot.timing.alpha(now)


class PresentationState:
    """Current/next picture slots driven by a non-blocking image poll.

    Args:
        poll: returns a decoded Image if one is ready, else None; must not block
        show_duration: us a slot is the primary subject
        transition_duration: us of cross-fade overlap, shorter than show_duration
        zoom_amount: maximum extra scale added by the zoom
        clock: microsecond clock used when update() is called without a time
    """

    def __init__(
        self,
        poll: Callable[[], Optional[Image]],
        show_duration: int = SHOW_DURATION,
        transition_duration: int = TRANSITION_DURATION,
        zoom_amount: float = ZOOM_AMOUNT,
        clock: Callable[[], int] = get_us,
    ):
        if not 0 < transition_duration < show_duration:
            raise ValueError(
                f"transition_duration ({transition_duration}) must be positive and shorter "
                f"than show_duration ({show_duration})"
            )
        self._poll = poll
        self.show_duration = show_duration
        self.transition_duration = transition_duration
        self.zoom_amount = zoom_amount
        self.clock = clock
        self.current: Optional[PictureSlot] = None
        self.next: Optional[PictureSlot] = None
        self.logger = logging.getLogger("presentation")

        self.created = 0
        self.rotations = 0
        self.starved_polls = 0

    def _wants_next(self, now: int) -> bool:
        if self.next is not None:
            return False
        if self.current is None:
            return True
        return now - self.current.timing.start_us >= self.show_duration - self.transition_duration

    def update(self, now: Optional[int] = None) -> bool:
        """Advance the slots by one tick. Never blocks; always returns True."""
        if now is None:
            now = self.clock()

        if self.next is not None and self.next.timing.has_transitioned(now):
            self.current = self.next
            self.next = None
            self.rotations += 1
            self.logger.debug(f"rotated to {self.current.image!r}")
        elif self._wants_next(now):
            image = self._poll()
            if image is None:
                self.starved_polls += 1
            else:
                self.next = self._new_slot(image, now)

        return True

    def _new_slot(self, image: Image, now: int) -> PictureSlot:
        if self.current is None:
            direction = ZoomDirection.OUT
        else:
            direction = ~self.current.timing.zoom_direction
        self.created += 1
        self.logger.info(f"showing {image!r} zoom={direction.value}")
        return PictureSlot(
            image,
            TimingState(
                start_us=now,
                zoom_direction=direction,
                show_duration=self.show_duration,
                transition_duration=self.transition_duration,
                zoom_amount=self.zoom_amount,
            ),
        )

    def slots(self) -> list[PictureSlot]:
        """Slots in drawing order: current below, next fading in on top."""
        return [slot for slot in (self.current, self.next) if slot is not None]
