# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""Presentation timing: slot lifecycle, fade and zoom parameters."""

from .state import (
    PictureSlot,
    PresentationState,
    TimingState,
    ZoomDirection,
    aspect_correction,
    cover_size,
    slot_transform,
)
from .timing import SHOW_DURATION, TRANSITION_DURATION, ZOOM_AMOUNT, get_us


__all__ = [
    "SHOW_DURATION",
    "TRANSITION_DURATION",
    "ZOOM_AMOUNT",
    "PictureSlot",
    "PresentationState",
    "TimingState",
    "ZoomDirection",
    "aspect_correction",
    "cover_size",
    "get_us",
    "slot_transform",
]
