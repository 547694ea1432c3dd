# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

import time


SHOW_DURATION = 3_000_000  # us a picture is the primary subject
TRANSITION_DURATION = 300_000  # us of cross-fade overlap
ZOOM_AMOUNT = 0.1


def get_us() -> int:
    """Wall-clock time in microseconds."""
    return time.time_ns() // 1000
