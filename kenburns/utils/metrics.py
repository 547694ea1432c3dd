# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

import logging
import math


class RateMeter:
    """Rolling rate/jitter meter using a short timestamp window."""

    def __init__(self, window_s: float = 2.5):
        self.window_s = float(window_s)
        self.ts: list[float] = []

    def tick(self, t: float) -> None:
        """Record a timestamp (seconds)."""
        self.ts.append(t)
        cut = t - self.window_s
        i = 0
        for i, v in enumerate(self.ts):  # noqa: B007
            if v >= cut:
                break
        if i > 0:
            del self.ts[:i]

    def rate_hz(self) -> float:
        """Calculate current rate in Hz."""
        n = len(self.ts)
        if n < 2:
            return 0.0
        duration = self.ts[-1] - self.ts[0]
        return (n - 1) / duration if duration > 0 else 0.0

    def jitter_ms(self) -> float:
        """Calculate timing jitter in milliseconds."""
        n = len(self.ts)
        if n < 3:
            return 0.0
        diffs = [(self.ts[i] - self.ts[i - 1]) for i in range(1, n)]
        mean = sum(diffs) / len(diffs)
        var = sum((d - mean) ** 2 for d in diffs) / (len(diffs) - 1)
        return math.sqrt(var) * 1000.0


class FrameCounter:
    """Counts rendered frames and logs the count once per interval.

    Args:
        interval_us: reporting interval in microseconds
        now: timestamp (microseconds) the first interval starts at
    """

    def __init__(self, interval_us: int, now: int):
        self.interval_us = interval_us
        self.last_reset = now
        self.ticks = 0
        self.last_count = 0
        self.meter = RateMeter()

    def tick(self, now: int) -> bool:
        """Record one frame; returns True when the interval rolled over and was logged."""
        rolled = False
        if now >= self.last_reset + self.interval_us:
            logging.getLogger("metrics").info(
                f"{self.ticks} frames ({self.meter.rate_hz():.1f} fps, jitter {self.meter.jitter_ms():.1f}ms)"
            )
            self.last_count = self.ticks
            self.ticks = 0
            self.last_reset = now
            rolled = True

        self.ticks += 1
        self.meter.tick(now / 1_000_000)
        return rolled
