# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

import asyncio
import logging
import threading
from collections.abc import Sequence

from ..config import Config
from ..media.images import Image
from ..media.sources import Location
from ..media.walker import SourceWalker
from .channel import RendezvousChannel


class SourceWorker(threading.Thread):
    """Background thread running the source walker on its own event loop.

    The thread is a daemon: it runs until the process exits, blocking on
    network/disk I/O and on the channel's send() without ever touching the
    foreground loop.
    """

    def __init__(self, roots: Sequence[Location], channel: RendezvousChannel[Image]):
        super().__init__(name="source-walker", daemon=True)
        self.channel = channel
        self.walker = SourceWalker(
            roots,
            channel.send,
            max_depth=Config().get("walker.max_depth"),
        )

    def run(self) -> None:
        logger = logging.getLogger("streaming")
        logger.info(f"source walker started with {len(self.walker.roots)} roots")
        try:
            asyncio.run(self.walker.run_loop())
        except Exception as e:
            logger.error(f"source walker crashed: {e!r}", exc_info=True)


def start_source_worker(roots: Sequence[Location], channel: RendezvousChannel[Image]) -> SourceWorker:
    """Create and start the walker thread feeding channel."""
    worker = SourceWorker(roots, channel)
    worker.start()
    return worker
