# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

"""Source walker: expands root locations into an endless stream of decoded images.

Directories are listed on every pass and visited in case-insensitive path
order; HTTP endpoints are fetched on every pass and dispatched on their
declared content type (image -> decode, XML feed -> visit each enclosure).
A failure while visiting one location is logged and ends only that visit.
"""

import asyncio
import logging
import os
import stat
import time
from collections.abc import Callable, Sequence
from typing import Optional

import aiohttp

from ..config import Config
from .exceptions import MediaSourceError
from .feeds import is_feed_content_type, resolve_enclosures
from .http import create_session, fetch
from .images import Image, decode_image, is_image_content_type, is_jpeg_filename, load_image_file
from .sources import Location


def directory_sort_key(path: str) -> tuple[str, bytes]:
    """Case-insensitive key over the resolved path; the raw path bytes break ties."""
    resolved = os.path.realpath(path)
    return resolved.casefold(), os.fsencode(resolved)


def list_directory(path: str) -> list[str]:
    """Entries of a directory as joined paths, in traversal order."""
    entries = [os.path.join(path, name) for name in os.listdir(path)]
    entries.sort(key=directory_sort_key)
    return entries


class SourceWalker:
    """Visits the roots forever, handing every decoded image to send().

    Args:
        roots: root locations, visited in the given order on every pass
        send: blocking handoff for decoded images (the channel's send)
        session: aiohttp session to reuse; created by run_loop() when omitted
        max_depth: optional recursion limit through directories and feeds
    """

    def __init__(
        self,
        roots: Sequence[Location],
        send: Callable[[Image], None],
        session: Optional[aiohttp.ClientSession] = None,
        max_depth: Optional[int] = None,
    ):
        self.roots = list(roots)
        self._send = send
        self.session = session
        self.max_depth = max_depth
        self.logger = logging.getLogger("walker")

        self.passes = 0
        self.images_emitted = 0
        self.failures = 0

    async def run_loop(self) -> None:
        """Cycle over the roots forever. Never returns."""
        if not self.roots:
            raise ValueError("SourceWalker needs at least one root location")

        pass_delay_s = Config().get("walker.pass_delay_s")
        owns_session = self.session is None
        if owns_session:
            self.session = create_session()
        try:
            while True:
                for root in self.roots:
                    await self.visit(root)
                self.passes += 1
                self.logger.debug(
                    f"pass {self.passes} complete: emitted={self.images_emitted} failures={self.failures}"
                )
                # yield to the loop so a pass with nothing visitable cannot starve it
                await asyncio.sleep(pass_delay_s or 0)
        finally:
            if owns_session:
                await self.close()

    async def close(self) -> None:
        if self.session is not None:
            await self.session.close()
            self.session = None

    async def visit(self, location: Location, depth: int = 0, ancestors: frozenset[str] = frozenset()) -> None:
        """Visit one location; failures are logged and end only this visit.

        ancestors holds the locations on the current visit path, so a feed
        that lists itself (directly or through other feeds) is cut off.
        """
        if self.max_depth is not None and depth > self.max_depth:
            self.logger.warning(f"max depth {self.max_depth} exceeded at {location}, skipping")
            return
        if location.value in ancestors:
            self.failures += 1
            self.logger.warning(f"skipping {location}: already being visited (cycle)")
            return

        try:
            if location.is_http:
                await self._visit_url(location, depth, ancestors | {location.value})
            else:
                await self._visit_path(location, depth, ancestors | {location.value})
        except MediaSourceError as e:
            self.failures += 1
            kind = "transient" if e.retryable else "permanent"
            self.logger.warning(f"skipping {location} ({kind}): {e}")
        except RecursionError:
            self.failures += 1
            self.logger.warning(f"skipping {location}: nesting too deep")

    async def _visit_url(self, location: Location, depth: int, ancestors: frozenset[str]) -> None:
        if self.session is None:
            self.session = create_session()

        self.logger.info(f"Fetching {location}...")
        response = await fetch(self.session, location.value)

        if is_image_content_type(response.content_type):
            t1 = time.perf_counter()
            image = decode_image(response.body, location.value)
            self.logger.debug(f"decoded {location.display_name} in {(time.perf_counter() - t1) * 1e6:.0f} us")
            self.emit(image)
        elif is_feed_content_type(response.content_type):
            # relative references resolve against where the feed was served from
            ancestors = ancestors | {response.url}
            for enclosure in resolve_enclosures(response.body, response.url):
                child = Location.parse(enclosure)
                if not child.is_http:
                    self.logger.warning(f"skipping enclosure {enclosure!r} in {location}: not an HTTP(S) URL")
                    continue
                await self.visit(child, depth + 1, ancestors)
        else:
            self.logger.warning(f"skipping {location}: unsupported content type {response.content_type!r}")

    async def _visit_path(self, location: Location, depth: int, ancestors: frozenset[str]) -> None:
        path = location.value
        try:
            st = os.stat(path)  # follows symlinks
        except (OSError, ValueError) as e:
            # ValueError: embedded NUL byte
            self.logger.debug(f"skipping {path!r}: {getattr(e, 'strerror', None) or e}")
            return

        if stat.S_ISREG(st.st_mode):
            if not is_jpeg_filename(path):
                self.logger.debug(f"skipping {path}: not a JPEG file")
                return
            self.logger.info(f"Loading file {path}...")
            self.emit(load_image_file(path))
        elif stat.S_ISDIR(st.st_mode):
            try:
                entries = list_directory(path)
            except OSError as e:
                self.failures += 1
                self.logger.warning(f"cannot list {path}: {e.strerror}")
                return
            for entry in entries:
                await self.visit(Location.path(entry), depth + 1, ancestors)
        else:
            self.logger.debug(f"skipping {path}: not a file or directory")

    def emit(self, image: Image) -> None:
        """Hand an image over; blocks the walker until the consumer takes it."""
        t1 = time.perf_counter()
        self._send(image)
        self.images_emitted += 1
        self.logger.debug(f"delivered {image!r} after waiting {(time.perf_counter() - t1) * 1000:.0f} ms")
