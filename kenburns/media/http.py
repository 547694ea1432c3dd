# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

import asyncio
import logging
from dataclasses import dataclass

import aiohttp

from ..config import Config
from .exceptions import MediaFormatError, MediaNetworkError, MediaNotFoundError


@dataclass
class HttpResponse:
    """A fully read GET response; url is where it was served from after redirects."""

    url: str
    status: int
    content_type: str
    body: bytes


def create_session() -> aiohttp.ClientSession:
    """Create the session shared by every fetch of one walker run.

    Must be called with a running event loop.
    """
    config = Config()
    timeout_s = config.get("net.timeout_s")
    return aiohttp.ClientSession(
        headers={"User-Agent": config.get("net.user_agent")},
        timeout=aiohttp.ClientTimeout(total=timeout_s),
    )


async def fetch(session: aiohttp.ClientSession, url: str, max_bytes: int | None = None) -> HttpResponse:
    """GET a URL and read its body.

    Raises:
        MediaNotFoundError: HTTP 404/410
        MediaNetworkError: other non-2xx statuses, connection failures, timeouts
        MediaFormatError: body larger than max_bytes
    """
    logger = logging.getLogger("http")
    if max_bytes is None:
        max_bytes = Config().get("image.max_bytes")

    try:
        async with session.get(url, allow_redirects=True) as response:
            if response.status in (404, 410):
                raise MediaNotFoundError(f"HTTP {response.status}: {url}", url, error_code=response.status)
            if response.status >= 400:
                raise MediaNetworkError(
                    f"HTTP {response.status}: {response.reason}", url, error_code=response.status
                )

            content_length = response.content_length
            if content_length is not None and content_length > max_bytes:
                raise MediaFormatError(f"Response too large: {content_length} bytes (max {max_bytes})", url)

            chunks = []
            size = 0
            async for chunk in response.content.iter_chunked(64 * 1024):
                size += len(chunk)
                if size > max_bytes:
                    raise MediaFormatError(f"Response too large: more than {max_bytes} bytes", url)
                chunks.append(chunk)
            body = b"".join(chunks)

            content_type = response.headers.get("Content-Type", "")
            logger.debug(f"GET {url} -> {response.status} {content_type} {len(body)} bytes")
            return HttpResponse(url=str(response.url), status=response.status, content_type=content_type, body=body)

    except aiohttp.ClientResponseError as e:
        raise MediaNetworkError(f"HTTP {e.status}: {e.message}", url, error_code=e.status) from e
    except aiohttp.ClientError as e:
        raise MediaNetworkError(f"Network error: {e}", url) from e
    except asyncio.TimeoutError as e:
        raise MediaNetworkError(f"Timed out fetching {url}", url) from e
