# © Copyright 2025 Stuart Parmenter
# SPDX-License-Identifier: MIT

import os
from typing import Optional
from urllib.parse import urlparse
from urllib.request import url2pathname


def is_http_url(url: str) -> bool:
    """Check if a URL is HTTP/HTTPS."""
    try:
        s = (urlparse(url).scheme or "").lower()
        return s in ("http", "https")
    except ValueError:
        return False


def resolve_local_path(src_url: str) -> Optional[str]:
    """Convert a file:// URL or local path to a file path, None for other schemes."""
    u = urlparse(src_url)
    if u.scheme == "file":
        p = u.path
        if os.name == "nt" and len(p) >= 3 and p[0] == "/" and p[2] == ":":
            p = p[1:]
        return url2pathname(p)
    if u.scheme == "" or (os.name == "nt" and len(u.scheme) == 1):
        # plain path (or a Windows drive letter parsed as a scheme)
        return src_url
    return None


def display_name(src_url: str) -> str:
    """Get a short display name for a URL or path for logging."""
    try:
        parsed = urlparse(src_url)
        path = parsed.path or "/"
        filename = path.rstrip("/").split("/")[-1]
        return filename or parsed.netloc or src_url
    except ValueError:
        return src_url[-50:] if len(src_url) > 50 else src_url
