"""Blob key generation and legacy key recovery."""

from __future__ import annotations

import re
import time
import uuid
from urllib.parse import unquote, urlparse


def sanitize_filename(filename: str | None) -> str:
    """Strip directories and replace whitespace runs with underscores."""
    name = (filename or "").replace("\\", "/").rsplit("/", 1)[-1]
    name = name.replace("\0", "").strip()
    name = re.sub(r"\s+", "_", name)
    return name or "image"


def generate_asset_key(
    namespace: str,
    filename: str | None,
    *,
    timestamp_ms: int | None = None,
    token: str | None = None,
) -> str:
    """Build ``namespace/<millis>-<uuid4>-<filename>``.

    Examples:
        generate_asset_key("products", "Red Tee.png")
        -> "products/1718000000000-3f2b...-Red_Tee.png"
    """
    millis = timestamp_ms if timestamp_ms is not None else int(time.time() * 1000)
    rand = token or str(uuid.uuid4())
    return f"{namespace}/{millis}-{rand}-{sanitize_filename(filename)}"


def key_from_url(url: str | None) -> str:
    """Best-effort object key from a stored URL's path.

    Only correct when the URL path mirrors the bucket key. Behind a CDN or a
    custom domain this can name the wrong object; prefer stored keys.
    """
    if not url or not isinstance(url, str):
        return ""
    try:
        parsed = urlparse(url)
    except ValueError:
        return ""
    if not parsed.scheme or not parsed.netloc:
        return ""
    path = parsed.path[1:] if parsed.path.startswith("/") else parsed.path
    return unquote(path)
