"""Advisory HTTP caching headers for dashboard list endpoints."""

import time
from email.utils import formatdate

from fastapi import Response


def set_cache_headers(response: Response, *, max_age: int, tag: str) -> None:
    """Mark a response as publicly cacheable for ``max_age`` seconds."""
    now = time.time()
    response.headers["Cache-Control"] = f"public, max-age={max_age}"
    response.headers["ETag"] = f'"{tag}-{int(now * 1000)}"'
    response.headers["Last-Modified"] = formatdate(now, usegmt=True)
