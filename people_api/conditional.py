from __future__ import annotations

from typing import Optional

from fastapi import Response

from .etag import matches
from .models import CacheEntry

JSON_MEDIA_TYPE = "application/json; charset=utf-8"
CACHE_CONTROL = "public, max-age=30"


def conditional_response(entry: CacheEntry, if_none_match: Optional[str]) -> Response:
    """Render ``entry`` for a GET, honouring ``If-None-Match``.

    Returns an empty 304 when the request validator equals ``entry.etag``
    exactly; otherwise a 200 with the full body, ``ETag`` and ``Cache-Control``.
    """
    if matches(if_none_match, entry.etag):
        return Response(status_code=304)
    return Response(
        content=entry.body,
        media_type=JSON_MEDIA_TYPE,
        headers={"ETag": entry.etag, "Cache-Control": CACHE_CONTROL},
    )
