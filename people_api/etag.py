"""Strong HTTP validators derived from payload bytes."""

from __future__ import annotations

import hashlib
from typing import Optional


def fingerprint(payload: bytes) -> str:
    """Return the quoted lowercase SHA-256 hex digest of ``payload``.

    The result is usable directly as a strong ``ETag`` value, e.g.
    ``"e3b0c442...b855"`` for the empty payload.
    """
    return f'"{hashlib.sha256(payload).hexdigest()}"'


def matches(if_none_match: Optional[str], etag: str) -> bool:
    # Byte-exact comparison: lists, wildcards and weak validators never match.
    return if_none_match is not None and if_none_match == etag
