from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional

from .logging import get_logger
from .models import CacheEntry

logger = get_logger(__name__)

_ASSETS_DIR = Path(__file__).resolve().parent / "assets"

# Bundled with the package: the fallback for an unreadable LOCAL_PATH and the
# payload served at /example.
EMBEDDED_LOCAL_PEOPLE: bytes = (_ASSETS_DIR / "people.sample.json").read_bytes()
EMBEDDED_EXAMPLE: bytes = (_ASSETS_DIR / "example.json").read_bytes()


def load_local(path: Path | str) -> CacheEntry:
    """Read the local snapshot into memory, falling back to the embedded sample.

    Never raises: a missing or unreadable file is logged and replaced by
    ``EMBEDDED_LOCAL_PEOPLE`` so the service can always start.
    """
    try:
        body = Path(path).read_bytes()
    except OSError as exc:
        logger.error("local.load_failed", path=str(path), error=str(exc), fallback="embedded")
        return CacheEntry.from_bytes(EMBEDDED_LOCAL_PEOPLE)

    entry = CacheEntry.from_bytes(body)
    logger.info("local.loaded", path=str(path), size=len(body), etag=entry.etag)
    return entry


class RemoteCacheSlot:
    """Holds the latest remote entry, or ``None`` until the first successful fetch.

    The refresher is the only writer. Writes replace the whole entry under the
    lock and readers copy the reference under the same lock, so a reader sees
    either the previous entry or the new one and never a mix of the two.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entry: Optional[CacheEntry] = None

    def get(self) -> Optional[CacheEntry]:
        with self._lock:
            return self._entry

    def current_etag(self) -> Optional[str]:
        entry = self.get()
        return entry.etag if entry else None

    def replace(self, entry: CacheEntry) -> None:
        with self._lock:
            self._entry = entry
