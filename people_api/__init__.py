"""Cached republishing of the CNCF people dataset."""

from .cache import RemoteCacheSlot, load_local
from .etag import fingerprint
from .models import CacheEntry, Failed, FetchOutcome, NotModified, Updated
from .refresher import RemoteRefresher

__all__ = [
    "CacheEntry",
    "Failed",
    "FetchOutcome",
    "NotModified",
    "RemoteCacheSlot",
    "RemoteRefresher",
    "Updated",
    "fingerprint",
    "load_local",
]
