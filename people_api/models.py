from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .etag import fingerprint


@dataclass(frozen=True)
class CacheEntry:
    """One cached version of a resource: the payload and its strong validator.

    Entries built from local or embedded bytes carry ``fingerprint(body)`` as
    their ETag. Entries fetched from the remote source keep the upstream ETag
    when one is sent; that value is trusted as an opaque validator and is not
    guaranteed to equal the payload fingerprint.
    """

    body: bytes
    etag: str

    @classmethod
    def from_bytes(cls, body: bytes) -> "CacheEntry":
        body = bytes(body)
        return cls(body=body, etag=fingerprint(body))


@dataclass(frozen=True)
class Updated:
    entry: CacheEntry


@dataclass(frozen=True)
class NotModified:
    pass


@dataclass(frozen=True)
class Failed:
    reason: str


FetchOutcome = Union[Updated, NotModified, Failed]
