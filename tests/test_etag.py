import hashlib

from people_api.etag import fingerprint, matches
from people_api.models import CacheEntry


def test_fingerprint_is_quoted_sha256_hex() -> None:
    etag = fingerprint(b'{"a":1}')

    assert etag == '"' + hashlib.sha256(b'{"a":1}').hexdigest() + '"'
    assert len(etag) == 66
    assert etag[1:-1] == etag[1:-1].lower()


def test_fingerprint_is_deterministic_and_content_sensitive() -> None:
    assert fingerprint(b"people") == fingerprint(b"people")
    assert fingerprint(b'{"a":1}') != fingerprint(b'{"a":2}')


def test_fingerprint_of_empty_payload() -> None:
    assert fingerprint(b"") == '"e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"'


def test_matches_is_exact() -> None:
    etag = fingerprint(b"x")

    assert matches(etag, etag)
    assert not matches(None, etag)
    assert not matches(etag.upper(), etag)
    assert not matches(etag[1:-1], etag)
    assert not matches(f"W/{etag}", etag)
    assert not matches(f"{etag}, {etag}", etag)
    assert not matches("*", etag)


def test_cache_entry_from_bytes_uses_fingerprint() -> None:
    entry = CacheEntry.from_bytes(bytearray(b'{"a":1}'))

    assert entry.body == b'{"a":1}'
    assert isinstance(entry.body, bytes)
    assert entry.etag == fingerprint(b'{"a":1}')
