"""
Identifier codec: storage keys <-> resource URLs.

A resource's wire identifier is a URL whose last path segment (or a
segment at a known position from the end) is its storage key:

    https://host/categories/id/A001       -> "A001"
    https://host/chart_of_accounts/id/42  -> 42

Segments follow URI semantics: the path "/a/b/c/" splits into
["/", "a/", "b/", "c/"], and a segment's trailing separator is stripped
before it is percent-decoded and converted to the key type.
"""

import re
from typing import Literal, TypeVar, overload
from urllib.parse import quote, unquote, urlsplit

from accounting_service.config import MAX_INTEGER_KEY, MIN_INTEGER_KEY
from accounting_service.models.failure import IndexOutOfRangeError, InvalidKeyError

K = TypeVar("K", int, str)

# Each segment keeps its trailing "/", the final one may have none.
SEGMENT_PATTERN = re.compile(r"[^/]*/|[^/]+$")

# ASCII digits only; int() would also accept other Unicode digits.
INTEGER_KEY_PATTERN = re.compile(r"-?[0-9]+")

SEGMENT_SEPARATORS = "/\\"


def encode(base_url: str, domain_path: str, key: int | str) -> str:
    """
    Build the URL of a resource.

    Args:
        base_url: Scheme and host (may be empty for a root-relative URL)
        domain_path: Path of the resource family, e.g. "categories/id"
        key: Storage key; percent-encoded so any string survives decoding

    Raises:
        InvalidKeyError: If ``key`` is an empty string
    """
    text = str(key)
    if not text:
        raise InvalidKeyError(text, type(key), detail="Keys cannot be empty")

    segment = quote(text, safe="")
    return f"{base_url.rstrip('/')}/{domain_path.strip('/')}/{segment}"


def path_segments(url: str) -> list[str]:
    """Split the path of ``url`` into segments, each keeping its trailing '/'."""
    path = urlsplit(url).path or "/"
    return SEGMENT_PATTERN.findall(path)


@overload
def decode_at(
    url: str | None, position: int, key_type: type[K], *, nullable: Literal[False] = False
) -> K: ...


@overload
def decode_at(
    url: str | None, position: int, key_type: type[K], *, nullable: Literal[True]
) -> K | None: ...


def decode_at(
    url: str | None, position: int, key_type: type[K], *, nullable: bool = False
) -> K | None:
    """
    Extract the key at ``position`` segments from the end of the path.

    Position 0 is the last segment. For "https://host/x/y/id/1/2/3",
    position 0 yields "3" and position 1 yields "2".

    Args:
        url: Absolute or relative URL
        position: Segment index counted from the end
        key_type: int or str
        nullable: When True, a missing URL or empty segment decodes to None

    Raises:
        IndexOutOfRangeError: If the position falls outside the path
        InvalidKeyError: If the segment cannot be converted to ``key_type``
    """
    if url is None:
        if nullable:
            return None
        raise InvalidKeyError("", key_type, detail="No URL was provided")

    segments = path_segments(url)
    index = len(segments) - position - 1
    if index < 0 or index >= len(segments):
        raise IndexOutOfRangeError(url, position, key_type)

    raw = segments[index].rstrip(SEGMENT_SEPARATORS)
    if nullable:
        return parse_key(unquote(raw), key_type, nullable=True)
    return parse_key(unquote(raw), key_type)


@overload
def decode(url: str | None, key_type: type[K], *, nullable: Literal[False] = False) -> K: ...


@overload
def decode(url: str | None, key_type: type[K], *, nullable: Literal[True]) -> K | None: ...


def decode(url: str | None, key_type: type[K], *, nullable: bool = False) -> K | None:
    """Extract the key from the last segment of ``url``."""
    if nullable:
        return decode_at(url, 0, key_type, nullable=True)
    return decode_at(url, 0, key_type)


@overload
def parse_key(segment: str, key_type: type[K], *, nullable: Literal[False] = False) -> K: ...


@overload
def parse_key(segment: str, key_type: type[K], *, nullable: Literal[True]) -> K | None: ...


def parse_key(segment: str, key_type: type[K], *, nullable: bool = False) -> K | None:
    """
    Convert one already-decoded path segment to a key.

    Raises:
        InvalidKeyError: If the segment is empty (and not nullable), is
            not a valid ``key_type``, or is an integer no stored id can have
    """
    if not segment:
        if nullable:
            return None
        raise InvalidKeyError(segment, key_type, detail="The key segment is empty")

    if key_type is int:
        if not INTEGER_KEY_PATTERN.fullmatch(segment):
            raise InvalidKeyError(segment, key_type)
        # Bound the digit count first; int() refuses very long strings.
        digits = segment.lstrip("-").lstrip("0") or "0"
        in_range = len(digits) <= len(str(MAX_INTEGER_KEY))
        if in_range:
            key = -int(digits) if segment.startswith("-") else int(digits)
            in_range = MIN_INTEGER_KEY <= key <= MAX_INTEGER_KEY
        if not in_range:
            raise InvalidKeyError(segment, key_type, detail="The key is outside the stored id range")
        return key_type(key)

    if key_type is str:
        return key_type(segment)

    raise TypeError(f"Unsupported key type: {key_type!r}")
