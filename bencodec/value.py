from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any

from .errors import InvalidKeyError, RangeOverflowError, UnsupportedTypeError

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

# Longest decimal magnitude that can still fall inside [INT_MIN, INT_MAX]
MAX_DIGITS = len(str(INT_MAX))


class Marker:
    INTEGER = b"i"
    LIST = b"l"
    DICT = b"d"
    END = b"e"
    SEPARATOR = b":"
    MINUS = b"-"


class Dictionary(Mapping):
    """Immutable mapping of byte string keys, always iterated in sorted order.

    Keys are compared by raw byte value, so iteration order is the canonical
    bencode order. When a key is given more than once the last value wins.
    Each value must already be a bencode value; only its type and integer
    range are checked here, nested containers are not walked. Use to_value
    to convert and validate arbitrary native data.
    """

    __slots__ = ("_items", "_keys")

    def __init__(self, pairs: Mapping | Iterable[tuple[bytes, Any]] = ()):
        if isinstance(pairs, Mapping):
            pairs = pairs.items()

        items = {}
        for k, v in pairs:
            if not isinstance(k, bytes):
                raise InvalidKeyError(
                    f"Dictionary key must be bytes, got {type(k).__name__}"
                )
            items[k] = check_value(v)

        self._items = items
        self._keys = tuple(sorted(items))

    def __getitem__(self, key: bytes) -> Any:
        return self._items[key]

    def __iter__(self):
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __hash__(self) -> int:
        return hash(tuple(self.items()))

    def __repr__(self) -> str:
        inner = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"Dictionary({{{inner}}})"


Value = int | bytes | list["Value"] | Dictionary


def check_integer(i: int) -> int:
    if not INT_MIN <= i <= INT_MAX:
        raise RangeOverflowError(f"Integer {i} is outside the 64-bit signed range")
    return i


def check_value(v: Any) -> Value:
    match v:
        case bool():
            raise UnsupportedTypeError("Booleans have no bencode representation")
        case int():
            return check_integer(v)
        case bytes() | list() | Dictionary():
            return v
        case _:
            raise UnsupportedTypeError(
                f"{type(v).__name__} is not a bencode value, convert it with to_value"
            )


def encode_text(s: str) -> bytes:
    try:
        return s.encode()
    except UnicodeEncodeError as e:
        raise UnsupportedTypeError(
            f"String is not encodable as UTF-8: {e.reason}"
        ) from e


def to_key(k: Any) -> bytes:
    match k:
        case bytes():
            return k
        case str():
            return encode_text(k)
        case _:
            raise InvalidKeyError(
                f"Dictionary key must be bytes or str, got {type(k).__name__}"
            )


def sorted_pairs(d: Mapping) -> list[tuple[bytes, Any]]:
    """Return the items of `d` as (bytes key, value) pairs in canonical order.

    Fails if two keys end up as the same bytes once str keys are encoded,
    since one of them would otherwise be silently dropped.
    """
    if isinstance(d, Dictionary):
        return list(d.items())

    pairs = sorted(((to_key(k), v) for k, v in d.items()), key=lambda p: p[0])
    for (a, _), (b, _) in zip(pairs, pairs[1:]):
        if a == b:
            raise InvalidKeyError(f"Duplicate dictionary key {a!r}")
    return pairs


def to_value(obj: Any) -> Value:
    """Convert native Python data into the bencode value model."""
    match obj:
        case bool():
            raise UnsupportedTypeError("Booleans have no bencode representation")

        case int():
            return check_integer(obj)

        case bytes():
            return obj

        case bytearray() | memoryview():
            return bytes(obj)

        case str():
            return encode_text(obj)

        case Mapping():
            return Dictionary((k, to_value(v)) for k, v in sorted_pairs(obj))

        case Sequence() | Iterator():
            return [to_value(i) for i in obj]

        case _:
            raise UnsupportedTypeError(
                f"Cannot convert {type(obj).__name__} to a bencode value"
            )
