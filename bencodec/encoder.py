import logging
from collections.abc import Iterator, Mapping, Sequence
from typing import Any, BinaryIO

from .errors import TextDecodeError, UnsupportedTypeError
from .value import Marker, check_integer, encode_text, sorted_pairs

logger = logging.getLogger(__name__)


class Encoder:
    def encode(self, obj: Any) -> bytes:
        return self.encode_one(obj)

    def encode_one(self, obj: Any) -> bytes:
        match obj:
            case Mapping():
                return self.encode_dict(obj)

            case bool():
                raise UnsupportedTypeError("Booleans have no bencode representation")

            case int():
                return self.encode_int(obj)

            case bytes() | bytearray() | memoryview():
                return self.encode_string(bytes(obj))

            case str():
                return self.encode_string(encode_text(obj))

            case Sequence() | Iterator():
                return self.encode_list(obj)

            case _:
                raise UnsupportedTypeError(f"Cannot bencode {type(obj).__name__}")

    def encode_string(self, s: bytes) -> bytes:
        return str(len(s)).encode() + Marker.SEPARATOR + s

    def encode_int(self, i: int) -> bytes:
        check_integer(i)
        return f"i{i}e".encode()

    def encode_list(self, lst: Sequence | Iterator) -> bytes:
        bstr = bytearray(Marker.LIST)
        for i in lst:
            bstr += self.encode_one(i)
        bstr += Marker.END
        return bytes(bstr)

    def encode_dict(self, d: Mapping) -> bytes:
        bstr = bytearray(Marker.DICT)
        for k, v in sorted_pairs(d):
            bstr.extend(self.encode_string(k))
            bstr.extend(self.encode_one(v))
        bstr += Marker.END
        return bytes(bstr)


def encode(obj: Any) -> bytes:
    """Return the canonical bencoding of `obj`.

    `obj` may be a decoded value or plain Python data: ints, bytes-like
    objects, str (encoded as UTF-8), sequences or iterators of such data,
    and mappings keyed by bytes or str.
    """
    data = Encoder().encode(obj)
    logger.debug(f"Encoded {type(obj).__name__} into {len(data)} bytes")
    return data


def encode_to_str(obj: Any, strict: bool = False) -> str:
    """Return the canonical bencoding of `obj` as text, for display.

    Bytes that are not valid UTF-8 are replaced with U+FFFD, unless `strict`
    is set, in which case they raise TextDecodeError.
    """
    data = encode(obj)
    if not strict:
        return data.decode(errors="replace")

    try:
        return data.decode()
    except UnicodeDecodeError as e:
        raise TextDecodeError(
            f"Encoded value is not valid UTF-8: {e.reason}", e.start
        ) from e


def encode_into(obj: Any, sink: BinaryIO) -> int:
    """Write the canonical bencoding of `obj` to `sink`.

    The whole value is encoded before anything is written, so a value that
    cannot be encoded leaves the sink untouched. Short writes are retried
    until every byte is accepted; a sink that accepts nothing raises OSError.
    """
    data = encode(obj)

    view = memoryview(data)
    while view:
        n = sink.write(view)
        if not n:
            raise OSError(
                f"Sink accepted no bytes with {len(view)} of {len(data)} left to write"
            )
        view = view[n:]

    return len(data)
