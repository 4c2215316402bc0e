import logging

from .errors import (
    InvalidKeyError,
    InvalidMarkerError,
    MalformedLengthError,
    RangeOverflowError,
    TrailingDataError,
    TruncatedInputError,
)
from .value import INT_MAX, INT_MIN, MAX_DIGITS, Dictionary, Marker, Value

logger = logging.getLogger(__name__)


class Decoder:
    def __init__(self, source: bytes | bytearray | memoryview):
        self.source = bytes(source)
        self.current = 0

    def decode(self) -> Value:
        return self.decode_one()

    def remainder(self) -> bytes:
        return self.source[self.current :]

    def decode_one(self) -> Value:
        c = self.peek()
        match c:
            case b"":
                raise TruncatedInputError(
                    "Unexpected end of input", self.current, "a value"
                )

            case Marker.INTEGER:
                return self.read_integer()

            case _ if c.isdigit():
                return self.read_string()

            case Marker.LIST:
                return self.read_list()

            case Marker.DICT:
                return self.read_dict()

            case _:
                raise InvalidMarkerError(
                    f"Unknown value type {c!r}",
                    self.current,
                    "'i', 'l', 'd' or a digit",
                )

    def read_string(self) -> bytes:
        start = self.current
        digits = self.read_digits("string length")
        if len(digits) > MAX_DIGITS:
            raise MalformedLengthError(
                f"String length {digits.decode()} is out of range", start
            )
        length = int(digits)

        self.expect(Marker.SEPARATOR)

        begin = self.current
        end = begin + length
        if end > len(self.source):
            raise TruncatedInputError(
                f"String declares {length} bytes but only "
                f"{len(self.source) - begin} remain",
                begin,
                f"{length} bytes",
            )
        self.current = end

        return self.source[begin:end]

    def read_integer(self) -> int:
        self.expect(Marker.INTEGER)

        start = self.current
        negative = self.peek() == Marker.MINUS
        if negative:
            self.advance()

        digits = self.read_digits("integer")

        if negative and digits == b"0":
            raise MalformedLengthError("Negative zero is not allowed", start)

        if len(digits) > MAX_DIGITS:
            raise RangeOverflowError(
                "Integer does not fit in 64 bits", start, f"at most {MAX_DIGITS} digits"
            )

        n = -int(digits) if negative else int(digits)
        if not INT_MIN <= n <= INT_MAX:
            raise RangeOverflowError(f"Integer {n} does not fit in 64 bits", start)

        self.expect(Marker.END)

        return n

    def read_list(self) -> list:
        start = self.current
        self.expect(Marker.LIST)

        lst = []
        while not self.at_close(start, "list"):
            lst.append(self.decode_one())

        self.expect(Marker.END)

        return lst

    def read_dict(self) -> Dictionary:
        start = self.current
        self.expect(Marker.DICT)

        pairs = {}
        while not self.at_close(start, "dictionary"):
            if not self.peek().isdigit():
                raise InvalidKeyError(
                    f"Dictionary key must be a byte string, got {self.peek()!r}",
                    self.current,
                    "a byte string key",
                )

            key_at = self.current
            k = self.read_string()
            if k in pairs:
                logger.debug(
                    f"Duplicate dictionary key {k!r} at offset {key_at}, keeping the last value"
                )
            pairs[k] = self.decode_one()

        self.expect(Marker.END)

        return Dictionary(pairs)

    def read_digits(self, what: str) -> bytes:
        start = self.current
        while self.peek().isdigit():
            self.advance()

        digits = self.source[start : self.current]
        if not digits:
            if self.is_at_end():
                raise TruncatedInputError("Unexpected end of input", start, what)
            raise MalformedLengthError(
                f"Invalid {what}: {self.peek()!r} is not a decimal digit", start, what
            )

        if len(digits) > 1 and digits.startswith(b"0"):
            raise MalformedLengthError(
                f"Leading zero in {what} {digits.decode()}", start, what
            )

        return digits

    def at_close(self, start: int, what: str) -> bool:
        if self.is_at_end():
            raise TruncatedInputError(
                f"Unterminated {what} opened at offset {start}", self.current, "'e'"
            )
        return self.peek() == Marker.END

    def peek(self) -> bytes:
        return self.source[self.current : self.current + 1]

    def advance(self) -> bytes:
        c = self.peek()
        self.current += 1
        return c

    def expect(self, char: bytes) -> bytes:
        c = self.peek()
        if c != char:
            if not c:
                raise TruncatedInputError(
                    "Unexpected end of input", self.current, f"'{char.decode()}'"
                )
            raise InvalidMarkerError(
                f"Unexpected byte {c!r}", self.current, f"'{char.decode()}'"
            )

        return self.advance()

    def is_at_end(self) -> bool:
        return self.current >= len(self.source)


def parse(data: bytes | bytearray | memoryview) -> tuple[Value, bytes]:
    """Decode the first value in `data`.

    Returns the value together with whatever bytes follow it; trailing data
    is left for the caller to deal with.
    """
    decoder = Decoder(data)
    value = decoder.decode()
    logger.debug(f"Parsed {type(value).__name__} from {decoder.current} bytes")
    return value, decoder.remainder()


def decode(data: bytes | bytearray | memoryview) -> Value:
    """Decode `data`, which must hold exactly one value."""
    decoder = Decoder(data)
    value = decoder.decode()
    if not decoder.is_at_end():
        raise TrailingDataError(
            f"{len(decoder.remainder())} trailing bytes after value", decoder.current
        )
    return value
