class BencodeError(ValueError):
    """Base class for every decoding and encoding failure."""

    def __init__(
        self, message: str, position: int | None = None, expected: str | None = None
    ):
        self.message = message
        self.position = position
        self.expected = expected
        super().__init__(self._describe())

    def _describe(self) -> str:
        msg = self.message
        if self.expected is not None:
            msg += f" (expected {self.expected})"
        if self.position is not None:
            msg += f" at offset {self.position}"
        return msg


class MalformedLengthError(BencodeError):
    pass


class TruncatedInputError(BencodeError):
    pass


class InvalidMarkerError(BencodeError):
    pass


class InvalidKeyError(BencodeError):
    pass


class RangeOverflowError(BencodeError):
    pass


class TextDecodeError(BencodeError):
    pass


class TrailingDataError(BencodeError):
    pass


class UnsupportedTypeError(BencodeError, TypeError):
    pass
