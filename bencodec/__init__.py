from .decoder import Decoder, decode, parse
from .encoder import Encoder, encode, encode_into, encode_to_str
from .errors import (
    BencodeError,
    InvalidKeyError,
    InvalidMarkerError,
    MalformedLengthError,
    RangeOverflowError,
    TextDecodeError,
    TrailingDataError,
    TruncatedInputError,
    UnsupportedTypeError,
)
from .value import INT_MAX, INT_MIN, Dictionary, Value, to_value

__all__ = [
    "Decoder",
    "Encoder",
    "Dictionary",
    "Value",
    "INT_MIN",
    "INT_MAX",
    "parse",
    "decode",
    "encode",
    "encode_to_str",
    "encode_into",
    "to_value",
    "BencodeError",
    "InvalidKeyError",
    "InvalidMarkerError",
    "MalformedLengthError",
    "RangeOverflowError",
    "TextDecodeError",
    "TrailingDataError",
    "TruncatedInputError",
    "UnsupportedTypeError",
]
