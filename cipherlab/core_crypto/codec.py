"""
Codec Utilities

Conversions shared by every other component:
- text <-> bytes (UTF-8, strict)
- bytes <-> Base64 (standard alphabet, '=' padding)
- bytes <-> hex (lowercase)
- byte-wise XOR

Decoding failures are re-raised as cipherlab errors so callers only deal
with one taxonomy.
"""

import base64
import binascii
from typing import Union

from ..errors import InvalidEncoding, InvalidUtf8Output


BytesLike = Union[bytes, bytearray, memoryview]


def utf8_encode(text: str) -> bytes:
    """Encode text as UTF-8 bytes."""
    return text.encode('utf-8')


def utf8_decode(data: BytesLike) -> str:
    """
    Decode UTF-8 bytes strictly.

    Raises:
        InvalidUtf8Output: If the bytes are not valid UTF-8
    """
    try:
        return bytes(data).decode('utf-8')
    except UnicodeDecodeError as exc:
        raise InvalidUtf8Output() from exc


def to_bytes(value: Union[str, BytesLike]) -> bytes:
    """Return bytes unchanged, UTF-8 encode text."""
    if isinstance(value, str):
        return utf8_encode(value)
    return bytes(value)


def b64_encode(data: BytesLike) -> str:
    """Base64-encode bytes into an ASCII string."""
    return base64.b64encode(bytes(data)).decode('ascii')


def b64_decode(text: Union[str, BytesLike]) -> bytes:
    """
    Decode standard Base64.

    Leading/trailing whitespace is ignored; anything outside the alphabet
    or bad padding is rejected.

    Raises:
        InvalidEncoding: If the input is not valid Base64
    """
    if isinstance(text, str):
        text = text.strip()
        try:
            raw = text.encode('ascii')
        except UnicodeEncodeError as exc:
            raise InvalidEncoding("Input is not valid Base64") from exc
    else:
        raw = bytes(text).strip()

    try:
        return base64.b64decode(raw, validate=True)
    except binascii.Error as exc:
        raise InvalidEncoding("Input is not valid Base64") from exc


def hex_encode(data: BytesLike) -> str:
    """Lowercase hex string of the bytes."""
    return bytes(data).hex()


def hex_decode(text: str) -> bytes:
    """
    Decode a hex string.

    Raises:
        InvalidEncoding: If the string is not valid hex
    """
    try:
        return bytes.fromhex(text)
    except ValueError as exc:
        raise InvalidEncoding("Input is not valid hex") from exc


def xor_bytes(a: BytesLike, b: BytesLike) -> bytes:
    """XOR two byte strings over the shorter length."""
    return bytes(x ^ y for x, y in zip(a, b))
