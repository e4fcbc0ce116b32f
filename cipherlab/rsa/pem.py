"""
PEM armour (RFC 7468 style) around DER bytes.

    -----BEGIN <label>-----
    <Base64, 64 characters per line>
    -----END <label>-----
"""

import re
from typing import Tuple

from ..core_crypto.codec import b64_decode, b64_encode
from ..errors import InvalidEncoding, ParseError


PEM_LINE_WIDTH = 64

_PEM_RE = re.compile(
    r'-----BEGIN ([A-Z0-9 ]+)-----\s*(.*?)\s*-----END ([A-Z0-9 ]+)-----',
    re.DOTALL,
)


def pem_encode(der: bytes, label: str) -> str:
    """Wrap DER bytes in a PEM envelope."""
    body = b64_encode(der)
    lines = [body[i:i + PEM_LINE_WIDTH] for i in range(0, len(body), PEM_LINE_WIDTH)]
    return '\n'.join([f'-----BEGIN {label}-----', *lines, f'-----END {label}-----'])


def pem_decode(text: str) -> Tuple[str, bytes]:
    """
    Extract the label and DER bytes from the first PEM block in text.

    Raises:
        ParseError: Missing armour, mismatched labels or a bad Base64 body
    """
    match = _PEM_RE.search(text)
    if match is None:
        raise ParseError("No PEM block found")

    label, body, end_label = match.groups()
    if label != end_label:
        raise ParseError(f"PEM label mismatch: {label} / {end_label}")

    try:
        der = b64_decode(re.sub(r'\s+', '', body))
    except InvalidEncoding as exc:
        raise ParseError("PEM body is not valid Base64") from exc

    if not der:
        raise ParseError("Empty PEM body")
    return label, der
