"""
Minimal ASN.1 DER Codec

Encoder and recursive tag-length-value reader for the subset RSA keys use:

    0x02 INTEGER, 0x03 BIT STRING, 0x04 OCTET STRING, 0x05 NULL,
    0x06 OBJECT IDENTIFIER, 0x30 SEQUENCE

Lengths use the short form (< 128) or the long form (0x80 | n, then n
big-endian bytes). The reader walks every layer explicitly. It never scans
forward for a tag byte, and it rejects truncated input, indefinite lengths
and trailing garbage.
"""

from dataclasses import dataclass
from typing import List, Tuple

from ..errors import ParseError


TAG_INTEGER = 0x02
TAG_BIT_STRING = 0x03
TAG_OCTET_STRING = 0x04
TAG_NULL = 0x05
TAG_OID = 0x06
TAG_SEQUENCE = 0x30

TAG_NAMES = {
    TAG_INTEGER: 'INTEGER',
    TAG_BIT_STRING: 'BIT STRING',
    TAG_OCTET_STRING: 'OCTET STRING',
    TAG_NULL: 'NULL',
    TAG_OID: 'OBJECT IDENTIFIER',
    TAG_SEQUENCE: 'SEQUENCE',
}

# 1.2.840.113549.1.1.1 (rsaEncryption), content bytes only
RSA_ENCRYPTION_OID = bytes.fromhex('2a864886f70d010101')


# ============================================================================
# Encoding
# ============================================================================

def encode_length(length: int) -> bytes:
    """DER length octets (short form below 128, long form otherwise)."""
    if length < 0x80:
        return bytes([length])
    body = length.to_bytes((length.bit_length() + 7) // 8, byteorder='big')
    return bytes([0x80 | len(body)]) + body


def encode_tlv(tag: int, value: bytes) -> bytes:
    return bytes([tag]) + encode_length(len(value)) + value


def encode_integer(value: int) -> bytes:
    """
    DER INTEGER for a non-negative value.

    Minimal big-endian bytes, with a 0x00 prefix when the high bit of the
    first byte is set so the value is not read as negative.
    """
    if value < 0:
        raise ValueError("Only non-negative integers are supported")
    body = value.to_bytes(max(1, (value.bit_length() + 7) // 8), byteorder='big')
    if body[0] & 0x80:
        body = b'\x00' + body
    return encode_tlv(TAG_INTEGER, body)


def encode_sequence(items: List[bytes]) -> bytes:
    """SEQUENCE of already-encoded elements."""
    return encode_tlv(TAG_SEQUENCE, b''.join(items))


def encode_null() -> bytes:
    return encode_tlv(TAG_NULL, b'')


def encode_oid(content: bytes) -> bytes:
    return encode_tlv(TAG_OID, content)


def encode_bit_string(data: bytes) -> bytes:
    """BIT STRING with zero unused bits."""
    return encode_tlv(TAG_BIT_STRING, b'\x00' + data)


def encode_octet_string(data: bytes) -> bytes:
    return encode_tlv(TAG_OCTET_STRING, data)


def rsa_algorithm_identifier() -> bytes:
    """AlgorithmIdentifier { rsaEncryption, NULL }."""
    return encode_sequence([encode_oid(RSA_ENCRYPTION_OID), encode_null()])


# ============================================================================
# Decoding
# ============================================================================

@dataclass(frozen=True)
class TLV:
    """One decoded element: tag byte and raw content octets."""
    tag: int
    value: bytes

    @property
    def name(self) -> str:
        return TAG_NAMES.get(self.tag, f'0x{self.tag:02x}')


def read_tlv(data: bytes, offset: int = 0) -> Tuple[TLV, int]:
    """
    Read one element starting at `offset`.

    Returns:
        (element, offset just past it)

    Raises:
        ParseError: On truncated data or unsupported length encodings
    """
    if offset >= len(data):
        raise ParseError("Unexpected end of DER data")

    tag = data[offset]
    offset += 1
    if offset >= len(data):
        raise ParseError("Missing DER length")

    first = data[offset]
    offset += 1
    if first < 0x80:
        length = first
    else:
        count = first & 0x7F
        if count == 0:
            raise ParseError("Indefinite DER lengths are not allowed")
        if count > 4 or offset + count > len(data):
            raise ParseError("Invalid DER length")
        length = int.from_bytes(data[offset:offset + count], byteorder='big')
        offset += count

    end = offset + length
    if end > len(data):
        raise ParseError("DER element runs past the end of the data")

    return TLV(tag, bytes(data[offset:end])), end


def read_single(data: bytes, expected_tag: int) -> TLV:
    """Decode data that must hold exactly one element with the given tag."""
    element, end = read_tlv(data)
    if end != len(data):
        raise ParseError("Trailing data after DER element")
    expect_tag(element, expected_tag)
    return element


def decode_children(content: bytes) -> List[TLV]:
    """Split constructed content into its elements."""
    children = []
    offset = 0
    while offset < len(content):
        element, offset = read_tlv(content, offset)
        children.append(element)
    return children


def decode_sequence(data: bytes) -> List[TLV]:
    """Decode one top-level SEQUENCE and return its elements."""
    return decode_children(read_single(data, TAG_SEQUENCE).value)


def expect_tag(element: TLV, tag: int) -> None:
    if element.tag != tag:
        raise ParseError(
            f"Expected {TAG_NAMES.get(tag, hex(tag))}, found {element.name}"
        )


def decode_integer(element: TLV) -> int:
    """
    Value of an INTEGER element.

    Raises:
        ParseError: Wrong tag, empty content or a negative value
    """
    expect_tag(element, TAG_INTEGER)
    if not element.value:
        raise ParseError("Empty INTEGER")
    if element.value[0] & 0x80:
        raise ParseError("Negative INTEGER in key material")
    return int.from_bytes(element.value, byteorder='big')


def decode_bit_string(element: TLV) -> bytes:
    """Payload of a BIT STRING with zero unused bits."""
    expect_tag(element, TAG_BIT_STRING)
    if not element.value or element.value[0] != 0:
        raise ParseError("BIT STRING must have zero unused bits")
    return element.value[1:]


def decode_octet_string(element: TLV) -> bytes:
    expect_tag(element, TAG_OCTET_STRING)
    return element.value


def check_rsa_algorithm(element: TLV) -> None:
    """
    Validate an AlgorithmIdentifier for rsaEncryption (parameters NULL or absent).

    Raises:
        ParseError: For any other algorithm
    """
    expect_tag(element, TAG_SEQUENCE)
    parts = decode_children(element.value)
    if not parts:
        raise ParseError("Empty AlgorithmIdentifier")
    expect_tag(parts[0], TAG_OID)
    if parts[0].value != RSA_ENCRYPTION_OID:
        raise ParseError("Key algorithm is not rsaEncryption")
    if len(parts) > 2 or (len(parts) == 2 and parts[1].tag != TAG_NULL):
        raise ParseError("Unexpected rsaEncryption parameters")
