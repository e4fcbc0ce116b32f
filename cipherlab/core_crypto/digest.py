"""
Hash operation over text.

Maps algorithm names to the from-scratch hash builders and exposes the
text-in / hex-out operation external callers use.
"""

import logging
from typing import Callable, Dict, Union

from ..errors import UnsupportedAlgorithm
from .codec import to_bytes
from .sha1 import SHA1
from .sha256 import SHA256

logger = logging.getLogger(__name__)


HASH_ALGORITHMS: Dict[str, Callable[..., object]] = {
    'sha1': SHA1,
    'sha256': SHA256,
}


def _normalize_name(algorithm: str) -> str:
    return str(algorithm).lower().replace('-', '').replace('_', '')


def new_hash(algorithm: str = 'sha256', data: bytes = b''):
    """
    Create a hash builder by name ('sha1', 'SHA-256', ...).

    Raises:
        UnsupportedAlgorithm: If the name is not recognised
    """
    try:
        factory = HASH_ALGORITHMS[_normalize_name(algorithm)]
    except KeyError:
        raise UnsupportedAlgorithm(f"Unsupported hash algorithm: {algorithm}") from None
    return factory(data)


def hash_text(message: Union[str, bytes], algorithm: str = 'sha256') -> str:
    """
    Hash a message and return the lowercase hex digest.

    Args:
        message: Text (UTF-8 encoded) or raw bytes
        algorithm: 'sha1' or 'sha256'

    Returns:
        40 (SHA-1) or 64 (SHA-256) hex characters
    """
    data = to_bytes(message)
    builder = new_hash(algorithm, data)
    logger.debug("Hashed %d bytes with %s", len(data), builder.name)
    return builder.hexdigest()
