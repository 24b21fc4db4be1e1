"""
Hashed Identifiers
==================

Decoding of the opaque hashed IDs exposed to users (indicator IDs, rule IDs)
back to their numeric database IDs.
"""

from typing import Optional

from hashids import Hashids

from quality_range.config.settings import get_settings


class HashIdDecodeError(ValueError):
    """Raised when a hashed ID cannot be decoded."""

    def __init__(self, hash_id: str):
        super().__init__(f"Invalid hashed id: {hash_id!r}")
        self.hash_id = hash_id


def _hashids(salt: Optional[str] = None, min_length: Optional[int] = None) -> Hashids:
    settings = get_settings()
    return Hashids(
        salt=settings.hash_id_salt if salt is None else salt,
        min_length=settings.hash_id_min_length if min_length is None else min_length,
    )


def decode_id_to_long(hash_id: str, salt: Optional[str] = None) -> int:
    """
    Decode a hashed ID to its numeric value.

    Args:
        hash_id: Hashed identifier
        salt: Salt override, defaults to the configured salt

    Returns:
        Numeric identifier

    Raises:
        HashIdDecodeError: If the value does not decode to a number
    """
    if not hash_id:
        raise HashIdDecodeError(hash_id)
    decoded = _hashids(salt).decode(hash_id)
    if not decoded:
        raise HashIdDecodeError(hash_id)
    return decoded[0]


def encode_id(value: int, salt: Optional[str] = None) -> str:
    """Encode a numeric ID into its hashed form."""
    return _hashids(salt).encode(value)
