"""SHA-1 digests used as privacy-preserving lookup keys."""

import hashlib


def get_sha1(value: str) -> str:
    """Return the lowercase hex SHA-1 digest of ``value``.

    The string is hashed exactly as given (UTF-8 encoded); callers that want
    case-insensitive matching must normalize before hashing.

    Args:
        value: Typically an email address.

    Returns:
        str: 40-character lowercase hexadecimal digest.
    """
    return hashlib.sha1(value.encode("utf-8")).hexdigest()
