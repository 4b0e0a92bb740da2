"""Provides deterministic identifiers for replication directives."""

import hashlib


def generate_id(source: str, target: str) -> str:
    """
    Compute the directive id for a source/target pair.

    The pair is concatenated without a separator and hashed, so the same
    pair always maps to the same id while (a, b) and (b, a) differ.

    Args:
        source: Source locator as finally assigned (after push/pull swap)
        target: Target locator as finally assigned

    Returns:
        Hexadecimal string representation of the MD5 hash
    """
    return hashlib.md5((source + target).encode("utf-8")).hexdigest()
