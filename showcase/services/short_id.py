"""
Short identifier generation for public share links.
"""

from nanoid import generate

# URL-safe alphabet used by nanoid
SHORT_ID_ALPHABET = "_-0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
DEFAULT_SHORT_ID_LENGTH = 10


def generate_short_id(size: int = DEFAULT_SHORT_ID_LENGTH) -> str:
    """
    Generate a random URL-safe short identifier.

    Uniqueness is not checked here; the unique index on assets.short_id
    rejects duplicates at insert time.
    """
    return generate(SHORT_ID_ALPHABET, size)
