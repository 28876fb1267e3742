"""Shortcode and secret generation utility

This module provides helpers for drawing random, fixed-length tokens used as
record identifiers (shortcodes) and credential secrets.

Functions:
    generate_shortcode(length=8):
        Generate a random identifier suitable for use as a URL slug.

    generate_secret(length=8):
        Generate a random credential secret paired with a shortcode.

Example:
    >>> from safeshortener.utils import generate_shortcode, generate_secret
    >>> generate_shortcode()
    'k3Q9aZ0b'
    >>> generate_secret(4)
    'T1xe'

NOTE:
    - Tokens are drawn from the operating system's CSPRNG via `secrets`,
      so consecutive identifiers are neither sequential nor predictable.
    - Uniqueness is NOT guaranteed. Collisions are detected by the store
      and resolved by the MappingService.
    - The alphabet is Base62 safe: [0-9a-zA-Z].
"""

import secrets
import string

from safeshortener.constants import Defaults


ALPHABET = string.digits + string.ascii_lowercase + string.ascii_uppercase
BASE = len(ALPHABET)  # 10 digits + 26 lowercase + 26 uppercase


def _random_token(length: int) -> str:
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 0:
        raise ValueError(f'Length must be a non-negative integer (given value: {length}).')

    return ''.join(secrets.choice(ALPHABET) for _ in range(length))


def generate_shortcode(length: int = Defaults.SHORTCODE_LENGTH) -> str:
    """Generate a random Base62 shortcode.

    Args:
        length (int, optional):
            Number of characters in the shortcode. Defaults to 8.
            A length of 0 yields an empty string; callers must ask for at least 1.

    Returns:
        str: A random alphanumeric identifier of exactly `length` characters.

    Raises:
        TypeError: If length is not an integer.
        ValueError: If length is negative.
    """
    return _random_token(length)


def generate_secret(length: int = Defaults.SECRET_LENGTH) -> str:
    """Generate a random Base62 credential secret.

    Args:
        length (int, optional):
            Number of characters in the secret. Defaults to 8.

    Returns:
        str: A random alphanumeric secret of exactly `length` characters.

    Raises:
        TypeError: If length is not an integer.
        ValueError: If length is negative.
    """
    return _random_token(length)
