"""
Short id generation strategies for the link shortener.
Uses Strategy Pattern to allow different generation algorithms.
"""

import secrets
import string
from abc import ABC, abstractmethod


class ShortCodeStrategy(ABC):
    """Abstract base class for short id generation strategies"""

    @abstractmethod
    def generate(self) -> str:
        """
        Generate a candidate short id.

        Uniqueness is enforced at insert time by the unique constraint on
        links.short_id; the caller retries on collision.

        Returns:
            A URL-safe short id string
        """
        pass


class RandomShortCodeStrategy(ShortCodeStrategy):
    """
    Random string drawn from a fixed alphabet with the `secrets` module.

    Pros: Unpredictable, no DB round trip
    Cons: Collisions possible (negligible at 64^8), caller must retry
    """

    characters = string.ascii_letters + string.digits

    def __init__(self, length: int = 8):
        if length < 1:
            raise ValueError(f"Short id length must be positive, got {length}")
        self.length = length

    def generate(self) -> str:
        """Generate random short id of the configured length"""
        return ''.join(secrets.choice(self.characters) for _ in range(self.length))


class NanoIdShortCodeStrategy(RandomShortCodeStrategy):
    """
    nanoid-style ids over the URL-safe base64 alphabet (A-Z a-z 0-9 _ -).

    8 characters give 64^8 (about 2.8e14) possible ids.
    """

    characters = string.ascii_uppercase + string.ascii_lowercase + string.digits + "_-"


class Base62ShortCodeStrategy(RandomShortCodeStrategy):
    """
    Alphanumeric-only ids (0-9 a-z A-Z).

    Slightly smaller space than nanoid (62^8), but ids never contain
    punctuation, which reads better when links are shared by hand.
    """

    characters = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
