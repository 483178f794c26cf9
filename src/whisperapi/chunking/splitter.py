"""Greedy text splitter for length-limited speech synthesis requests.

The speech endpoint rejects input longer than a fixed number of characters,
so long texts are cut into consecutive pieces before synthesis. Pieces are
cut on Python ``str`` indices, so a multi-byte character is never broken.

Split policy:
- Prefer the last space or period within the limit as the break point
- The break character stays at the end of the preceding piece
- With no break character in range, cut hard at the limit
- ``"".join(pieces)`` always reproduces the input exactly
"""

import logging

logger = logging.getLogger(__name__)

DEFAULT_MAX_CHARS = 4096

BREAK_CHARS = frozenset(" .")


def _validate_max_chars(max_chars: int) -> None:
    # bool is an int subclass; reject it explicitly
    if isinstance(max_chars, bool) or not isinstance(max_chars, int):
        raise TypeError(f"max_chars must be an integer, got {type(max_chars).__name__}")
    if max_chars <= 0:
        raise ValueError(f"max_chars must be positive, got {max_chars}")


def split_text(text: str, max_chars: int = DEFAULT_MAX_CHARS) -> list[str]:
    """Split text into pieces of at most ``max_chars`` characters.

    Args:
        text: Text to split
        max_chars: Maximum characters per piece, must be positive

    Returns:
        Ordered list of pieces; empty list for empty text

    Raises:
        TypeError: If max_chars is not an integer
        ValueError: If max_chars is not positive

    Example:
        >>> split_text("aaaa bbbb cccc", 9)
        ['aaaa ', 'bbbb cccc']
        >>> split_text("abcdefghij", 5)
        ['abcde', 'fghij']
    """
    _validate_max_chars(max_chars)

    parts = []
    remaining = text

    while len(remaining) > max_chars:
        split_at = max_chars
        while split_at > 0 and remaining[split_at - 1] not in BREAK_CHARS:
            split_at -= 1
        if split_at == 0:
            split_at = max_chars

        parts.append(remaining[:split_at])
        remaining = remaining[split_at:]

    if remaining:
        parts.append(remaining)

    return parts


class TextSplitter:
    """Reusable splitter bound to a fixed maximum piece length.

    Args:
        max_chars: Maximum characters per piece (default: 4096)

    Attributes:
        max_chars: Validated maximum piece length

    Example:
        >>> splitter = TextSplitter(max_chars=4096)
        >>> parts = splitter.split(long_text)
    """

    def __init__(self, max_chars: int = DEFAULT_MAX_CHARS):
        """Initialize splitter.

        Args:
            max_chars: Maximum characters per piece

        Raises:
            TypeError: If max_chars is not an integer
            ValueError: If max_chars is not positive
        """
        _validate_max_chars(max_chars)

        self.max_chars = max_chars

    def split(self, text: str) -> list[str]:
        """Split text into pieces no longer than ``max_chars``."""
        parts = split_text(text, self.max_chars)
        logger.debug(f"Split {len(text)} characters into {len(parts)} parts")
        return parts
