"""Text splitting for length-limited API requests."""

from whisperapi.chunking.splitter import DEFAULT_MAX_CHARS, TextSplitter, split_text

__all__ = ["DEFAULT_MAX_CHARS", "TextSplitter", "split_text"]
