"""Command-line client for remote speech-to-text and text-to-speech APIs.

Usage:
    >>> from whisperapi import split_text
    >>> split_text("aaaa bbbb cccc", 9)
    ['aaaa ', 'bbbb cccc']
"""

from .chunking import TextSplitter, split_text
from .config import Config, ConfigError, load_config

__version__ = "0.1.0"

__all__ = [
    "Config",
    "ConfigError",
    "TextSplitter",
    "load_config",
    "split_text",
]
