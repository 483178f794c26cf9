"""Vendor audio API clients."""

from .base import APIError, BaseAPIClient, retry_with_backoff
from .tts import SpeechClient, SpeechError
from .whisper import TranscriptionError, WhisperClient

__all__ = [
    "APIError",
    "BaseAPIClient",
    "retry_with_backoff",
    "SpeechClient",
    "SpeechError",
    "TranscriptionError",
    "WhisperClient",
]
