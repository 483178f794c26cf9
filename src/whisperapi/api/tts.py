"""Client for the text-to-speech endpoint.

Long input is split with the text splitter before synthesis, one request per
piece, sent sequentially in text order.
"""

import logging
from typing import Optional

from whisperapi.api.base import DEFAULT_BASE_URL, APIError, BaseAPIClient
from whisperapi.chunking.splitter import TextSplitter
from whisperapi.config import SUPPORTED_AUDIO_FORMATS
from whisperapi.models import SpeechResponse

logger = logging.getLogger(__name__)

MAX_TEXT_LENGTH = 4096  # Maximum characters the endpoint accepts per request
DEFAULT_MODEL = "tts-1-hd"
DEFAULT_VOICE = "nova"
DEFAULT_RESPONSE_FORMAT = "mp3"


class SpeechError(APIError):
    """Custom exception for speech synthesis errors."""

    pass


class SpeechClient(BaseAPIClient):
    """HTTP client for the text-to-speech API.

    Args:
        api_key: Bearer token for the API
        base_url: API base URL
        model: Default synthesis model (default: "tts-1-hd")
        voice: Default voice (default: "nova")
        response_format: Default audio format (default: "mp3")
        max_chars: Maximum characters per request (default: 4096)
        timeout: Request timeout in seconds
        max_retries: Attempts per request

    Attributes:
        splitter: TextSplitter bound to max_chars

    Example:
        >>> with SpeechClient(api_key="sk-...") as client:
        ...     parts = client.speak(long_text)
        ...     len(parts)
        3
    """

    error_class = SpeechError

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
        voice: str = DEFAULT_VOICE,
        response_format: str = DEFAULT_RESPONSE_FORMAT,
        max_chars: int = MAX_TEXT_LENGTH,
        timeout: int = 60,
        max_retries: int = 3,
        retry_delay: float = 1.0,
    ):
        super().__init__(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout,
            max_retries=max_retries,
            retry_delay=retry_delay,
        )
        self.model = model
        self.voice = voice
        self.response_format = response_format
        self.splitter = TextSplitter(max_chars=max_chars)

    @property
    def max_chars(self) -> int:
        return self.splitter.max_chars

    def synthesize(
        self,
        text: str,
        model: Optional[str] = None,
        voice: Optional[str] = None,
        response_format: Optional[str] = None,
        speed: Optional[float] = None,
    ) -> SpeechResponse:
        """Convert a single piece of text to speech.

        Args:
            text: Text to speak, at most max_chars characters
            model: Model name, defaults to the client's model
            voice: Voice name, defaults to the client's voice
            response_format: Audio format, defaults to the client's format
            speed: Optional playback speed (0.25 to 4.0)

        Returns:
            Synthesized audio

        Raises:
            SpeechError: If the request fails or returns no audio
            ValueError: If text is empty, too long, or the format is unsupported
        """
        self._require_api_key()

        if not text:
            raise ValueError("Text cannot be empty")
        if len(text) > self.max_chars:
            raise ValueError(
                f"Text has {len(text)} characters, maximum is {self.max_chars}"
            )

        audio_format = response_format or self.response_format
        if audio_format not in SUPPORTED_AUDIO_FORMATS:
            raise ValueError(
                f"Unsupported response_format '{audio_format}'. "
                f"Expected one of: {', '.join(SUPPORTED_AUDIO_FORMATS)}"
            )

        payload = {
            "model": model or self.model,
            "input": text,
            "voice": voice or self.voice,
            "response_format": audio_format,
        }
        if speed is not None:
            payload["speed"] = speed

        response = self._post("/audio/speech", json=payload)

        if not response.content:
            raise SpeechError("No audio returned from speech API")

        return SpeechResponse(audio_content=response.content, format=audio_format)

    def speak(
        self,
        text: str,
        model: Optional[str] = None,
        voice: Optional[str] = None,
        response_format: Optional[str] = None,
        speed: Optional[float] = None,
    ) -> list[SpeechResponse]:
        """Convert text of any length to speech, one response per piece.

        Args:
            text: Text to speak
            model: Model name override
            voice: Voice name override
            response_format: Audio format override
            speed: Optional playback speed

        Returns:
            Synthesized audio pieces in text order; empty for empty text

        Raises:
            SpeechError: If any request fails
        """
        self._require_api_key()

        parts = self.splitter.split(text)
        responses = []

        for index, part in enumerate(parts):
            logger.info(f"Synthesizing part {index + 1}/{len(parts)} ({len(part)} characters)")
            responses.append(
                self.synthesize(
                    part,
                    model=model,
                    voice=voice,
                    response_format=response_format,
                    speed=speed,
                )
            )

        return responses
