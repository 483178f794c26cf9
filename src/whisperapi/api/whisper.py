"""Client for the audio transcription endpoint."""

import logging
from pathlib import Path
from typing import Optional, Union

from whisperapi.api.base import DEFAULT_BASE_URL, APIError, BaseAPIClient
from whisperapi.models import TranscribeResponse

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "whisper-1"

TRANSCRIPTION_FORMATS = ("json", "verbose_json")


class TranscriptionError(APIError):
    """Custom exception for transcription errors."""

    pass


class WhisperClient(BaseAPIClient):
    """HTTP client for the speech-to-text API.

    Args:
        api_key: Bearer token for the API
        base_url: API base URL
        model: Default transcription model (default: "whisper-1")
        timeout: Request timeout in seconds
        max_retries: Attempts per request

    Example:
        >>> with WhisperClient(api_key="sk-...") as client:
        ...     result = client.transcribe_file("meeting.mp3", language="en")
        ...     print(result.text)
    """

    error_class = TranscriptionError

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        model: str = DEFAULT_MODEL,
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

    def transcribe_file(
        self,
        file_path: Union[str, Path],
        model: Optional[str] = None,
        language: Optional[str] = None,
        response_format: str = "verbose_json",
        prompt: Optional[str] = None,
        temperature: Optional[float] = None,
    ) -> TranscribeResponse:
        """Upload an audio file and return its transcription.

        Args:
            file_path: Path to the audio file
            model: Model name, defaults to the client's model
            language: ISO-639-1 language hint, e.g. "en"
            response_format: "json" or "verbose_json"
            prompt: Optional text to guide the transcription style
            temperature: Optional sampling temperature

        Returns:
            Parsed transcription

        Raises:
            TranscriptionError: If the request fails or the response is invalid
            FileNotFoundError: If the audio file doesn't exist
            ValueError: If response_format is not supported
        """
        self._require_api_key()

        if response_format not in TRANSCRIPTION_FORMATS:
            raise ValueError(
                f"Unsupported response_format '{response_format}'. "
                f"Expected one of: {', '.join(TRANSCRIPTION_FORMATS)}"
            )

        path = Path(file_path)
        if not path.is_file():
            raise FileNotFoundError(f"Audio file not found: {path}")

        data = {
            "model": model or self.model,
            "response_format": response_format,
        }
        if language:
            data["language"] = language
        if prompt:
            data["prompt"] = prompt
        if temperature is not None:
            data["temperature"] = str(temperature)

        # Read once so retries can resend the same bytes
        audio = path.read_bytes()

        logger.info(f"Transcribing {path.name} ({len(audio)} bytes) with model {data['model']}")

        response = self._post(
            "/audio/transcriptions",
            data=data,
            files={"file": (path.name, audio)},
        )

        try:
            payload = response.json()
        except ValueError as e:
            raise TranscriptionError(
                f"Transcription response is not valid JSON: {e}",
                status_code=response.status_code,
                response_text=response.text,
            ) from e

        try:
            result = TranscribeResponse.from_dict(payload)
        except (TypeError, ValueError, AttributeError) as e:
            raise TranscriptionError(f"Unexpected transcription response: {e}") from e

        logger.info(f"Transcribed {path.name}: {len(result.text)} characters")
        return result
