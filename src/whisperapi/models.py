"""Response data structures for the transcription and speech APIs."""

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass
class Segment:
    """One timed segment of a verbose transcription.

    Attributes:
        id: Segment index within the transcription
        seek: Seek offset of the segment
        start: Start time in seconds
        end: End time in seconds
        text: Transcribed text of the segment
        tokens: Token ids of the segment text
        temperature: Sampling temperature used
        avg_logprob: Average log probability
        compression_ratio: Compression ratio of the segment
        no_speech_prob: Probability that the segment is silence
        transient: Whether the segment is transient
    """

    id: int = 0
    seek: int = 0
    start: float = 0.0
    end: float = 0.0
    text: str = ""
    tokens: list[int] = field(default_factory=list)
    temperature: float = 0.0
    avg_logprob: float = 0.0
    compression_ratio: float = 0.0
    no_speech_prob: float = 0.0
    transient: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Segment":
        """Build a segment from an API payload.

        Unknown keys are ignored; missing or null fields take their defaults.
        """
        return cls(
            id=int(data.get("id") or 0),
            seek=int(data.get("seek") or 0),
            start=float(data.get("start") or 0.0),
            end=float(data.get("end") or 0.0),
            text=data.get("text") or "",
            tokens=list(data.get("tokens") or []),
            temperature=float(data.get("temperature") or 0.0),
            avg_logprob=float(data.get("avg_logprob") or 0.0),
            compression_ratio=float(data.get("compression_ratio") or 0.0),
            no_speech_prob=float(data.get("no_speech_prob") or 0.0),
            transient=bool(data.get("transient") or False),
        )


@dataclass
class TranscribeResponse:
    """Result of a transcription request.

    Plain ``json`` responses only carry ``text``; ``verbose_json`` responses
    add task, language, duration and segments.
    """

    text: str
    task: str = ""
    language: str = ""
    duration: float = 0.0
    segments: list[Segment] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "TranscribeResponse":
        """Build a response from a decoded JSON payload.

        Raises:
            ValueError: If the payload has no string ``text`` field
        """
        if "text" not in data:
            raise ValueError("Transcription payload has no 'text' field")
        if not isinstance(data["text"], str):
            raise ValueError(
                f"Transcription 'text' must be a string, got {type(data['text']).__name__}"
            )

        return cls(
            text=data["text"],
            task=data.get("task") or "",
            language=data.get("language") or "",
            duration=float(data.get("duration") or 0.0),
            segments=[Segment.from_dict(s) for s in data.get("segments") or []],
        )


@dataclass(frozen=True)
class SpeechResponse:
    """Synthesized audio for one piece of text.

    Attributes:
        audio_content: Raw audio bytes as returned by the API
        format: Audio container format, e.g. ``mp3``
        duration: Clip length in seconds when known
    """

    audio_content: bytes
    format: str = "mp3"
    duration: Optional[float] = None

    def __post_init__(self) -> None:
        if not self.audio_content:
            raise ValueError("Speech audio content cannot be empty")
