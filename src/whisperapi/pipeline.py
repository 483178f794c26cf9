"""Operation pipeline chaining transcription and speech synthesis.

Each operation mode has one entry point:
- transcribe: upload audio, print the transcript
- tts: read a .txt file, synthesize it into numbered audio part files
- both: transcribe audio, then synthesize the transcript
"""

import argparse
import logging
from pathlib import Path
from typing import Union

from whisperapi.api.tts import SpeechClient
from whisperapi.api.whisper import WhisperClient
from whisperapi.config import Config
from whisperapi.models import TranscribeResponse

logger = logging.getLogger(__name__)

OPERATIONS = ("transcribe", "tts", "both")

DEFAULT_PART_PREFIX = "output_audio_part"


def read_text_file(file_path: Union[str, Path]) -> str:
    """Read a UTF-8 text file for synthesis.

    Raises:
        ValueError: If the file is not a .txt file
        FileNotFoundError: If the file doesn't exist
    """
    path = Path(file_path)
    if path.suffix.lower() != ".txt":
        raise ValueError(f"File format not supported, expected a .txt file: {path}")

    return path.read_text(encoding="utf-8")


def perform_tts(
    text: str,
    client: SpeechClient,
    output_dir: Union[str, Path] = ".",
    prefix: str = DEFAULT_PART_PREFIX,
) -> list[Path]:
    """Synthesize text and write one audio file per piece.

    Files are named ``{prefix}_{index}.{format}`` with a zero-based index
    following text order.

    Args:
        text: Text to synthesize
        client: Speech client used for synthesis
        output_dir: Directory for the audio files, created if missing
        prefix: File name prefix

    Returns:
        Paths of the written files in order

    Raises:
        SpeechError: If synthesis fails
        OSError: If a file cannot be written
    """
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    written = []
    for index, speech in enumerate(client.speak(text)):
        file_path = out_dir / f"{prefix}_{index}.{speech.format}"
        file_path.write_bytes(speech.audio_content)
        logger.info(f"Audio part saved as '{file_path}'")
        written.append(file_path)

    logger.info(f"All parts processed ({len(written)} files)")
    return written


def _whisper_client(config: Config) -> WhisperClient:
    return WhisperClient(
        api_key=config.api_key,
        base_url=config.base_url,
        model=config.model,
        timeout=config.timeout,
        max_retries=config.max_retries,
    )


def _speech_client(config: Config) -> SpeechClient:
    return SpeechClient(
        api_key=config.api_key,
        base_url=config.base_url,
        model=config.tts_model,
        voice=config.voice,
        response_format=config.response_format,
        max_chars=config.max_chars,
        timeout=config.timeout,
        max_retries=config.max_retries,
    )


def run_transcribe(args: argparse.Namespace, config: Config) -> TranscribeResponse:
    """Transcribe the audio file named by ``args.file`` and print the text.

    The transcript is also written to ``args.transcript_out`` when set.
    """
    with _whisper_client(config) as client:
        response = client.transcribe_file(args.file, language=args.lang)

    print(f"Transcription: {response.text}")

    transcript_out = getattr(args, "transcript_out", None)
    if transcript_out:
        out_path = Path(transcript_out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(response.text, encoding="utf-8")
        logger.info(f"Transcript saved as '{out_path}'")

    return response


def run_tts(args: argparse.Namespace, config: Config) -> list[Path]:
    """Synthesize the text file named by ``args.file``."""
    text = read_text_file(args.file)
    with _speech_client(config) as client:
        return perform_tts(text, client, output_dir=args.output_dir)


def run_both(args: argparse.Namespace, config: Config) -> list[Path]:
    """Transcribe the audio file, then synthesize the transcript."""
    response = run_transcribe(args, config)
    with _speech_client(config) as client:
        return perform_tts(response.text, client, output_dir=args.output_dir)


def run_operation(args: argparse.Namespace, config: Config):
    """Dispatch to the handler for ``args.op``.

    Raises:
        ValueError: If the operation is unknown
    """
    handlers = {
        "transcribe": run_transcribe,
        "tts": run_tts,
        "both": run_both,
    }
    handler = handlers.get(args.op)
    if handler is None:
        raise ValueError(f"Unsupported operation mode: {args.op}")

    logger.info(f"Running operation '{args.op}' on {args.file}")
    return handler(args, config)
