"""Command-line entry point for transcription and speech synthesis.

This module provides:
- CLI argument parsing for the operation mode and inputs
- Logging setup on stderr, keeping stdout for results
- Top-level error handling with process exit codes

Usage:
    python -m whisperapi --file FILE [options]

    Options:
        --file PATH            Audio file (transcribe/both) or .txt file (tts)
        --lang LANG            Language of the audio (default: en)
        --config PATH          YAML config file (default: config.yaml)
        --op MODE              transcribe, tts, or both (default: transcribe)
        --output-dir DIR       Directory for audio part files (default: .)
        --transcript-out PATH  Also write the transcript to this file
        --log-level LEVEL      Logging level (default: INFO)
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from whisperapi.api.base import APIError
from whisperapi.config import ConfigError, load_config
from whisperapi.pipeline import OPERATIONS, run_operation

logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    """Configure logging to stderr.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    level = getattr(logging, log_level.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    logger.debug(f"Logging initialized at {log_level.upper()} level")


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse CLI arguments.

    Args:
        argv: Argument list, defaults to sys.argv[1:]

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="whisper-api",
        description="Transcribe audio and synthesize speech with a remote audio API",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        "--file",
        type=str,
        required=True,
        help="Path to the audio file to transcribe, or the .txt file to speak",
    )
    parser.add_argument(
        "--lang",
        type=str,
        default="en",
        help="Language of the audio file",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config.yaml",
        help="Path to the YAML configuration file",
    )
    parser.add_argument(
        "--op",
        type=str,
        default="transcribe",
        choices=OPERATIONS,
        help="Operation mode",
    )

    # Output configuration
    parser.add_argument(
        "--output-dir",
        type=str,
        default=".",
        help="Directory for synthesized audio part files",
    )
    parser.add_argument(
        "--transcript-out",
        type=str,
        default=None,
        help="Also write the transcription text to this file",
    )

    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )

    return parser.parse_args(argv)


def validate_arguments(args: argparse.Namespace) -> None:
    """Check that the input file exists.

    Raises:
        FileNotFoundError: If args.file doesn't exist
    """
    if not Path(args.file).is_file():
        raise FileNotFoundError(f"The file {args.file} does not exist")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point.

    Workflow:
    1. Parse CLI arguments
    2. Setup logging
    3. Validate input file
    4. Load configuration
    5. Run the selected operation

    Returns:
        Process exit code: 0 on success, 1 on error, 130 on interrupt
    """
    args = parse_arguments(argv)
    setup_logging(args.log_level)

    try:
        validate_arguments(args)
        config = load_config(args.config)
        run_operation(args, config)

    except KeyboardInterrupt:
        logger.info("Interrupted")
        return 130

    except ConfigError as e:
        logger.error(f"Error reading configuration file: {e}")
        return 1

    except APIError as e:
        logger.error(f"API request failed: {e}")
        return 1

    except (OSError, ValueError) as e:
        logger.error(f"{args.op} failed: {e}")
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
