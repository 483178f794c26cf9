"""YAML configuration loading for the transcription and speech clients.

Example ``config.yaml``::

    apiKey: sk-...
    timeout: 60
    maxRetries: 3
    model: whisper-1
    ttsModel: tts-1-hd
    voice: nova
    responseFormat: mp3

An empty ``apiKey`` falls back to the ``OPENAI_API_KEY`` environment variable.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Union

import yaml

logger = logging.getLogger(__name__)

API_KEY_ENV_VAR = "OPENAI_API_KEY"

SUPPORTED_AUDIO_FORMATS = ("mp3", "opus", "aac", "flac", "wav", "pcm")


class ConfigError(Exception):
    """Custom exception for configuration errors."""

    pass


@dataclass
class Config:
    """Runtime configuration shared by the API clients.

    Attributes:
        api_key: Bearer token for the vendor API
        timeout: Request timeout in seconds
        max_retries: Attempts per request before giving up
        model: Transcription model name
        tts_model: Speech synthesis model name
        voice: Speech synthesis voice
        response_format: Audio format of synthesized speech
        base_url: Vendor API base URL
        max_chars: Maximum characters per speech request
    """

    api_key: str = ""
    timeout: int = 60
    max_retries: int = 3
    model: str = "whisper-1"
    tts_model: str = "tts-1-hd"
    voice: str = "nova"
    response_format: str = "mp3"
    base_url: str = "https://api.openai.com/v1"
    max_chars: int = 4096


# YAML key -> (Config attribute, expected type)
_FIELDS: dict[str, tuple[str, type]] = {
    "apiKey": ("api_key", str),
    "timeout": ("timeout", int),
    "maxRetries": ("max_retries", int),
    "model": ("model", str),
    "ttsModel": ("tts_model", str),
    "voice": ("voice", str),
    "responseFormat": ("response_format", str),
    "baseUrl": ("base_url", str),
    "maxChars": ("max_chars", int),
}


def _coerce(key: str, value: Any, expected: type) -> Any:
    # bool is an int subclass; reject it for numeric fields
    if expected is int and (isinstance(value, bool) or not isinstance(value, int)):
        raise ConfigError(f"'{key}' must be an integer, got {value!r}")
    if expected is str and not isinstance(value, str):
        raise ConfigError(f"'{key}' must be a string, got {value!r}")
    return value


def parse_config(data: dict[str, Any]) -> Config:
    """Build a validated Config from a decoded YAML mapping.

    Unknown keys are logged and ignored. Keys set to null keep their default.

    Args:
        data: Mapping loaded from the config file

    Returns:
        Validated configuration

    Raises:
        ConfigError: If a value has the wrong type or is out of range
    """
    values: dict[str, Any] = {}

    for key, value in data.items():
        if key not in _FIELDS:
            logger.warning(f"Ignoring unknown config key: {key}")
            continue
        if value is None:
            continue
        attr, expected = _FIELDS[key]
        values[attr] = _coerce(key, value, expected)

    config = Config(**values)

    if not config.api_key:
        config.api_key = os.environ.get(API_KEY_ENV_VAR, "")
        if config.api_key:
            logger.debug(f"Using API key from {API_KEY_ENV_VAR}")

    if config.timeout <= 0:
        raise ConfigError(f"timeout must be positive, got {config.timeout}")
    if config.max_retries < 0:
        raise ConfigError(f"maxRetries must be non-negative, got {config.max_retries}")
    if config.max_chars <= 0:
        raise ConfigError(f"maxChars must be positive, got {config.max_chars}")
    if config.response_format not in SUPPORTED_AUDIO_FORMATS:
        raise ConfigError(
            f"Unsupported responseFormat '{config.response_format}'. "
            f"Expected one of: {', '.join(SUPPORTED_AUDIO_FORMATS)}"
        )

    return config


def load_config(path: Union[str, Path]) -> Config:
    """Read and validate a YAML configuration file.

    Args:
        path: Path to the YAML file

    Returns:
        Validated configuration

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid
    """
    config_path = Path(path)

    if not config_path.is_file():
        raise ConfigError(f"Config file not found: {config_path}")

    try:
        with config_path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Could not read config file {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping at top level")

    config = parse_config(data)
    logger.info(f"Loaded configuration from {config_path}")
    return config
