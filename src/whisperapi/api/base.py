"""Shared HTTP plumbing for the vendor audio API clients.

This module provides:
- A base exception carrying HTTP status and response body
- Exponential backoff retry for transient failures
- A base client owning the requests session, auth header and URL building
"""

import logging
import time
from functools import wraps
from typing import Any, Callable, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.openai.com/v1"

RETRYABLE_STATUS_CODES = frozenset({408, 409, 429})


class APIError(Exception):
    """Base exception for vendor API errors.

    Args:
        message: Human-readable error description
        status_code: HTTP status code, None for network-level failures
        response_text: Raw response body, if any

    Attributes:
        status_code: HTTP status code or None
        response_text: Raw response body or empty string
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_text: str = "",
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response_text = response_text

    @property
    def retryable(self) -> bool:
        """Whether repeating the request could succeed."""
        if self.status_code is None:
            return True
        return self.status_code in RETRYABLE_STATUS_CODES or self.status_code >= 500


def retry_with_backoff(
    max_retries: int = 3, base_delay: float = 1.0, max_delay: float = 10.0
) -> Callable:
    """Decorator for retrying functions with exponential backoff.

    Retries on ``requests.RequestException`` and on retryable ``APIError``s.
    Client errors such as 400 or 401 are raised immediately.

    Args:
        max_retries: Maximum number of attempts; values below 1 mean one attempt
        base_delay: Initial delay in seconds (default: 1.0)
        max_delay: Maximum delay between retries (default: 10.0)

    Returns:
        Decorated function with retry logic

    Example:
        >>> @retry_with_backoff(max_retries=3)
        >>> def fetch_data():
        ...     return requests.get("http://example.com")
    """
    attempts = max(1, max_retries)

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            for attempt in range(attempts):
                try:
                    return func(*args, **kwargs)
                except (requests.RequestException, APIError) as e:
                    if isinstance(e, APIError) and not e.retryable:
                        raise
                    if attempt == attempts - 1:
                        raise

                    delay = min(base_delay * (2**attempt), max_delay)
                    logger.warning(
                        f"Request failed ({e}), retrying in {delay:.1f}s "
                        f"(attempt {attempt + 1}/{attempts})"
                    )
                    time.sleep(delay)

        return wrapper

    return decorator


class BaseAPIClient:
    """HTTP client base for the vendor audio API.

    Args:
        api_key: Bearer token for the API
        base_url: API base URL (default: "https://api.openai.com/v1")
        timeout: Request timeout in seconds (default: 60)
        max_retries: Attempts per request (default: 3)
        retry_delay: Initial backoff delay in seconds (default: 1.0)

    Attributes:
        api_key: Bearer token
        base_url: API base URL without trailing slash
        timeout: Request timeout value
        max_retries: Attempts per request
        retry_delay: Initial backoff delay
        error_class: Exception type raised by this client
        _session: Persistent requests session
    """

    error_class: type[APIError] = APIError

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: int = 60,
        max_retries: int = 3,
        retry_delay: float = 1.0,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self._session = requests.Session()

    def url(self, rel_path: str) -> str:
        """Build the full URL for a path relative to the base URL."""
        return f"{self.base_url}/{rel_path.lstrip('/')}"

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    def _require_api_key(self) -> None:
        if not self.api_key:
            raise self.error_class(
                "API key is missing. Set apiKey in the config file "
                "or the OPENAI_API_KEY environment variable"
            )

    def _post_once(self, rel_path: str, **kwargs: Any) -> requests.Response:
        """Send a single POST request and check the status.

        Raises:
            APIError: On timeout, network failure, or non-200 status
        """
        try:
            response = self._session.post(
                self.url(rel_path),
                headers=self._headers(),
                timeout=self.timeout,
                **kwargs,
            )
        except requests.Timeout as e:
            raise self.error_class(f"Request timeout after {self.timeout}s") from e
        except requests.RequestException as e:
            raise self.error_class(f"API request failed: {e}") from e

        if response.status_code != 200:
            raise self.error_class(
                f"API request to {rel_path} failed with status "
                f"{response.status_code}: {response.text}",
                status_code=response.status_code,
                response_text=response.text,
            )

        return response

    def _post(self, rel_path: str, **kwargs: Any) -> requests.Response:
        """POST with retry and exponential backoff."""
        post = retry_with_backoff(
            max_retries=self.max_retries, base_delay=self.retry_delay
        )(self._post_once)
        return post(rel_path, **kwargs)

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self._session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit - close session."""
        self.close()
