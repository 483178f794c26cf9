"""Tests for shared API client plumbing."""

import time
from unittest.mock import Mock, patch

import pytest
import requests

from whisperapi.api.base import APIError, BaseAPIClient, retry_with_backoff


class TestAPIError:
    """Test APIError attributes."""

    def test_attributes(self):
        """Test status and body are stored."""
        error = APIError("boom", status_code=500, response_text="oops")

        assert str(error) == "boom"
        assert error.status_code == 500
        assert error.response_text == "oops"

    @pytest.mark.parametrize("status", [None, 408, 429, 500, 502, 503])
    def test_retryable_statuses(self, status):
        """Test network errors, throttling and server errors are retryable."""
        assert APIError("x", status_code=status).retryable is True

    @pytest.mark.parametrize("status", [400, 401, 403, 404, 413])
    def test_client_errors_not_retryable(self, status):
        """Test client errors are not retried."""
        assert APIError("x", status_code=status).retryable is False


class TestRetryDecorator:
    """Test retry_with_backoff decorator."""

    def test_retry_success_on_first_attempt(self):
        """Test function succeeds on first attempt."""
        mock_func = Mock(return_value="success")
        decorated = retry_with_backoff(max_retries=3)(mock_func)

        assert decorated() == "success"
        assert mock_func.call_count == 1

    def test_retry_success_after_failures(self):
        """Test function succeeds after initial failures."""
        mock_func = Mock(
            side_effect=[
                requests.RequestException("error1"),
                APIError("server error", status_code=503),
                "success",
            ]
        )
        decorated = retry_with_backoff(max_retries=3, base_delay=0.01)(mock_func)

        assert decorated() == "success"
        assert mock_func.call_count == 3

    def test_retry_exhausted(self):
        """Test all retries exhausted."""
        mock_func = Mock(side_effect=requests.RequestException("persistent error"))
        decorated = retry_with_backoff(max_retries=3, base_delay=0.01)(mock_func)

        with pytest.raises(requests.RequestException, match="persistent error"):
            decorated()

        assert mock_func.call_count == 3

    def test_client_error_not_retried(self):
        """Test non-retryable APIError propagates immediately."""
        mock_func = Mock(side_effect=APIError("bad request", status_code=400))
        decorated = retry_with_backoff(max_retries=3, base_delay=0.01)(mock_func)

        with pytest.raises(APIError, match="bad request"):
            decorated()

        assert mock_func.call_count == 1

    @pytest.mark.parametrize("max_retries", [0, 1])
    def test_single_attempt_when_retries_disabled(self, max_retries):
        """Test max_retries below 2 makes exactly one attempt."""
        mock_func = Mock(side_effect=requests.RequestException("down"))
        decorated = retry_with_backoff(max_retries=max_retries)(mock_func)

        with pytest.raises(requests.RequestException):
            decorated()

        assert mock_func.call_count == 1

    def test_other_exceptions_not_retried(self):
        """Test unrelated exceptions propagate immediately."""
        mock_func = Mock(side_effect=KeyError("nope"))
        decorated = retry_with_backoff(max_retries=3, base_delay=0.01)(mock_func)

        with pytest.raises(KeyError):
            decorated()

        assert mock_func.call_count == 1

    @patch("whisperapi.api.base.time.sleep")
    def test_retry_exponential_backoff(self, mock_sleep):
        """Test delays double and are capped."""
        mock_func = Mock(side_effect=requests.RequestException("down"))
        decorated = retry_with_backoff(max_retries=5, base_delay=1.0, max_delay=3.0)(
            mock_func
        )

        with pytest.raises(requests.RequestException):
            decorated()

        delays = [c.args[0] for c in mock_sleep.call_args_list]
        assert delays == [1.0, 2.0, 3.0, 3.0]

    def test_retry_waits_between_attempts(self):
        """Test real delay elapses between attempts."""
        mock_func = Mock(side_effect=[requests.RequestException("e"), "success"])
        decorated = retry_with_backoff(max_retries=2, base_delay=0.1)(mock_func)

        start_time = time.time()
        decorated()

        assert time.time() - start_time >= 0.09


class TestBaseAPIClient:
    """Test BaseAPIClient."""

    def test_init_strips_trailing_slash(self):
        """Test base URL trailing slash is removed."""
        client = BaseAPIClient(api_key="k", base_url="http://localhost:8080/v1/")

        assert client.base_url == "http://localhost:8080/v1"

    def test_url_joins_paths(self):
        """Test url() joins base and relative path."""
        client = BaseAPIClient(api_key="k", base_url="http://host/v1")

        assert client.url("/audio/speech") == "http://host/v1/audio/speech"
        assert client.url("audio/speech") == "http://host/v1/audio/speech"

    @patch("requests.Session.post")
    def test_post_sends_auth_header_and_timeout(self, mock_post):
        """Test bearer token and timeout are sent."""
        mock_post.return_value = Mock(status_code=200)
        client = BaseAPIClient(api_key="sk-test", timeout=12)

        client._post("/anything", json={"a": 1})

        call_args = mock_post.call_args
        assert call_args[0][0] == "https://api.openai.com/v1/anything"
        assert call_args[1]["headers"]["Authorization"] == "Bearer sk-test"
        assert call_args[1]["timeout"] == 12
        assert call_args[1]["json"] == {"a": 1}

    @patch("requests.Session.post")
    def test_post_non_200_raises(self, mock_post):
        """Test non-200 response raises APIError with status."""
        mock_post.return_value = Mock(status_code=401, text="unauthorized")
        client = BaseAPIClient(api_key="k")

        with pytest.raises(APIError) as exc_info:
            client._post("/x")

        assert exc_info.value.status_code == 401
        assert exc_info.value.response_text == "unauthorized"
        assert mock_post.call_count == 1

    @patch("requests.Session.post")
    def test_post_retries_server_errors(self, mock_post):
        """Test 5xx responses are retried until success."""
        mock_post.side_effect = [
            Mock(status_code=500, text="error"),
            Mock(status_code=200),
        ]
        client = BaseAPIClient(api_key="k", retry_delay=0.0)

        response = client._post("/x")

        assert response.status_code == 200
        assert mock_post.call_count == 2

    @patch("requests.Session.post")
    def test_post_timeout_wrapped(self, mock_post):
        """Test timeouts are wrapped in APIError."""
        mock_post.side_effect = requests.Timeout("slow")
        client = BaseAPIClient(api_key="k", timeout=5, max_retries=1)

        with pytest.raises(APIError, match="Request timeout after 5s"):
            client._post("/x")

    def test_require_api_key(self):
        """Test missing key raises the client's error class."""
        client = BaseAPIClient(api_key="")

        with pytest.raises(APIError, match="API key is missing"):
            client._require_api_key()

    def test_context_manager(self):
        """Test client as context manager closes session."""
        with patch("requests.Session.close") as mock_close:
            with BaseAPIClient(api_key="k") as client:
                assert client is not None

            mock_close.assert_called_once()
