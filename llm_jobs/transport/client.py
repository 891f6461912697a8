"""Authenticated HTTP transport for the vendor Responses API."""

import httpx
import structlog

from llm_jobs.config import Settings, get_settings
from .encoding import decode_body
from .exceptions import ContentDecodingError, TransportError, TransportTimeoutError

logger = structlog.get_logger("transport")


DEFAULT_BASE_URL = Settings.model_fields["OPENAI_BASE_URL"].default
DEFAULT_LOGS_URL = Settings.model_fields["OPENAI_LOGS_URL"].default
DEFAULT_SUBMIT_TIMEOUT_SECONDS = Settings.model_fields["SUBMIT_TIMEOUT_SECONDS"].default
DEFAULT_FETCH_TIMEOUT_SECONDS = Settings.model_fields["FETCH_TIMEOUT_SECONDS"].default
ACCEPT_ENCODING = "gzip, deflate, br"


class ResponsesTransport:
    """Explicit client context for one vendor account.

    Holds the credentials and per-operation timeouts and is passed to every
    submission and polling call. The underlying ``httpx.AsyncClient`` is owned
    by the caller.

    Attributes:
        base_url: API root, without trailing slash.
        submit_timeout: Timeout for job submission (generation can take minutes).
        fetch_timeout: Timeout for status reads (cheap metadata fetch).
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        submit_timeout: float = DEFAULT_SUBMIT_TIMEOUT_SECONDS,
        fetch_timeout: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        logs_url: str = DEFAULT_LOGS_URL,
    ) -> None:
        if not api_key:
            raise ValueError("api_key is required")
        self._client = client
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.submit_timeout = submit_timeout
        self.fetch_timeout = fetch_timeout
        self.logs_url = logs_url.rstrip("/")

    @classmethod
    def from_settings(
        cls,
        client: httpx.AsyncClient,
        settings: Settings | None = None,
    ) -> "ResponsesTransport":
        """Build a transport from environment-backed settings.

        Args:
            client: Caller-owned HTTP client.
            settings: Settings to read; defaults to ``get_settings()``.

        Returns:
            A configured ResponsesTransport.
        """
        settings = settings or get_settings()
        return cls(
            client=client,
            api_key=settings.OPENAI_API_KEY,
            base_url=settings.OPENAI_BASE_URL,
            submit_timeout=settings.SUBMIT_TIMEOUT_SECONDS,
            fetch_timeout=settings.FETCH_TIMEOUT_SECONDS,
            logs_url=settings.OPENAI_LOGS_URL,
        )

    def url(self, path: str) -> str:
        """Join an API path onto the base URL."""
        return f"{self.base_url}/{path.lstrip('/')}"

    async def send(
        self,
        method: str,
        url: str,
        body: bytes | None = None,
        timeout: float | None = None,
        operation: str = "send",
    ) -> bytes:
        """Send an authenticated request and return the decoded response body.

        The body is read undecoded from the wire and decompressed by
        ``decode_body`` so that unknown encodings are handled explicitly.

        Args:
            method: HTTP method.
            url: Absolute request URL.
            body: Pre-encoded JSON request body, if any.
            timeout: Request timeout in seconds (defaults to fetch_timeout).
            operation: Operation name for logs and errors.

        Returns:
            Decoded response body bytes.

        Raises:
            TransportTimeoutError: If the API doesn't respond in time.
            TransportError: On connection failure or non-2xx status.
            ContentDecodingError: If a 2xx body cannot be decompressed. A
                non-2xx body that fails to decode is reported raw instead.
        """
        if timeout is None:
            timeout = self.fetch_timeout

        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Accept-Encoding": ACCEPT_ENCODING,
        }
        if body is not None:
            headers["Content-Type"] = "application/json"

        logger.debug("http_request", operation=operation, method=method, url=url)

        try:
            async with self._client.stream(
                method,
                url,
                content=body,
                headers=headers,
                timeout=timeout,
            ) as response:
                raw = b"".join([chunk async for chunk in response.aiter_raw()])
                status_code = response.status_code
                content_encoding = response.headers.get("Content-Encoding")
        except httpx.TimeoutException:
            raise TransportTimeoutError(operation=operation, url=url, timeout_seconds=timeout)
        except httpx.RequestError as e:
            raise TransportError(
                operation=operation,
                url=url,
                reason=f"Request failed: {e}",
            ) from e

        # Handle HTTP-level errors
        if not 200 <= status_code < 300:
            try:
                error_body = decode_body(raw, content_encoding, url, operation=operation)
            except ContentDecodingError as e:
                # Proxies often mislabel error pages; report the raw bytes
                logger.warning(
                    "error_body_undecodable",
                    operation=operation,
                    url=url,
                    status_code=status_code,
                    encoding=e.encoding,
                )
                error_body = raw
            raise TransportError(
                operation=operation,
                url=url,
                reason=f"status is {status_code}",
                status_code=status_code,
                body=error_body.decode("utf-8", errors="replace"),
            )

        decoded = decode_body(raw, content_encoding, url, operation=operation)

        logger.debug("http_response", operation=operation, url=url, status_code=status_code, body_bytes=len(decoded))
        return decoded
