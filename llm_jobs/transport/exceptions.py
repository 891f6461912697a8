"""Transport-level exceptions."""

from llm_jobs.exceptions import LLMJobError


class TransportError(LLMJobError):
    """Raised when an HTTP exchange with the vendor API fails.

    Covers network failures, non-2xx statuses and body decompression errors.

    Attributes:
        operation: Operation that issued the request.
        url: Request URL.
        status_code: HTTP status if a response arrived, else None.
        body: Raw response body (verbatim) if one arrived.
    """

    def __init__(
        self,
        operation: str,
        url: str,
        reason: str,
        status_code: int | None = None,
        body: str = "",
        code: str = "TRANSPORT_ERROR",
    ):
        detail = f"{operation} {url} failed: {reason}"
        if body:
            detail = f"{detail}: {body}"
        super().__init__(message=detail, code=code)
        self.operation = operation
        self.url = url
        self.reason = reason
        self.status_code = status_code
        self.body = body


class TransportTimeoutError(TransportError):
    """Raised when the vendor API doesn't respond in time.

    Attributes:
        timeout_seconds: Timeout that was exceeded.
    """

    def __init__(self, operation: str, url: str, timeout_seconds: float):
        super().__init__(
            operation=operation,
            url=url,
            reason=f"timed out after {timeout_seconds}s",
            code="TRANSPORT_TIMEOUT",
        )
        self.timeout_seconds = timeout_seconds


class ContentDecodingError(TransportError):
    """Raised when a compressed response body cannot be decompressed.

    Attributes:
        encoding: The Content-Encoding that failed.
    """

    def __init__(self, url: str, encoding: str, reason: str, operation: str = "decode_body"):
        super().__init__(
            operation=operation,
            url=url,
            reason=f"unable to decode '{encoding}' body: {reason}",
            code="CONTENT_DECODING_ERROR",
        )
        self.encoding = encoding
