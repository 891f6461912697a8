"""Base exceptions shared by all llm_jobs components."""

from typing import Any


class LLMJobError(Exception):
    """Base exception for all llm_jobs errors.

    Attributes:
        message: Human-readable message naming the failed operation.
        code: Stable machine-readable error code.
        retryable: Whether resubmitting the job may succeed.
    """

    retryable: bool = False

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


class EncodeError(LLMJobError):
    """Raised when a request payload cannot be serialized.

    Attributes:
        operation: Operation that was building the payload.
        payload: The payload that failed to encode.
    """

    def __init__(self, operation: str, payload: Any, reason: str):
        super().__init__(
            message=f"{operation}: failed to encode request payload: {reason}",
            code="ENCODE_ERROR"
        )
        self.operation = operation
        self.payload = payload
        self.reason = reason


class DecodeError(LLMJobError):
    """Base for failures to parse a response envelope or model output."""
    pass


class ResponseDecodeError(DecodeError):
    """Raised when the vendor response envelope is not valid.

    Attributes:
        operation: Operation whose response could not be parsed.
        raw: The raw response body.
    """

    def __init__(self, operation: str, raw: bytes | str, reason: str):
        super().__init__(
            message=f"{operation}: failed to decode response body: {reason}",
            code="RESPONSE_DECODE_ERROR"
        )
        self.operation = operation
        self.raw = raw
        self.reason = reason


class OutputDecodeError(DecodeError):
    """Raised when the model's output text does not match the requested schema.

    The model is instructed to emit exactly one JSON object matching a strict
    schema, so this signals a model-side contract violation rather than a
    client bug.

    Attributes:
        raw_text: The concatenated output text as received.
        metadata: RunMetadata of the job that produced the text, when known.
    """

    def __init__(self, raw_text: str, reason: str):
        super().__init__(
            message=f"Model output does not match the requested schema: {reason}",
            code="OUTPUT_SCHEMA_VIOLATION"
        )
        self.raw_text = raw_text
        self.reason = reason
        self.metadata = None
