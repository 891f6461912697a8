"""Async client for structured-output jobs on the Responses API."""

from .config import Settings, get_settings
from .logger import configure_logging
from .exceptions import (
    LLMJobError,
    EncodeError,
    DecodeError,
    ResponseDecodeError,
    OutputDecodeError,
)
from .transport import (
    ResponsesTransport,
    TransportError,
    TransportTimeoutError,
    ContentDecodingError,
)
from .structured import strict_object, text_as_json_schema
from .responses import (
    ReasoningEffort,
    JobRequest,
    JobResponse,
    JobResult,
    RunMetadata,
    JobError,
    JobFailedError,
    JobTimeoutError,
    run_job,
    web_search_tool,
)
from .generate import Prompt, StructuredResult, generate_structured, image_data_url


__all__ = [
    # Config
    "Settings",
    "get_settings",
    "configure_logging",
    # Exceptions
    "LLMJobError",
    "EncodeError",
    "DecodeError",
    "ResponseDecodeError",
    "OutputDecodeError",
    "TransportError",
    "TransportTimeoutError",
    "ContentDecodingError",
    "JobError",
    "JobFailedError",
    "JobTimeoutError",
    # Transport
    "ResponsesTransport",
    # Structured output
    "strict_object",
    "text_as_json_schema",
    # Jobs
    "ReasoningEffort",
    "JobRequest",
    "JobResponse",
    "JobResult",
    "RunMetadata",
    "run_job",
    "web_search_tool",
    # Generation
    "Prompt",
    "StructuredResult",
    "generate_structured",
    "image_data_url",
]
