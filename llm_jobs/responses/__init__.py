"""Responses module - job submission, polling and output extraction."""

from .schemas import (
    ReasoningEffort,
    InputRole,
    JobStatus,
    TERMINAL_SUCCESS_STATUSES,
    TERMINAL_FAILURE_STATUSES,
    Reasoning,
    TextPart,
    ImagePart,
    InputItem,
    JobRequest,
    ContentItem,
    OutputItem,
    Usage,
    JobResponse,
)
from .exceptions import JobError, JobFailedError, JobTimeoutError
from .submission import submit, fetch
from .polling import wait_for_completion, await_terminal
from .extraction import (
    RunMetadata,
    extract_output_text,
    parse_model_snapshot,
    build_run_metadata,
    log_token_usage,
)
from .tools import WebSearchTool, web_search_tool
from .service import JobResult, run_job


__all__ = [
    # Schemas
    "ReasoningEffort",
    "InputRole",
    "JobStatus",
    "TERMINAL_SUCCESS_STATUSES",
    "TERMINAL_FAILURE_STATUSES",
    "Reasoning",
    "TextPart",
    "ImagePart",
    "InputItem",
    "JobRequest",
    "ContentItem",
    "OutputItem",
    "Usage",
    "JobResponse",
    # Exceptions
    "JobError",
    "JobFailedError",
    "JobTimeoutError",
    # Protocol
    "submit",
    "fetch",
    "wait_for_completion",
    "await_terminal",
    # Extraction
    "RunMetadata",
    "extract_output_text",
    "parse_model_snapshot",
    "build_run_metadata",
    "log_token_usage",
    # Tools
    "WebSearchTool",
    "web_search_tool",
    # Service
    "JobResult",
    "run_job",
]
