"""Service layer: run one job from submission to extracted output."""

import asyncio
import time
from datetime import datetime, timezone
from typing import NamedTuple

import structlog

from llm_jobs.transport import ResponsesTransport

from .exceptions import JobError
from .extraction import RunMetadata, build_run_metadata, extract_output_text, log_token_usage
from .polling import (
    DEFAULT_POLL_INTERVAL_SECONDS,
    DEFAULT_POLL_TIMEOUT_SECONDS,
    Clock,
    Sleep,
    await_terminal,
)
from .schemas import JobRequest, JobResponse, JobStatus
from .submission import submit

logger = structlog.get_logger("responses")


class JobResult(NamedTuple):
    """Outcome of a successful job.

    Attributes:
        text: Concatenated output text.
        metadata: Run metadata for auditing.
        response: The terminal response envelope.
    """

    text: str
    metadata: RunMetadata
    response: JobResponse


def _attach_metadata(
    error: JobError,
    started_at: datetime,
    logs_url: str,
    status: str,
) -> None:
    response = error.response or JobResponse(id=error.job_id, status=status)
    error.metadata = build_run_metadata(response, started_at, logs_url=logs_url)


async def run_job(
    transport: ResponsesTransport,
    request: JobRequest,
    *,
    poll_interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    poll_timeout: float = DEFAULT_POLL_TIMEOUT_SECONDS,
    clock: Clock = time.monotonic,
    sleep: Sleep = asyncio.sleep,
) -> JobResult:
    """Submit a job, wait for a terminal status and extract its output.

    Args:
        transport: Configured transport.
        request: The job to run.
        poll_interval: Seconds between status polls.
        poll_timeout: Polling deadline in seconds; ``<= 0`` polls forever.
        clock: Monotonic time source for the polling deadline.
        sleep: Awaitable sleep used between polls.

    Returns:
        JobResult with text, metadata and the terminal response.

    Raises:
        EncodeError: If the request cannot be serialized.
        TransportError: On any HTTP failure.
        ResponseDecodeError: If a response envelope is invalid.
        JobFailedError: If the job fails; ``metadata`` is attached.
        JobTimeoutError: If polling times out; ``metadata`` is attached.
    """
    started_at = datetime.now(timezone.utc)
    started = time.perf_counter()

    initial = await submit(transport, request)

    try:
        final = await await_terminal(
            transport,
            initial,
            interval=poll_interval,
            timeout=poll_timeout,
            clock=clock,
            sleep=sleep,
        )
    except JobError as e:
        status = getattr(e, "status", JobStatus.TIMEOUT.value)
        _attach_metadata(e, started_at, transport.logs_url, status)
        raise

    text = extract_output_text(final)
    metadata = build_run_metadata(final, started_at, logs_url=transport.logs_url)
    log_token_usage(final)

    logger.info(
        "job_completed",
        job_id=final.id,
        status=final.status,
        duration_ms=int((time.perf_counter() - started) * 1000),
        logs_url=metadata.response_logs_url,
    )
    return JobResult(text=text, metadata=metadata, response=final)
