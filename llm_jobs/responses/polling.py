"""Completion polling for backgrounded jobs."""

import asyncio
import time
from typing import Awaitable, Callable

import structlog

from llm_jobs.config import Settings
from llm_jobs.transport import ResponsesTransport

from .exceptions import JobFailedError, JobTimeoutError
from .schemas import JobResponse, JobStatus
from .submission import fetch

logger = structlog.get_logger("responses")


DEFAULT_POLL_INTERVAL_SECONDS = Settings.model_fields["POLL_INTERVAL_SECONDS"].default
DEFAULT_POLL_TIMEOUT_SECONDS = Settings.model_fields["POLL_DEADLINE_SECONDS"].default

Clock = Callable[[], float]
Sleep = Callable[[float], Awaitable[None]]


async def wait_for_completion(
    transport: ResponsesTransport,
    job_id: str,
    interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    timeout: float = DEFAULT_POLL_TIMEOUT_SECONDS,
    *,
    previous_status: str | None = None,
    clock: Clock = time.monotonic,
    sleep: Sleep = asyncio.sleep,
) -> JobResponse:
    """Poll a job at a fixed interval until it reaches a terminal status.

    The deadline is checked before every fetch. There is no backoff and no
    retry: a transport error ends the loop immediately.

    Args:
        transport: Configured transport.
        job_id: Vendor job id.
        interval: Seconds between polls.
        timeout: Deadline in seconds; ``<= 0`` polls forever.
        previous_status: Last status already seen (from submission), so the
            first poll only logs a change if the status actually moved.
        clock: Monotonic time source.
        sleep: Awaitable sleep.

    Returns:
        The terminal JobResponse (completed or incomplete).

    Raises:
        JobFailedError: If the job ends failed, cancelled or expired.
        JobTimeoutError: If the deadline passes first.
        TransportError: If a status fetch fails.
        ResponseDecodeError: If a status response cannot be parsed.
    """
    started = clock()
    deadline = started + timeout if timeout > 0 else None
    last_response: JobResponse | None = None
    poll = 0

    while True:
        now = clock()
        if deadline is not None and now > deadline:
            waited = now - started
            logger.warning(
                "job_poll_timeout",
                job_id=job_id,
                timeout_seconds=timeout,
                waited_seconds=round(waited, 3),
                polls=poll,
            )
            if last_response is not None:
                last_response = last_response.model_copy(update={"status": JobStatus.TIMEOUT.value})
            raise JobTimeoutError(
                job_id=job_id,
                timeout_seconds=timeout,
                waited_seconds=waited,
                response=last_response,
            )

        poll += 1
        response = await fetch(transport, job_id)
        last_response = response

        if response.status != previous_status:
            logger.info(
                "job_status_changed",
                job_id=job_id,
                poll=poll,
                previous_status=previous_status,
                status=response.status,
            )
            previous_status = response.status
        logger.info("poll_heartbeat", job_id=job_id, poll=poll, status=response.status)

        if response.is_terminal_success:
            return response
        if response.is_terminal_failure:
            logger.warning(
                "job_failed",
                job_id=job_id,
                status=response.status,
                error=response.error_message,
            )
            raise JobFailedError(
                job_id=job_id,
                status=response.status,
                error_payload=response.error,
                response=response,
            )

        await sleep(interval)


async def await_terminal(
    transport: ResponsesTransport,
    initial: JobResponse,
    interval: float = DEFAULT_POLL_INTERVAL_SECONDS,
    timeout: float = DEFAULT_POLL_TIMEOUT_SECONDS,
    *,
    clock: Clock = time.monotonic,
    sleep: Sleep = asyncio.sleep,
) -> JobResponse:
    """Resolve a submission response to a terminal one.

    A response that is already complete is returned without any network
    call. One that already failed raises without polling. Anything else is
    polled by id.

    Raises:
        JobFailedError: If the job ends in a failure status.
        JobTimeoutError: If polling passes its deadline.
    """
    if initial.is_terminal_success:
        return initial

    if initial.is_terminal_failure:
        logger.warning(
            "job_failed",
            job_id=initial.id,
            status=initial.status,
            error=initial.error_message,
        )
        raise JobFailedError(
            job_id=initial.id,
            status=initial.status,
            error_payload=initial.error,
            response=initial,
        )

    logger.info(
        "job_waiting",
        job_id=initial.id,
        status=initial.status,
        interval_seconds=interval,
        timeout_seconds=timeout,
    )
    return await wait_for_completion(
        transport,
        initial.id,
        interval=interval,
        timeout=timeout,
        previous_status=initial.status,
        clock=clock,
        sleep=sleep,
    )
