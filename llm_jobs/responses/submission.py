"""Job submission and status fetch against /responses."""

import json

import structlog
from pydantic import ValidationError

from llm_jobs.exceptions import EncodeError, ResponseDecodeError
from llm_jobs.transport import ResponsesTransport

from .schemas import JobRequest, JobResponse

logger = structlog.get_logger("responses")


def encode_payload(request: JobRequest) -> bytes:
    """Serialize a JobRequest into the POST /responses body.

    Raises:
        EncodeError: If the payload contains values JSON cannot represent.
    """
    payload = request.to_payload()
    try:
        return json.dumps(payload, allow_nan=False).encode("utf-8")
    except (TypeError, ValueError) as e:
        raise EncodeError(operation="submit", payload=payload, reason=str(e)) from e


def parse_response(operation: str, body: bytes) -> JobResponse:
    """Parse a response envelope.

    Raises:
        ResponseDecodeError: If the body is not a valid envelope.
    """
    try:
        return JobResponse.model_validate_json(body)
    except ValidationError as e:
        raise ResponseDecodeError(operation=operation, raw=body, reason=str(e)) from e


async def submit(transport: ResponsesTransport, request: JobRequest) -> JobResponse:
    """Submit a generation job.

    The returned response may already be terminal (synchronous completion)
    or still queued/in progress, in which case the caller polls.

    Args:
        transport: Configured transport.
        request: The job to submit.

    Returns:
        The initial JobResponse.

    Raises:
        EncodeError: If the payload cannot be serialized.
        TransportError: On network failure or non-2xx status.
        ResponseDecodeError: If the response envelope is invalid.
    """
    body = encode_payload(request)
    url = transport.url("/responses")

    logger.info(
        "job_submitting",
        url=url,
        model=request.model,
        reasoning_effort=request.reasoning_effort.value,
        previous_response_id=request.previous_response_id or "",
    )

    raw = await transport.send(
        "POST",
        url,
        body=body,
        timeout=transport.submit_timeout,
        operation="submit",
    )
    response = parse_response("submit", raw)

    logger.info("job_submitted", job_id=response.id, status=response.status)
    return response


async def fetch(transport: ResponsesTransport, job_id: str) -> JobResponse:
    """Fetch the current state of a job by id.

    Raises:
        TransportError: On network failure or non-2xx status.
        ResponseDecodeError: If the response envelope is invalid.
    """
    url = transport.url(f"/responses/{job_id}")
    raw = await transport.send(
        "GET",
        url,
        timeout=transport.fetch_timeout,
        operation="fetch",
    )
    return parse_response("fetch", raw)
