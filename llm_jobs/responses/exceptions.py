"""Job-level exceptions raised while waiting for a result."""

from typing import TYPE_CHECKING, Any

from llm_jobs.exceptions import LLMJobError

if TYPE_CHECKING:
    from .extraction import RunMetadata
    from .schemas import JobResponse


class JobError(LLMJobError):
    """Base for errors about a job the vendor accepted.

    Both subclasses are retryable by resubmitting the job.

    Attributes:
        job_id: Vendor job id.
        response: Last response seen for the job, if any.
        metadata: Run metadata for auditing, attached by ``run_job``.
    """

    retryable = True

    def __init__(
        self,
        message: str,
        code: str,
        job_id: str,
        response: "JobResponse | None" = None,
    ):
        super().__init__(message=message, code=code)
        self.job_id = job_id
        self.response = response
        self.metadata: "RunMetadata | None" = None


class JobFailedError(JobError):
    """Raised when the vendor reports failed, cancelled or expired.

    Attributes:
        status: Terminal failure status.
        error_payload: Vendor error payload, as received.
    """

    def __init__(
        self,
        job_id: str,
        status: str,
        error_payload: Any = None,
        response: "JobResponse | None" = None,
    ):
        super().__init__(
            message=f"Job '{job_id}' ended with status '{status}': {error_payload}",
            code="JOB_FAILED",
            job_id=job_id,
            response=response,
        )
        self.status = status
        self.error_payload = error_payload


class JobTimeoutError(JobError):
    """Raised when polling passes its local deadline.

    The vendor job keeps running server-side.

    Attributes:
        timeout_seconds: Configured polling deadline.
        waited_seconds: Time actually spent waiting.
    """

    def __init__(
        self,
        job_id: str,
        timeout_seconds: float,
        waited_seconds: float,
        response: "JobResponse | None" = None,
    ):
        super().__init__(
            message=f"Polling job '{job_id}' timed out after {timeout_seconds}s (waited {waited_seconds:.1f}s)",
            code="JOB_TIMEOUT",
            job_id=job_id,
            response=response,
        )
        self.timeout_seconds = timeout_seconds
        self.waited_seconds = waited_seconds
