"""
Service layer exceptions.
"""

# Statuses that will not change on retry; the request fails immediately.
FAIL_FAST_STATUSES = frozenset({400, 404})


class ServiceError(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, service_id: str | None = None):
        self.service_id = service_id
        super().__init__(message)


class RequestTimeoutError(ServiceError):
    """Request timed out."""

    def __init__(self, service_id: str, timeout: float):
        self.timeout = timeout
        super().__init__(
            f"Request to service '{service_id}' timed out after {timeout}s",
            service_id=service_id,
        )


class HttpStatusError(ServiceError):
    """Server answered with a non-2xx status."""

    def __init__(self, service_id: str, status_code: int, reason: str = ""):
        self.status_code = status_code
        self.reason = reason
        message = f"HTTP {status_code}"
        if reason:
            message += f": {reason}"
        super().__init__(message, service_id=service_id)

    @property
    def is_client_error(self) -> bool:
        """True when retrying cannot help (400 / 404)."""
        return self.status_code in FAIL_FAST_STATUSES


class InvalidResponseError(ServiceError):
    """Response body is not JSON or has the wrong shape."""

    pass


class RetriesExhaustedError(ServiceError):
    """Every attempt failed."""

    def __init__(self, service_id: str, attempts: int, last_error: Exception):
        self.attempts = attempts
        self.last_error = last_error
        super().__init__(
            f"Failed to fetch after {attempts} attempts: {last_error}",
            service_id=service_id,
        )
