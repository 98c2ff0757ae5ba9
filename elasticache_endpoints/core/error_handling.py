"""Error types and AWS error classification for endpoint resolution."""

from typing import Optional, Tuple

from botocore.exceptions import ConnectionError as BotoConnectionError

from .logging import get_logger

THROTTLING_CODES = {
    "Throttling",
    "ThrottlingException",
    "RequestLimitExceeded",
    "TooManyRequestsException",
}
SERVICE_UNAVAILABLE_CODES = {
    "ServiceUnavailable",
    "InternalFailure",
    "InternalError",
}
AUTHENTICATION_CODES = {
    "AccessDenied",
    "AccessDeniedException",
    "UnauthorizedOperation",
    "UnrecognizedClientException",
    "InvalidClientTokenId",
    "ExpiredToken",
    "ExpiredTokenException",
    "SignatureDoesNotMatch",
    "AuthFailure",
}
VALIDATION_CODES = {
    "ValidationError",
    "ValidationException",
    "MissingParameter",
}


class EndpointError(Exception):
    """Base exception for every failure raised by this package."""

    pass


class InvalidInputError(EndpointError):
    """Raised for an empty cluster identifier or empty required configuration value."""

    pass


class ClusterNotFoundError(EndpointError):
    """Raised when no replication group or cache cluster matches the identifier."""

    pass


class AmbiguousClusterError(EndpointError):
    """Raised when an identifier expected to be unique matches more than one resource."""

    pass


class IncompatibleStateError(EndpointError):
    """Raised when the matched resource cannot supply the requested endpoint."""

    pass


class NotClusterConfigError(IncompatibleStateError):
    """Raised when a configuration endpoint is requested on a non-cluster-mode group."""

    pass


class NoEndpointError(IncompatibleStateError):
    """Raised when a matched cache cluster carries no node endpoint."""

    pass


class SessionError(EndpointError):
    """Raised when a boto3 session or client cannot be constructed."""

    pass


class UpstreamError(EndpointError):
    """Wraps a failed ElastiCache API call.

    The original botocore exception is kept as ``__cause__``; ``category`` is the
    label produced by :meth:`ErrorHandler.classify_aws_error`.
    """

    def __init__(self, message: str, category: str = "unknown", operation: Optional[str] = None):
        super().__init__(message)
        self.category = category
        self.operation = operation


def aws_error_code(error: Exception) -> Optional[str]:
    """Return the service error code of a botocore ClientError, if any."""
    response = getattr(error, "response", None)
    if isinstance(response, dict):
        return response.get("Error", {}).get("Code")
    return None


class ErrorHandler:
    """Centralized error handler for AWS operations."""

    def __init__(self):
        """Initialize error handler."""
        self.logger = get_logger("error_handler")

    def classify_aws_error(self, error: Exception) -> Tuple[bool, str]:
        """Classify AWS error for logging and retry decisions.

        Args:
            error: Exception to classify

        Returns:
            Tuple of (retryable: bool, error_category: str)
        """
        if isinstance(error, BotoConnectionError):
            return True, "network"

        code = aws_error_code(error)
        if code:
            return self._classify_error_code(code)

        error_str = str(error).lower()

        if any(
            keyword in error_str
            for keyword in ["throttling", "throttled", "rate exceeded"]
        ):
            return True, "throttling"

        if any(
            keyword in error_str
            for keyword in ["timeout", "timed out", "connection", "network", "dns"]
        ):
            return True, "network"

        if any(
            keyword in error_str
            for keyword in ["service unavailable", "503", "502", "504"]
        ):
            return True, "service_unavailable"

        if any(
            keyword in error_str
            for keyword in [
                "access denied",
                "accessdenied",
                "unauthorized",
                "unable to locate credentials",
                "invalidclienttokenid",
                "401",
                "403",
            ]
        ):
            return False, "authentication"

        if any(
            keyword in error_str for keyword in ["not found", "notfound", "404", "does not exist"]
        ):
            return False, "not_found"

        if any(
            keyword in error_str
            for keyword in ["validation", "invalid parameter", "bad request", "400"]
        ):
            return False, "validation"

        return True, "unknown"

    def _classify_error_code(self, code: str) -> Tuple[bool, str]:
        # Service error codes are authoritative; messages can mention anything
        if code in THROTTLING_CODES:
            return True, "throttling"
        if code in SERVICE_UNAVAILABLE_CODES:
            return True, "service_unavailable"
        if code in AUTHENTICATION_CODES:
            return False, "authentication"
        if code.endswith("NotFound") or code.endswith("NotFoundFault"):
            return False, "not_found"
        if code in VALIDATION_CODES or code.startswith("Invalid"):
            return False, "validation"
        return True, "unknown"

    def wrap_upstream(self, error: Exception, operation: str, cluster_id: str) -> UpstreamError:
        """Build an UpstreamError for a failed API call and log it.

        The caller raises the result ``from error`` so the botocore exception
        stays reachable.
        """
        retryable, category = self.classify_aws_error(error)
        self.logger.error(
            f"{operation} failed ({category}): {error}",
            cluster_id=cluster_id,
            retryable=retryable,
        )
        return UpstreamError(
            f"{operation} failed for '{cluster_id}': {error}",
            category=category,
            operation=operation,
        )
