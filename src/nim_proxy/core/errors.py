"""Error taxonomy surfaced to clients as error envelopes"""

from typing import Optional

from ..models.openai import ErrorDetail, ErrorResponse


class ProxyError(Exception):
    """Base class for failures that map to an error envelope"""

    status_code: int = 500
    error_type: str = "server_error"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[int] = None,
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.code = code

    def to_response(self) -> ErrorResponse:
        """Build the error envelope for this failure"""
        return ErrorResponse(
            error=ErrorDetail(
                message=self.message,
                type=self.error_type,
                code=self.code,
            )
        )


class MethodNotAllowedError(ProxyError):
    status_code = 405
    error_type = "invalid_request_error"

    def __init__(self, message: str = "Method not allowed"):
        super().__init__(message)


class InvalidRequestError(ProxyError):
    status_code = 400
    error_type = "invalid_request_error"


class ConfigurationError(ProxyError):
    """Raised per request when the upstream credential is missing"""
    status_code = 500
    error_type = "server_error"


class UpstreamTimeoutError(ProxyError):
    status_code = 504
    error_type = "timeout_error"

    def __init__(
        self,
        message: str = "Request timeout - NVIDIA API took too long to respond",
    ):
        super().__init__(message, code=504)


class UpstreamAPIError(ProxyError):
    """Upstream answered with an error status; the status is passed through"""
    error_type = "nvidia_api_error"

    def __init__(self, message: str, status_code: int):
        super().__init__(message, status_code=status_code, code=status_code)


class ServerError(ProxyError):
    status_code = 500
    error_type = "server_error"

    def __init__(self, message: str = "Internal server error"):
        super().__init__(message, code=500)
