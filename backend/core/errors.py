"""
Structured error handling with stable error codes.

No stack traces are exposed to clients. Errors raised before a stream
starts are rendered as ``{"error": message, "code": ...}`` JSON bodies;
errors after a stream starts are reported in-band by the stream adapters.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for API responses."""

    # General errors (1xxx)
    INTERNAL_ERROR = "E1000"
    VALIDATION_ERROR = "E1001"
    NOT_FOUND = "E1002"
    METHOD_NOT_ALLOWED = "E1003"

    # Configuration errors (2xxx)
    MISSING_CREDENTIAL = "E2000"

    # Provider errors (4xxx)
    MODEL_NOT_FOUND = "E4002"
    TITLE_GENERATION_FAILED = "E4006"


@dataclass(frozen=True)
class ErrorResponse:
    """Error body returned to clients.

    Format: {error, code, request_id?, details?}
    """

    code: ErrorCode
    message: str
    request_id: str | None = None
    details: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "error": self.message,
            "code": self.code.value,
        }
        if self.request_id:
            body["request_id"] = self.request_id
        if self.details:
            body["details"] = self.details
        return body


class AppError(Exception):
    """Base application error with structured error detail."""

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)

    def to_response(self, request_id: str | None = None) -> ErrorResponse:
        return ErrorResponse(
            code=self.code,
            message=self.message,
            request_id=request_id,
            details=self.details,
        )


class ValidationError(AppError):
    """Malformed or incomplete request (400)."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(ErrorCode.VALIDATION_ERROR, message, 400, details)


class UnsupportedModelError(AppError):
    """Model name not present in the registry (400)."""

    def __init__(self, model_name: str):
        self.model_name = model_name
        super().__init__(ErrorCode.MODEL_NOT_FOUND, f"unsupported model: {model_name}", 400)


MISSING_CREDENTIAL_MESSAGE = (
    "API key required for {subject}. Provide via {header} header "
    "or {env_var} environment variable."
)


class MissingCredentialError(AppError):
    """No API key in the request header nor in the environment (400)."""

    def __init__(
        self,
        subject: str,
        header_name: str,
        env_var: str,
        template: str = MISSING_CREDENTIAL_MESSAGE,
    ):
        self.header_name = header_name
        self.env_var = env_var
        message = template.format(subject=subject, header=header_name, env_var=env_var)
        super().__init__(
            ErrorCode.MISSING_CREDENTIAL,
            message,
            400,
            details={"header": header_name, "env_var": env_var},
        )


class TitleGenerationError(AppError):
    """Title generation failed upstream (500)."""

    def __init__(self, message: str):
        super().__init__(ErrorCode.TITLE_GENERATION_FAILED, message, 500)
