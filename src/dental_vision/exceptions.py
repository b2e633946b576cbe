"""Exceptions for the Dental Vision client core"""  # noqa: D415


class DentalVisionError(Exception):
    """Base exception for Dental Vision client errors"""  # noqa: D415


class ConfigurationError(DentalVisionError):
    """Raised when configuration is missing or invalid"""  # noqa: D415


class ValidationError(DentalVisionError):
    """Raised when user input fails a validation rule"""  # noqa: D415

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UnknownRiskLevelError(DentalVisionError):
    """Raised when a risk level is outside the known categories"""  # noqa: D415

    def __init__(self, value: str) -> None:
        super().__init__(f"Unknown risk level: {value!r}")
        self.value = value


class ApiError(DentalVisionError):
    """Base exception for failures talking to a remote service"""  # noqa: D415


class TransportError(ApiError):
    """Raised when the service is unreachable or the request timed out"""  # noqa: D415


class HttpStatusError(ApiError):
    """Raised when the service answers with a non-2xx status"""  # noqa: D415

    def __init__(self, status_code: int, body: str = "", url: str = "") -> None:
        target = f" from {url}" if url else ""
        super().__init__(f"HTTP error {status_code}{target}")
        self.status_code = status_code
        self.body = body
        self.url = url


class DecodeError(ApiError):
    """Raised when a response body does not match the expected shape"""  # noqa: D415
