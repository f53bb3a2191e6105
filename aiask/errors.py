from typing import Optional


class AiAskError(Exception):
    pass


class ConfigError(AiAskError):
    pass


class TransportError(AiAskError):
    """Non-success status, network failure, or a failed read while streaming."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        self.status_code = status_code
        if status_code is not None:
            message = f"HTTP error! status: {status_code}, message: {message}"
        super().__init__(message)


class UnreadableStreamError(AiAskError):
    """The response body cannot be streamed at all. Raised before any chunk is read."""

    def __init__(self, message: str = "Response body is not readable") -> None:
        super().__init__(message)
