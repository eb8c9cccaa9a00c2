"""Exception hierarchy for the EVM JSON-RPC client."""

from typing import Any


class RPCClientError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(RPCClientError):
    """Raised when a client or transport is built with invalid settings."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class ValidationError(RPCClientError):
    """Raised when input validation fails."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class ContextError(RPCClientError):
    """Raised when a request context ends before the call completes."""

    pass


class DeadlineExceededError(ContextError):
    """Raised when the request deadline has elapsed."""

    def __init__(self, message: str = "request deadline exceeded", details: dict | None = None):
        super().__init__(message, details)


class RequestCancelledError(ContextError):
    """Raised when the request context was cancelled by the caller."""

    def __init__(self, message: str = "request cancelled", details: dict | None = None):
        super().__init__(message, details)


class TransportError(RPCClientError):
    """Raised when a single transport fails to deliver a request."""

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.endpoint = endpoint
        self.status_code = status_code


class RPCError(TransportError):
    """Raised when the node answers with a JSON-RPC error object."""

    def __init__(
        self,
        code: int | None,
        message: str,
        data: Any | None = None,
        endpoint: str | None = None,
    ):
        text = f"rpc error {code}: {message}" if code is not None else f"rpc error: {message}"
        super().__init__(text, endpoint=endpoint, details={"code": code, "data": data})
        self.code = code
        self.rpc_message = message
        self.data = data


class RetriesExhaustedError(RPCClientError):
    """Raised when every attempt across every transport has failed."""

    def __init__(self, attempts: int, last_error: BaseException | None):
        super().__init__(
            f"request failed after {attempts} attempts: {last_error}",
            details={"attempts": attempts},
        )
        self.attempts = attempts
        self.last_error = last_error


class DecodeError(RPCClientError):
    """Raised when a raw response cannot be decoded into the requested type."""

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any | None = None,
        details: dict | None = None,
    ):
        super().__init__(message, details)
        self.field = field
        self.value = value


class EmptyResponseError(DecodeError):
    """Raised when the node returned an empty payload or JSON null."""

    pass


class MalformedHexError(DecodeError):
    """Raised when a hex quantity or hex data value is malformed."""

    pass


class FieldMismatchError(DecodeError):
    """Raised when a value has the wrong JSON kind or a field is missing."""

    pass


class WalletError(RPCClientError):
    """Raised when a signing or wallet operation fails."""

    pass
