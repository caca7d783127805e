"""
Exception types raised by the provider's library layers.

Runners are the only place where these are turned into Ansible failures
(`module.fail_json`); everything below them raises and propagates.

    ArmProviderError (base)
    ├── ApiRequestError - non-2xx or unparseable response from the remote API
    ├── InvalidResourceIdError - a resource id that cannot be parsed
    ├── OperationCancelledError - the stop context was triggered
    └── DispatchError - create-or-update orchestration failures
        ├── InvalidStateError
        ├── UnknownOperationError
        ├── MutationError
        ├── FetchAfterMutationError
        └── MissingIdentifierError
"""

from typing import Any, Dict, Optional


class ArmProviderError(Exception):
    """Base exception for all provider errors.

    Attributes:
        message: Human-readable error description
        context: Additional key/value details (resource names, status codes, ...)
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message


class ApiRequestError(ArmProviderError):
    """Raised when the remote API answers with a failure status."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        body: Any = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message, context)
        self.status_code = status_code
        self.body = body


class InvalidResourceIdError(ArmProviderError):
    pass


class OperationCancelledError(ArmProviderError):
    pass


class DispatchError(ArmProviderError):
    """Base class for failures of the write-then-confirm dispatcher."""


class InvalidStateError(DispatchError):
    """The resource state lacks a name or a resource group."""


class UnknownOperationError(DispatchError):
    """The client does not declare or implement the requested mutation."""


class MutationError(DispatchError):
    """The create-or-update call failed. Wraps the underlying error."""


class FetchAfterMutationError(DispatchError):
    """
    The confirmatory read failed after a successful mutation. The remote object
    may exist, but the local state is left unconfirmed.
    """


class MissingIdentifierError(DispatchError):
    """The confirmatory read succeeded but carried no resource id."""


def is_not_found(error: BaseException) -> bool:
    """Returns True if the error is an API response with status 404."""
    return isinstance(error, ApiRequestError) and error.status_code == 404
