from __future__ import annotations

from typing import Any, Sequence


class GenerationError(Exception):
    """Base class for failures on the external generation path.

    Every subclass is recoverable: the orchestrator answers it with the
    template fallback.
    """

    def __init__(self, message: str, *, status_code: int | None = None, response: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response


class ExternalCallError(GenerationError):
    """The relay or the generation service could not produce a usable payload."""


class TransportFailure(ExternalCallError):
    """Network failure, unreadable body, or a non-success status."""


class AuthFailure(ExternalCallError):
    """The service rejected the credential."""


class RateLimited(ExternalCallError):
    """The service throttled the request."""


class RelayConfigurationError(ExternalCallError):
    """The relay acknowledged the request instead of returning generated content."""


class RelayWorkflowError(ExternalCallError):
    """The relay workflow ran and reported an error of its own."""


class ShapeNotFound(GenerationError):
    def __init__(self, available_keys: Sequence[str]) -> None:
        self.available_keys = list(available_keys)
        super().__init__(f"No HTML found in response; available fields: {self.available_keys}")


class ConversionFailed(GenerationError):
    """Component-style source had no return block that could be turned into a page."""


class MarkupRejected(GenerationError):
    pass


class TooShort(MarkupRejected):
    pass


class MissingRootElement(MarkupRejected):
    pass


__all__ = [
    "AuthFailure",
    "ConversionFailed",
    "ExternalCallError",
    "GenerationError",
    "MarkupRejected",
    "MissingRootElement",
    "RateLimited",
    "RelayConfigurationError",
    "RelayWorkflowError",
    "ShapeNotFound",
    "TooShort",
    "TransportFailure",
]
