"""Error taxonomy for the Sales Agent backend.

Domain errors are reported to callers as ``{"success": false, "error": ...}``
envelopes by the dispatcher. ``UnknownOperationError`` and anything outside this
module are transport-level failures.
"""


class SalesAgentError(Exception):
    """Base class for all application errors."""


class ConfigurationError(SalesAgentError):
    pass


class DomainError(SalesAgentError):
    """An expected condition that is returned as data, never raised past the dispatcher."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DomainError):
    def __init__(self, entity: str):
        super().__init__(f"{entity} not found")
        self.entity = entity


class MissingFieldError(DomainError):
    def __init__(self, field: str, message: str | None = None):
        super().__init__(message or f"Missing required field: {field}")
        self.field = field


class InvalidArgumentError(DomainError):
    def __init__(self, field: str, reason: str):
        super().__init__(f"Invalid value for '{field}': {reason}")
        self.field = field


class UnknownOperationError(SalesAgentError):
    def __init__(self, name: str):
        super().__init__(f"Unknown tool: {name}")
        self.name = name
