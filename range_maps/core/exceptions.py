"""Exception taxonomy for the range-map import layer.

The conversion core never raises for malformed map content: skipped
tags, rings and coordinates simply drop out of the result. Everything
that *does* raise (configuration, storage, persistence, caller contract
violations) inherits from ``RangeMapError`` and carries structured
context so that the batch importer can report it uniformly.

Taxonomy categories
-------------------
- ``ValidationError``: input/contract violations, never retryable.
- ``TransientError``: temporary failures (network, throttle), retryable.
- ``PermanentError``: unrecoverable domain failures, not retryable.
- ``ContractError``: payload/schema drift between stages, never retryable.

Every exception exposes ``to_error_dict()`` for a stable structured
error payload suitable for import reports and logging.
"""

from __future__ import annotations


class RangeMapError(Exception):
    """Base exception for all range-map errors.

    Attributes:
        message: Human-readable error description.
        stage: Stage where the error occurred
            (e.g. ``"config"``, ``"download"``, ``"store"``).
        code: Machine-readable error code (e.g. ``"RANGE_MAP_EMPTY"``).
        retryable: Whether the caller may retry the operation.
        correlation_id: Identifier of the document or species being processed.
    """

    #: Default stage for subclasses (override via class attribute or kwarg).
    default_stage: str = ""
    #: Default code for subclasses (override via class attribute or kwarg).
    default_code: str = ""

    def __init__(
        self,
        message: str = "",
        *,
        stage: str = "",
        code: str = "",
        retryable: bool = False,
        correlation_id: str = "",
    ) -> None:
        self.message = message
        self.stage = stage or self.default_stage
        self.code = code or self.default_code
        self.retryable = retryable
        self.correlation_id = correlation_id
        super().__init__(message)

    @property
    def category(self) -> str:
        """Return the error category based on concrete class."""
        if isinstance(self, ContractError):
            return "contract"
        if isinstance(self, ValidationError):
            return "validation"
        if isinstance(self, TransientError):
            return "transient"
        if isinstance(self, PermanentError):
            return "permanent"
        return "transient" if self.retryable else "permanent"

    def to_error_dict(self) -> dict[str, object]:
        """Return a structured error payload with stable keys."""
        return {
            "category": self.category,
            "code": self.code,
            "stage": self.stage,
            "message": self.message,
            "retryable": self.retryable,
            "correlation_id": self.correlation_id,
        }


# ---------------------------------------------------------------------------
# Category base classes
# ---------------------------------------------------------------------------


class ValidationError(RangeMapError):
    """Input or domain-model validation failure. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class TransientError(RangeMapError):
    """Temporary failure that may succeed on retry."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class PermanentError(RangeMapError):
    """Unrecoverable domain failure. Not retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


class ContractError(RangeMapError):
    """Payload or schema drift between stages. Never retryable."""

    def __init__(self, message: str = "", **kwargs: object) -> None:
        kwargs.setdefault("retryable", False)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]


# ---------------------------------------------------------------------------
# Import-layer errors
# ---------------------------------------------------------------------------


class SourceError(TransientError):
    """Raised when a KML document cannot be listed or downloaded."""

    default_stage = "download"
    default_code = "RANGE_MAP_DOWNLOAD_FAILED"


class StoreError(TransientError):
    """Raised when a converted range map cannot be persisted."""

    default_stage = "store"
    default_code = "RANGE_MAP_STORE_FAILED"


class EmptyRangeMapError(PermanentError):
    """Raised by the importer when a document converts to zero features."""

    default_stage = "convert"
    default_code = "RANGE_MAP_EMPTY"


class ArgumentValidationError(ValueError, ValidationError):
    """Raised when a caller passes an argument outside its contract.

    Attributes:
        argument: Name of the offending argument.
        value: The invalid value.
    """

    default_stage = "convert"
    default_code = "INVALID_ARGUMENT"

    def __init__(self, argument: str, value: object, message: str) -> None:
        self.argument = argument
        self.value = value
        ValidationError.__init__(self, f"{argument}={value!r}: {message}")
