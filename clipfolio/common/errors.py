"""Error taxonomy shared by the clip, folder and organizer layers."""

from enum import StrEnum, auto


class ValidationErrorKind(StrEnum):
    """Reason a draft was rejected before reaching storage."""

    EMPTY_NAME = auto()
    MISSING_TITLE = auto()
    INVERTED_RANGE = auto()
    OUT_OF_BOUNDS = auto()
    INVALID_SOURCE = auto()
    INVALID_OVERLAY = auto()


class ClipfolioError(Exception):
    """Base class for all errors raised by Clipfolio."""


class DraftValidationError(ClipfolioError):
    """Raised when user input fails local validation.

    Always raised before any gateway call, so nothing invalid is ever sent to
    storage.
    """

    def __init__(self, kind: ValidationErrorKind, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message


class NotFoundError(ClipfolioError):
    """Raised when a folder, clip, video or overlay id does not exist."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} {entity_id} not found")
        self.entity = entity
        self.entity_id = entity_id


class GatewayError(ClipfolioError):
    """Raised when the persistence gateway fails as a whole.

    Args:
        kind: Short machine-readable category (e.g. ``unavailable``).
        message: Human readable description.
    """

    def __init__(self, kind: str, message: str) -> None:
        super().__init__(f"{kind}: {message}")
        self.kind = kind
        self.message = message
