"""Outcome of best-effort batch operations."""

from datetime import datetime
from enum import StrEnum, auto

from pydantic import Field

from clipfolio.common.base_clipfolio_model import BaseClipfolioModel


class FailureReason(StrEnum):
    """Why a single id in a batch was not applied."""

    NOT_FOUND = auto()
    FOLDER_NOT_FOUND = auto()
    INVALID_RANGE = auto()
    STORAGE_ERROR = auto()


class BatchResult(BaseClipfolioModel):
    """Per-id outcome of a batch update or delete.

    Only ``succeeded_ids`` were applied, both remotely and locally.
    ``updated_at`` is the time storage stamped on updated records; it is
    internal and left out of serialized responses.
    """

    succeeded_ids: list[str] = Field(default_factory=list)
    failed: dict[str, FailureReason] = Field(default_factory=dict)
    updated_at: datetime | None = Field(default=None, exclude=True)

    @property
    def ok(self) -> bool:
        """Return whether every id succeeded."""
        return not self.failed

    @property
    def failed_ids(self) -> list[str]:
        """Return the ids that were not applied."""
        return list(self.failed)

    def merge(self, other: "BatchResult") -> "BatchResult":
        """Combine two results over disjoint id sets."""
        return BatchResult(
            succeeded_ids=[*self.succeeded_ids, *other.succeeded_ids],
            failed={**self.failed, **other.failed},
            updated_at=self.updated_at or other.updated_at,
        )
