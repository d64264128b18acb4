"""Text overlay schemas."""

from typing import Any

from pydantic import ConfigDict, Field

from clipfolio.common.base_clipfolio_model import BaseClipfolioModel
from clipfolio.common.errors import DraftValidationError, ValidationErrorKind

DEFAULT_OVERLAY_TEXT = "New Text"
DEFAULT_OVERLAY_POSITION = 50.0
DEFAULT_OVERLAY_FONT_SIZE = 24
DEFAULT_OVERLAY_COLOR = "#ffffff"


class TextOverlay(BaseClipfolioModel):
    """A positioned text annotation drawn over a clip.

    Coordinates and color are stored exactly as given; their units are up to
    the renderer.
    """

    id: str
    text: str = DEFAULT_OVERLAY_TEXT
    x: float = DEFAULT_OVERLAY_POSITION
    y: float = DEFAULT_OVERLAY_POSITION
    font_size: int = Field(default=DEFAULT_OVERLAY_FONT_SIZE, gt=0, alias="fontSize")
    color: str = DEFAULT_OVERLAY_COLOR


class TextOverlayPatch(BaseClipfolioModel):
    """Partial update for a text overlay. Only explicitly set fields apply."""

    model_config = ConfigDict(extra="forbid")

    text: str | None = None
    x: float | None = None
    y: float | None = None
    font_size: int | None = Field(default=None, gt=0, alias="fontSize")
    color: str | None = None

    def changes(self) -> dict[str, Any]:
        """Return the explicitly set fields keyed by field name.

        Raises:
            DraftValidationError: ``INVALID_OVERLAY`` if a field is explicitly
                set to None. Overlay fields can be changed but not cleared.
        """
        changes = {name: getattr(self, name) for name in self.model_fields_set}
        cleared = sorted(name for name, value in changes.items() if value is None)
        if cleared:
            msg = f"Overlay fields cannot be cleared: {', '.join(cleared)}"
            raise DraftValidationError(ValidationErrorKind.INVALID_OVERLAY, msg)
        return changes
