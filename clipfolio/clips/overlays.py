"""In-memory editing of a clip's text overlays."""

import itertools
from collections.abc import Iterable, Iterator

from clipfolio.clips.schemas.overlay import TextOverlay, TextOverlayPatch
from clipfolio.common.errors import NotFoundError


class OverlayCollection:
    """Ordered, id-keyed text overlays of a clip being edited.

    Ids come from a per-collection counter and are never handed out twice,
    including ids that were loaded from a stored clip or already removed.
    Nothing here touches storage; overlays are persisted with their clip.
    """

    def __init__(self, id_prefix: str = "overlay") -> None:
        """Initialize an empty collection.

        Args:
            id_prefix: Prefix for generated overlay ids.
        """
        self._overlays: list[TextOverlay] = []
        self._issued_ids: set[str] = set()
        self._counter = itertools.count(1)
        self._id_prefix = id_prefix

    @classmethod
    def from_overlays(cls, overlays: Iterable[TextOverlay]) -> "OverlayCollection":
        """Seed a collection from stored overlays, reserving their ids."""
        collection = cls()
        for overlay in overlays:
            if overlay.id in collection._issued_ids:
                msg = f"Duplicate overlay id: {overlay.id}"
                raise ValueError(msg)
            collection._issued_ids.add(overlay.id)
            collection._overlays.append(overlay)
        return collection

    def __iter__(self) -> Iterator[TextOverlay]:
        return iter(list(self._overlays))

    def __len__(self) -> int:
        return len(self._overlays)

    def __contains__(self, overlay_id: object) -> bool:
        return any(overlay.id == overlay_id for overlay in self._overlays)

    def _next_id(self) -> str:
        while True:
            candidate = f"{self._id_prefix}-{next(self._counter)}"
            if candidate not in self._issued_ids:
                self._issued_ids.add(candidate)
                return candidate

    def _index_of(self, overlay_id: str) -> int:
        for index, overlay in enumerate(self._overlays):
            if overlay.id == overlay_id:
                return index
        raise NotFoundError("overlay", overlay_id)

    def add(self, template: TextOverlayPatch | None = None) -> str:
        """Append a default overlay and return its new id.

        Args:
            template: Optional fields overriding the defaults.

        Returns:
            The generated overlay id.

        Raises:
            DraftValidationError: If the template clears a field.
        """
        overrides = template.changes() if template is not None else {}
        overlay_id = self._next_id()
        self._overlays.append(TextOverlay(id=overlay_id, **overrides))
        return overlay_id

    def get(self, overlay_id: str) -> TextOverlay:
        """Return the overlay with ``overlay_id``.

        Raises:
            NotFoundError: If no overlay has that id.
        """
        return self._overlays[self._index_of(overlay_id)]

    def update(self, overlay_id: str, patch: TextOverlayPatch) -> TextOverlay:
        """Merge the patch's set fields into an overlay, keeping its position.

        Raises:
            NotFoundError: If no overlay has that id.
            DraftValidationError: If the patch clears a field.
        """
        index = self._index_of(overlay_id)
        current = self._overlays[index]
        updated = TextOverlay.model_validate({**current.model_dump(), **patch.changes()})
        self._overlays[index] = updated
        return updated

    def remove(self, overlay_id: str) -> TextOverlay:
        """Remove an overlay. Remaining ids are left as they are.

        Raises:
            NotFoundError: If no overlay has that id.
        """
        return self._overlays.pop(self._index_of(overlay_id))

    def to_list(self) -> list[TextOverlay]:
        """Return the overlays in insertion order."""
        return list(self._overlays)
