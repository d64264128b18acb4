"""Ephemeral UI state owned by the organizer. Never persisted."""

from collections.abc import Iterable


class DraftViewState:
    """Selected clips and expanded folders of the drafts view.

    Rebuilt empty on every load; nothing here survives a reload.
    """

    def __init__(self) -> None:
        # dict keeps selection order
        self._selected: dict[str, None] = {}
        self._expanded: set[str] = set()

    @property
    def selected_ids(self) -> list[str]:
        """Return selected clip ids in the order they were selected."""
        return list(self._selected)

    @property
    def expanded_folder_ids(self) -> frozenset[str]:
        """Return the ids of folders currently expanded."""
        return frozenset(self._expanded)

    def is_selected(self, clip_id: str) -> bool:
        return clip_id in self._selected

    def toggle_select(self, clip_id: str) -> bool:
        """Flip a clip's membership and return whether it is now selected."""
        if clip_id in self._selected:
            del self._selected[clip_id]
            return False
        self._selected[clip_id] = None
        return True

    def deselect(self, clip_ids: Iterable[str]) -> None:
        for clip_id in clip_ids:
            self._selected.pop(clip_id, None)

    def clear_selection(self) -> None:
        self._selected.clear()

    def toggle_expanded(self, folder_id: str) -> bool:
        """Flip a folder's expansion and return whether it is now expanded."""
        if folder_id in self._expanded:
            self._expanded.discard(folder_id)
            return False
        self._expanded.add(folder_id)
        return True

    def collapse(self, folder_id: str) -> None:
        self._expanded.discard(folder_id)

    def reset(self) -> None:
        """Drop all ephemeral state."""
        self._selected.clear()
        self._expanded.clear()
