"""Tests for overlay collection editing."""

import pytest

from clipfolio.clips.overlays import OverlayCollection
from clipfolio.clips.schemas import TextOverlay, TextOverlayPatch
from clipfolio.common.errors import DraftValidationError, NotFoundError, ValidationErrorKind


class TestAdd:
    def test_appends_default_overlay(self):
        overlays = OverlayCollection()
        overlay_id = overlays.add()

        overlay = overlays.get(overlay_id)
        assert overlay.text == "New Text"
        assert (overlay.x, overlay.y) == (50, 50)
        assert overlay.font_size == 24
        assert overlay.color == "#ffffff"

    def test_template_overrides_defaults(self):
        overlays = OverlayCollection()
        overlay_id = overlays.add(TextOverlayPatch(text="Hello", color="#ff0000"))

        overlay = overlays.get(overlay_id)
        assert overlay.text == "Hello"
        assert overlay.color == "#ff0000"
        assert overlay.font_size == 24

    def test_preserves_insertion_order(self):
        overlays = OverlayCollection()
        ids = [overlays.add() for _ in range(3)]
        assert [o.id for o in overlays] == ids

    def test_ids_never_reused_after_removal(self):
        overlays = OverlayCollection()
        first = overlays.add()
        second = overlays.add()
        overlays.remove(second)
        third = overlays.add()

        assert third not in {first, second}
        assert len({o.id for o in overlays}) == len(overlays)

    def test_skips_ids_loaded_from_stored_clip(self):
        overlays = OverlayCollection.from_overlays(
            [TextOverlay(id="overlay-1"), TextOverlay(id="overlay-2")]
        )
        overlays.remove("overlay-2")
        new_id = overlays.add()
        assert new_id not in {"overlay-1", "overlay-2"}

    def test_template_clearing_a_field_is_rejected(self):
        overlays = OverlayCollection()
        with pytest.raises(DraftValidationError):
            overlays.add(TextOverlayPatch(fontSize=None))
        assert len(overlays) == 0
        assert overlays.add() == "overlay-1"

    def test_from_overlays_rejects_duplicates(self):
        with pytest.raises(ValueError):
            OverlayCollection.from_overlays([TextOverlay(id="a"), TextOverlay(id="a")])


class TestUpdate:
    def test_merges_only_set_fields(self):
        overlays = OverlayCollection()
        overlay_id = overlays.add()

        updated = overlays.update(overlay_id, TextOverlayPatch(text="Title", fontSize=48))

        assert updated.text == "Title"
        assert updated.font_size == 48
        assert updated.color == "#ffffff"
        assert overlays.get(overlay_id) == updated

    def test_keeps_position_in_sequence(self):
        overlays = OverlayCollection()
        ids = [overlays.add() for _ in range(3)]
        overlays.update(ids[1], TextOverlayPatch(x=10))
        assert [o.id for o in overlays] == ids

    def test_unknown_id_raises(self):
        overlays = OverlayCollection()
        with pytest.raises(NotFoundError):
            overlays.update("overlay-99", TextOverlayPatch(text="x"))

    def test_removed_id_raises(self):
        overlays = OverlayCollection()
        overlay_id = overlays.add()
        overlays.remove(overlay_id)
        with pytest.raises(NotFoundError):
            overlays.update(overlay_id, TextOverlayPatch(text="x"))

    def test_clearing_a_field_is_rejected(self):
        overlays = OverlayCollection()
        overlay_id = overlays.add()

        with pytest.raises(DraftValidationError) as exc_info:
            overlays.update(overlay_id, TextOverlayPatch(text=None, color="#000000"))

        assert exc_info.value.kind == ValidationErrorKind.INVALID_OVERLAY
        assert overlays.get(overlay_id).text == "New Text"
        assert overlays.get(overlay_id).color == "#ffffff"

class TestRemove:
    def test_removes_without_renumbering(self):
        overlays = OverlayCollection()
        first, second, third = (overlays.add() for _ in range(3))
        overlays.remove(second)

        assert [o.id for o in overlays] == [first, third]
        assert second not in overlays

    def test_unknown_id_raises(self):
        overlays = OverlayCollection()
        with pytest.raises(NotFoundError):
            overlays.remove("nope")

    def test_to_list_returns_copy(self):
        overlays = OverlayCollection()
        overlays.add()
        snapshot = overlays.to_list()
        snapshot.clear()
        assert len(overlays) == 1
