"""Tests for the folder registry."""

from datetime import UTC, datetime, timedelta

import pytest

from clipfolio.common.errors import DraftValidationError, NotFoundError, ValidationErrorKind
from clipfolio.folders.registry import FolderRegistry
from clipfolio.folders.schemas import Folder

_BASE = datetime(2025, 11, 2, 7, 0, tzinfo=UTC)


def _folder(folder_id: str, name: str = "Cuts", minutes: int = 0) -> Folder:
    return Folder(id=folder_id, name=name, created_at=_BASE + timedelta(minutes=minutes))


class TestCheckName:
    def test_trims_name(self):
        assert FolderRegistry.check_name("  Intro Cuts ") == "Intro Cuts"

    @pytest.mark.parametrize("name", ["", "   "])
    def test_rejects_blank(self, name):
        with pytest.raises(DraftValidationError) as exc_info:
            FolderRegistry.check_name(name)
        assert exc_info.value.kind == ValidationErrorKind.EMPTY_NAME


class TestRegistry:
    def test_create_and_get(self):
        registry = FolderRegistry()
        folder = registry.create(_folder("f1"))
        assert registry.get("f1") == folder
        assert "f1" in registry
        assert len(registry) == 1

    def test_create_rejects_duplicate_id(self):
        registry = FolderRegistry([_folder("f1")])
        with pytest.raises(ValueError):
            registry.create(_folder("f1"))

    def test_rename(self):
        registry = FolderRegistry([_folder("f1", "Old")])
        renamed = registry.rename("f1", " New ")
        assert renamed.name == "New"
        assert registry.get("f1").name == "New"

    def test_rename_unknown(self):
        with pytest.raises(NotFoundError):
            FolderRegistry().rename("missing", "Name")

    def test_rename_blank_keeps_name(self):
        registry = FolderRegistry([_folder("f1", "Old")])
        with pytest.raises(DraftValidationError):
            registry.rename("f1", " ")
        assert registry.get("f1").name == "Old"

    def test_delete(self):
        registry = FolderRegistry([_folder("f1")])
        registry.delete("f1")
        assert "f1" not in registry

    def test_delete_unknown(self):
        with pytest.raises(NotFoundError):
            FolderRegistry().delete("missing")

    def test_lists_newest_first(self):
        registry = FolderRegistry([_folder("a", minutes=0), _folder("b", minutes=5), _folder("c", minutes=2)])
        assert [f.id for f in registry.list_folders()] == ["b", "c", "a"]

    def test_ties_broken_by_id(self):
        registry = FolderRegistry([_folder("a"), _folder("c"), _folder("b")])
        assert [f.id for f in registry.list_folders()] == ["c", "b", "a"]
