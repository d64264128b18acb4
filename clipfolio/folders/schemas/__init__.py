"""Folder schemas."""

from clipfolio.folders.schemas.folder import Folder

__all__ = [
    "Folder",
]
