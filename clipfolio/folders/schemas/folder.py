"""Folder schema."""

from datetime import datetime

from clipfolio.common.base_clipfolio_model import BaseClipfolioModel


class Folder(BaseClipfolioModel):
    """A user-named container clips can be assigned to."""

    id: str
    name: str
    created_at: datetime
