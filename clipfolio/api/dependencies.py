"""Shared FastAPI dependencies."""

from functools import cache

from clipfolio.gateway.factory import create_gateway
from clipfolio.organizer.service import DraftOrganizer


@cache
def get_organizer() -> DraftOrganizer:
    """Get the process-wide organizer, created on first use."""
    return DraftOrganizer(create_gateway())
