"""Selecting the persistence gateway from configuration."""

import logging
import os
from enum import StrEnum, auto

from dotenv import load_dotenv

from clipfolio.gateway.memory import InMemoryGateway
from clipfolio.gateway.protocol import PersistenceGateway

load_dotenv()

logger = logging.getLogger(__name__)


class StorageBackend(StrEnum):
    """Available storage backends."""

    MEMORY = auto()
    MONGODB = auto()


def get_storage_backend() -> StorageBackend:
    """Read the storage backend from ``CLIPFOLIO_STORAGE`` (default: memory)."""
    value = os.environ.get("CLIPFOLIO_STORAGE", StorageBackend.MEMORY).strip().lower()
    try:
        return StorageBackend(value)
    except ValueError:
        msg = f"Unsupported CLIPFOLIO_STORAGE value: {value!r}"
        raise ValueError(msg) from None


def create_gateway(backend: StorageBackend | None = None) -> PersistenceGateway:
    """Create the gateway for the configured backend."""
    resolved = backend or get_storage_backend()
    logger.info("Using %s storage backend", resolved)
    if resolved == StorageBackend.MONGODB:
        from clipfolio.mongodb.gateway import MongoGateway

        return MongoGateway()
    return InMemoryGateway()
