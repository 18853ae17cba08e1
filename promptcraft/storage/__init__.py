"""Pluggable storage for collections and prompts.

`init_storage(app)` picks the backend named by `STORAGE_BACKEND` and keeps the
instance on the app, `get_storage()` returns it for the current app.
"""
from flask import current_app

from .base import CollectionNotFoundError, LibraryStorage
from .database import DatabaseStorage
from .memory import MemoryStorage

EXTENSION_KEY = "promptcraft.storage"

BACKENDS = {
    MemoryStorage.name: MemoryStorage,
    DatabaseStorage.name: DatabaseStorage,
}


def init_storage(app) -> LibraryStorage:
    backend = (app.config.get("STORAGE_BACKEND") or DatabaseStorage.name).lower()
    try:
        storage_cls = BACKENDS[backend]
    except KeyError:
        raise ValueError(
            f"Unknown STORAGE_BACKEND {backend!r}, expected one of: {', '.join(sorted(BACKENDS))}"
        ) from None
    storage = storage_cls()
    app.extensions[EXTENSION_KEY] = storage
    return storage


def get_storage() -> LibraryStorage:
    return current_app.extensions[EXTENSION_KEY]


__all__ = [
    "BACKENDS",
    "CollectionNotFoundError",
    "DatabaseStorage",
    "LibraryStorage",
    "MemoryStorage",
    "get_storage",
    "init_storage",
]
