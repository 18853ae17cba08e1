import structlog
from typing import Optional

from promptcraft.storage import get_storage

log = structlog.get_logger()


def get_all_collections():
    """Get every collection ordered by id."""
    return get_storage().list_collections()


def get_collection_by_id(collection_id: int):
    """Return a single collection dict or None if not found."""
    return get_storage().get_collection(collection_id)


def create_collection(title: str, description: Optional[str] = None):
    collection = get_storage().create_collection(title, description)
    log.info("collection.created", collection_id=collection["id"], title=title)
    return collection


def update_collection_by_id(collection_id: int, changes: dict):
    """
    Apply a partial update ({title?, description?}).
    Returns the updated collection, or None if not found.
    """
    collection = get_storage().update_collection(collection_id, changes)
    if collection is None:
        return None
    log.info("collection.updated", collection_id=collection_id, fields=sorted(changes))
    return collection


def delete_collection_by_id(collection_id: int) -> bool:
    """Delete a collection together with all of its prompts."""
    deleted = get_storage().delete_collection(collection_id)
    if deleted:
        log.info("collection.deleted", collection_id=collection_id)
    return deleted
