import structlog
from typing import Iterable, Optional

from promptcraft.storage import get_storage

log = structlog.get_logger()


def get_prompts_by_collection(collection_id: int):
    """Prompts of one collection sorted by their order."""
    return get_storage().list_prompts(collection_id)


def get_prompt_by_id(prompt_id: int):
    """Retrieve a single prompt dict or None if not found."""
    return get_storage().get_prompt(prompt_id)


def create_prompt(collection_id: int, content: str, order: Optional[int] = None):
    """
    Add a prompt to a collection.

    Without `order` the prompt goes to the end of the collection, with it the
    prompt is inserted at that position. Raises ValueError (a
    CollectionNotFoundError) when the collection does not exist.
    """
    prompt = get_storage().create_prompt(collection_id, content, order)
    log.info(
        "prompt.created",
        prompt_id=prompt["id"],
        collection_id=collection_id,
        order=prompt["order"],
        appended=order is None,
    )
    return prompt


def update_prompt_by_id(prompt_id: int, changes: dict):
    """
    Apply a partial update ({content?, order?}).
    Returns the updated prompt, or None if not found.
    """
    prompt = get_storage().update_prompt(prompt_id, changes)
    if prompt is None:
        return None
    if changes.get("order") is not None:
        log.info("prompt.moved", prompt_id=prompt_id, order=prompt["order"])
    if "content" in changes:
        log.info("prompt.updated", prompt_id=prompt_id)
    return prompt


def delete_prompt_by_id(prompt_id: int) -> bool:
    deleted = get_storage().delete_prompt(prompt_id)
    if deleted:
        log.info("prompt.deleted", prompt_id=prompt_id)
    return deleted


def reorder_prompts(collection_id: int, prompt_ids: Iterable[int]) -> int:
    """
    Give each prompt in `prompt_ids` its index in the list as new order.

    Ids that do not belong to the collection are ignored and prompts left out
    of the list keep their order. The whole pass is applied atomically.
    """
    prompt_ids = list(prompt_ids)
    updated = get_storage().reorder_prompts(collection_id, prompt_ids)
    log.info("prompts.reordered", collection_id=collection_id, updated=updated)
    skipped = len(set(prompt_ids)) - updated
    if skipped:
        log.warning(
            "prompts.reorder_skipped_ids",
            collection_id=collection_id,
            skipped=skipped,
            requested=len(prompt_ids),
        )
    return updated
