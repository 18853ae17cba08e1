"""Storage contract shared by every backend.

Collections and prompts cross this boundary as plain dicts shaped like the
JSON the API returns: ``{"id", "title", "description"}`` for a collection and
``{"id", "content", "collectionId", "order"}`` for a prompt.

Every method that touches more than one record is atomic: either all of its
writes land or none do.
"""
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional


class CollectionNotFoundError(ValueError):
    """Raised when a prompt would be attached to a collection that does not exist."""

    def __init__(self, collection_id: int):
        super().__init__(f"Collection {collection_id} not found")
        self.collection_id = collection_id


class LibraryStorage(ABC):
    name = "abstract"

    # --- Collections ---

    @abstractmethod
    def list_collections(self) -> List[Dict]:
        """Return every collection ordered by id."""

    @abstractmethod
    def get_collection(self, collection_id: int) -> Optional[Dict]:
        ...

    @abstractmethod
    def create_collection(self, title: str, description: Optional[str] = None) -> Dict:
        ...

    @abstractmethod
    def update_collection(self, collection_id: int, changes: Dict) -> Optional[Dict]:
        """Apply a partial `{title?, description?}` update, None when absent."""

    @abstractmethod
    def delete_collection(self, collection_id: int) -> bool:
        """Delete the collection and all of its prompts in one step."""

    # --- Prompts ---

    @abstractmethod
    def list_prompts(self, collection_id: int) -> List[Dict]:
        """Return the prompts of a collection sorted by `order` (stable)."""

    @abstractmethod
    def get_prompt(self, prompt_id: int) -> Optional[Dict]:
        ...

    @abstractmethod
    def create_prompt(self, collection_id: int, content: str, order: Optional[int] = None) -> Dict:
        """Insert a prompt.

        With `order=None` the prompt is appended. Otherwise it is inserted at
        `order` (clamped to the current count) and the prompts at or after
        that position move down by one. Raises CollectionNotFoundError.
        """

    @abstractmethod
    def update_prompt(self, prompt_id: int, changes: Dict) -> Optional[Dict]:
        """Apply a partial `{content?, order?}` update, None when absent.

        A new `order` moves the prompt and shifts the prompts in between.
        """

    @abstractmethod
    def delete_prompt(self, prompt_id: int) -> bool:
        """Delete a prompt and close the gap it leaves behind."""

    @abstractmethod
    def reorder_prompts(self, collection_id: int, prompt_ids: Iterable[int]) -> int:
        """Give each listed prompt of the collection its index as `order`.

        Ids outside the collection are skipped, omitted prompts keep their
        order. Returns how many prompts were updated.
        """
