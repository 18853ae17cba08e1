import itertools
import threading
from typing import Dict, Iterable, List, Optional

from .base import CollectionNotFoundError, LibraryStorage
from .ordering import insert_position, move_target, shift_window


class MemoryStorage(LibraryStorage):
    """Process-wide storage kept in plain dicts. Everything is lost on restart.

    A single re-entrant lock guards every call, so multi-step writes such as
    reorder and cascade delete are never observed half-done.
    """

    name = "memory"

    def __init__(self):
        self._lock = threading.RLock()
        self._collections: Dict[int, Dict] = {}
        self._prompts: Dict[int, Dict] = {}
        self._collection_ids = itertools.count(1)
        self._prompt_ids = itertools.count(1)

    # --- Collections ---

    def list_collections(self) -> List[Dict]:
        with self._lock:
            return [dict(c) for _, c in sorted(self._collections.items())]

    def get_collection(self, collection_id: int) -> Optional[Dict]:
        with self._lock:
            collection = self._collections.get(collection_id)
            return dict(collection) if collection else None

    def create_collection(self, title: str, description: Optional[str] = None) -> Dict:
        with self._lock:
            collection_id = next(self._collection_ids)
            collection = {"id": collection_id, "title": title, "description": description}
            self._collections[collection_id] = collection
            return dict(collection)

    def update_collection(self, collection_id: int, changes: Dict) -> Optional[Dict]:
        with self._lock:
            collection = self._collections.get(collection_id)
            if collection is None:
                return None
            for key in ("title", "description"):
                if key in changes:
                    collection[key] = changes[key]
            return dict(collection)

    def delete_collection(self, collection_id: int) -> bool:
        with self._lock:
            if collection_id not in self._collections:
                return False
            for prompt in self._owned_by(collection_id):
                del self._prompts[prompt["id"]]
            del self._collections[collection_id]
            return True

    # --- Prompts ---

    def _owned_by(self, collection_id: int) -> List[Dict]:
        # sorted() is stable, so equal orders keep insertion order
        owned = [p for p in self._prompts.values() if p["collectionId"] == collection_id]
        return sorted(owned, key=lambda p: p["order"])

    def list_prompts(self, collection_id: int) -> List[Dict]:
        with self._lock:
            return [dict(p) for p in self._owned_by(collection_id)]

    def get_prompt(self, prompt_id: int) -> Optional[Dict]:
        with self._lock:
            prompt = self._prompts.get(prompt_id)
            return dict(prompt) if prompt else None

    def create_prompt(self, collection_id: int, content: str, order: Optional[int] = None) -> Dict:
        with self._lock:
            if collection_id not in self._collections:
                raise CollectionNotFoundError(collection_id)
            siblings = self._owned_by(collection_id)
            position = insert_position(order, len(siblings))
            for sibling in siblings:
                if sibling["order"] >= position:
                    sibling["order"] += 1
            prompt_id = next(self._prompt_ids)
            prompt = {
                "id": prompt_id,
                "content": content,
                "collectionId": collection_id,
                "order": position,
            }
            self._prompts[prompt_id] = prompt
            return dict(prompt)

    def update_prompt(self, prompt_id: int, changes: Dict) -> Optional[Dict]:
        with self._lock:
            prompt = self._prompts.get(prompt_id)
            if prompt is None:
                return None
            if "content" in changes:
                prompt["content"] = changes["content"]
            if changes.get("order") is not None:
                siblings = self._owned_by(prompt["collectionId"])
                target = move_target(changes["order"], len(siblings))
                window = shift_window(prompt["order"], target)
                if window:
                    low, high, delta = window
                    for sibling in siblings:
                        if sibling["id"] != prompt_id and low <= sibling["order"] <= high:
                            sibling["order"] += delta
                    prompt["order"] = target
            return dict(prompt)

    def delete_prompt(self, prompt_id: int) -> bool:
        with self._lock:
            prompt = self._prompts.pop(prompt_id, None)
            if prompt is None:
                return False
            for sibling in self._owned_by(prompt["collectionId"]):
                if sibling["order"] > prompt["order"]:
                    sibling["order"] -= 1
            return True

    def reorder_prompts(self, collection_id: int, prompt_ids: Iterable[int]) -> int:
        # nothing to roll back here, so consume the ids before touching any prompt
        prompt_ids = list(prompt_ids)
        with self._lock:
            owned = {p["id"]: p for p in self._owned_by(collection_id)}
            updated = set()
            for position, prompt_id in enumerate(prompt_ids):
                prompt = owned.get(prompt_id)
                if prompt is None:
                    continue
                prompt["order"] = position
                updated.add(prompt_id)
            return len(updated)
