from contextlib import contextmanager
from typing import Dict, Iterable, List, Optional

from promptcraft.extensions import db
from promptcraft.models.collection import Collection
from promptcraft.models.prompt import Prompt

from .base import CollectionNotFoundError, LibraryStorage
from .ordering import insert_position, move_target, shift_window

# Widest value a BIGINT primary key column can hold
MAX_ID = 2 ** 63 - 1


def _storable(record_id: int) -> bool:
    return -MAX_ID - 1 <= record_id <= MAX_ID


class DatabaseStorage(LibraryStorage):
    """Persistent storage on top of the Flask-SQLAlchemy session.

    Each write runs in one session transaction: it commits once at the end or
    rolls back everything if any step raises. Writes that renumber prompts
    first lock the parent collection row (SELECT ... FOR UPDATE), which
    serializes concurrent writers of the same collection on databases that
    support row locks. SQLite ignores the lock and serializes writers anyway.
    """

    name = "database"

    @contextmanager
    def _transaction(self):
        try:
            yield db.session
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    @staticmethod
    def _lock_collection(collection_id: int) -> Optional[Collection]:
        stmt = db.select(Collection).where(Collection.id == collection_id).with_for_update()
        return db.session.execute(stmt).scalar_one_or_none()

    @staticmethod
    def _siblings(collection_id: int):
        return Prompt.query.filter(Prompt.collection_id == collection_id)

    # --- Collections ---

    def list_collections(self) -> List[Dict]:
        return [c.to_dict() for c in Collection.query.order_by(Collection.id).all()]

    def get_collection(self, collection_id: int) -> Optional[Dict]:
        if not _storable(collection_id):
            return None
        collection = db.session.get(Collection, collection_id)
        return collection.to_dict() if collection else None

    def create_collection(self, title: str, description: Optional[str] = None) -> Dict:
        with self._transaction():
            collection = Collection(title=title, description=description)
            db.session.add(collection)
        return collection.to_dict()

    def update_collection(self, collection_id: int, changes: Dict) -> Optional[Dict]:
        if not _storable(collection_id):
            return None
        with self._transaction():
            collection = db.session.get(Collection, collection_id)
            if collection is None:
                return None
            for key in ("title", "description"):
                if key in changes:
                    setattr(collection, key, changes[key])
        return collection.to_dict()

    def delete_collection(self, collection_id: int) -> bool:
        if not _storable(collection_id):
            return False
        with self._transaction():
            collection = self._lock_collection(collection_id)
            if collection is None:
                return False
            self._siblings(collection_id).delete(synchronize_session=False)
            db.session.delete(collection)
        return True

    # --- Prompts ---

    def list_prompts(self, collection_id: int) -> List[Dict]:
        if not _storable(collection_id):
            return []
        prompts = self._siblings(collection_id).order_by(Prompt.order, Prompt.id).all()
        return [p.to_dict() for p in prompts]

    def get_prompt(self, prompt_id: int) -> Optional[Dict]:
        if not _storable(prompt_id):
            return None
        prompt = db.session.get(Prompt, prompt_id)
        return prompt.to_dict() if prompt else None

    def create_prompt(self, collection_id: int, content: str, order: Optional[int] = None) -> Dict:
        if not _storable(collection_id):
            raise CollectionNotFoundError(collection_id)
        with self._transaction():
            if self._lock_collection(collection_id) is None:
                raise CollectionNotFoundError(collection_id)
            siblings = self._siblings(collection_id)
            position = insert_position(order, siblings.count())
            siblings.filter(Prompt.order >= position).update(
                {Prompt.order: Prompt.order + 1}, synchronize_session=False
            )
            prompt = Prompt(content=content, collection_id=collection_id, order=position)
            db.session.add(prompt)
        return prompt.to_dict()

    def update_prompt(self, prompt_id: int, changes: Dict) -> Optional[Dict]:
        if not _storable(prompt_id):
            return None
        with self._transaction():
            prompt = db.session.get(Prompt, prompt_id)
            if prompt is None:
                return None
            if "content" in changes:
                prompt.content = changes["content"]
            if changes.get("order") is not None:
                self._lock_collection(prompt.collection_id)
                siblings = self._siblings(prompt.collection_id)
                target = move_target(changes["order"], siblings.count())
                window = shift_window(prompt.order, target)
                if window:
                    low, high, delta = window
                    siblings.filter(
                        Prompt.id != prompt.id,
                        Prompt.order >= low,
                        Prompt.order <= high,
                    ).update({Prompt.order: Prompt.order + delta}, synchronize_session=False)
                    prompt.order = target
        return prompt.to_dict()

    def delete_prompt(self, prompt_id: int) -> bool:
        if not _storable(prompt_id):
            return False
        with self._transaction():
            prompt = db.session.get(Prompt, prompt_id)
            if prompt is None:
                return False
            self._lock_collection(prompt.collection_id)
            self._siblings(prompt.collection_id).filter(Prompt.order > prompt.order).update(
                {Prompt.order: Prompt.order - 1}, synchronize_session=False
            )
            db.session.delete(prompt)
        return True

    def reorder_prompts(self, collection_id: int, prompt_ids: Iterable[int]) -> int:
        if not _storable(collection_id):
            return 0
        with self._transaction():
            self._lock_collection(collection_id)
            owned = {p.id: p for p in self._siblings(collection_id).all()}
            updated = set()
            for position, prompt_id in enumerate(prompt_ids):
                prompt = owned.get(prompt_id)
                if prompt is None:
                    continue
                prompt.order = position
                updated.add(prompt_id)
        return len(updated)
