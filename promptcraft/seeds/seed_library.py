import json
import os
from pathlib import Path
from typing import Optional, Union

import structlog

from promptcraft.extensions import db
from promptcraft.services import collection_service, prompt_service
from promptcraft.storage import get_storage

log = structlog.get_logger()


def default_data_file(app) -> str:
    return os.path.join(app.root_path, 'seeds', 'data', 'library.json')


def _prompt_contents(entry: dict):
    # prompts may be plain strings or {"content": "..."} objects
    for item in entry.get('prompts') or []:
        content = item.get('content') if isinstance(item, dict) else item
        if isinstance(content, str) and content:
            yield content


def run(app, data_file: Optional[Union[str, Path]] = None, create_tables_if_missing: bool = False) -> dict:
    """Load the starter library into an empty store.

    The data file is a JSON list of collections:
    `[{"title": ..., "description": ..., "prompts": ["...", ...]}, ...]`.
    Prompts keep the order they have in the file.

    Nothing is written when the store already holds a collection, so running
    the seed twice is harmless.

    Returns a summary dict: {"created_collections": int, "created_prompts": int, "skipped": bool}.
    """
    if data_file is None:
        data_file = default_data_file(app)
    data_file = str(data_file)

    if not os.path.exists(data_file):
        raise FileNotFoundError(f'Seed data file not found: {data_file}')

    with app.app_context():
        if create_tables_if_missing:
            db.create_all()

        if get_storage().list_collections():
            log.info("seed.skipped", reason="store not empty")
            return {"created_collections": 0, "created_prompts": 0, "skipped": True}

        with open(data_file, 'r', encoding='utf-8') as fh:
            payload = json.load(fh)
        if not isinstance(payload, list):
            raise ValueError('Seed data must be a JSON list of collections')

        created_collections = 0
        created_prompts = 0
        for entry in payload:
            if not isinstance(entry, dict) or not entry.get('title'):
                continue
            collection = collection_service.create_collection(entry['title'], entry.get('description'))
            created_collections += 1
            for content in _prompt_contents(entry):
                prompt_service.create_prompt(collection['id'], content)
                created_prompts += 1

    log.info("seed.completed", collections=created_collections, prompts=created_prompts)
    return {
        "created_collections": created_collections,
        "created_prompts": created_prompts,
        "skipped": False,
    }
