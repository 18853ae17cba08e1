from flask import request, jsonify, Blueprint, current_app
from pydantic import ValidationError

from promptcraft.api.responses import invalid, no_content, not_found, server_error
from promptcraft.schemas import PromptCreate, PromptUpdate, ReorderRequest, parse_payload
from promptcraft.services import prompt_service
from promptcraft.storage import CollectionNotFoundError


prompts_bp = Blueprint("prompts", __name__)


@prompts_bp.route("/collections/<int:collection_id>/prompts", methods=["GET"])
def get_prompts(collection_id):
    """List the prompts of a collection sorted by order. Unknown collections give []."""
    try:
        return jsonify(prompt_service.get_prompts_by_collection(collection_id))
    except Exception as e:
        current_app.logger.exception(e)
        return server_error("fetch prompts")


@prompts_bp.route("/collections/<int:collection_id>/prompts", methods=["POST"])
def create_prompt(collection_id):
    """Add a prompt to a collection.

    Accepts JSON: {content: str, order?: int}
    Without `order` the prompt is appended, with it the prompt is inserted at
    that position and the following prompts move down.
    """
    try:
        data = parse_payload(PromptCreate, request.get_json(silent=True))
    except ValidationError as e:
        return invalid(e)
    try:
        prompt = prompt_service.create_prompt(collection_id, data.content, data.order)
        return jsonify(prompt), 201
    except CollectionNotFoundError as e:
        return invalid([{"loc": ["collectionId"], "msg": str(e), "type": "not_found", "input": collection_id}])
    except Exception as e:
        current_app.logger.exception(e)
        return server_error("create prompt")


@prompts_bp.route("/prompts/<int:prompt_id>", methods=["GET"])
def get_prompt(prompt_id):
    try:
        prompt = prompt_service.get_prompt_by_id(prompt_id)
        if not prompt:
            return not_found("Prompt")
        return jsonify(prompt)
    except Exception as e:
        current_app.logger.exception(e)
        return server_error("fetch prompt")


@prompts_bp.route("/prompts/<int:prompt_id>", methods=["PATCH"])
def update_prompt(prompt_id):
    """Edit the content of a prompt and/or move it to another position.

    Accepts JSON: {content?: str, order?: int}
    """
    try:
        data = parse_payload(PromptUpdate, request.get_json(silent=True))
    except ValidationError as e:
        return invalid(e)
    try:
        prompt = prompt_service.update_prompt_by_id(prompt_id, data.model_dump(exclude_unset=True))
        if not prompt:
            return not_found("Prompt")
        return jsonify(prompt)
    except Exception as e:
        current_app.logger.exception(e)
        return server_error("update prompt")


@prompts_bp.route("/prompts/<int:prompt_id>", methods=["DELETE"])
def delete_prompt(prompt_id):
    try:
        if not prompt_service.delete_prompt_by_id(prompt_id):
            return not_found("Prompt")
        return no_content()
    except Exception as e:
        current_app.logger.exception(e)
        return server_error("delete prompt")


@prompts_bp.route("/collections/<int:collection_id>/prompts/reorder", methods=["PATCH"])
def reorder_prompts(collection_id):
    """Rewrite the order of a collection's prompts.

    Accepts JSON: {promptIds: [int, ...]}
    The first id gets order 0, the second 1 and so on. Ids that do not belong
    to the collection are ignored.
    """
    try:
        data = parse_payload(ReorderRequest, request.get_json(silent=True))
    except ValidationError as e:
        return invalid(e)
    try:
        prompt_service.reorder_prompts(collection_id, data.promptIds)
        return no_content()
    except Exception as e:
        current_app.logger.exception(e)
        return server_error("reorder prompts")
