from flask import request, jsonify, Blueprint, current_app
from pydantic import ValidationError

from promptcraft.api.responses import invalid, no_content, not_found, server_error
from promptcraft.schemas import CollectionCreate, CollectionUpdate, parse_payload
from promptcraft.services import collection_service

collections_bp = Blueprint("collections", __name__)


@collections_bp.route("/collections", methods=["GET"])
def get_collections():
    """List all collections, ordered by id."""
    try:
        return jsonify(collection_service.get_all_collections())
    except Exception as e:
        current_app.logger.exception(e)
        return server_error("fetch collections")


@collections_bp.route("/collections/<int:collection_id>", methods=["GET"])
def get_collection(collection_id):
    try:
        collection = collection_service.get_collection_by_id(collection_id)
        if not collection:
            return not_found("Collection")
        return jsonify(collection)
    except Exception as e:
        current_app.logger.exception(e)
        return server_error("fetch collection")


@collections_bp.route("/collections", methods=["POST"])
def create_collection():
    """Create a collection.

    Accepts JSON: {title: str, description?: str}
    """
    try:
        data = parse_payload(CollectionCreate, request.get_json(silent=True))
    except ValidationError as e:
        return invalid(e)
    try:
        collection = collection_service.create_collection(data.title, data.description)
        return jsonify(collection), 201
    except Exception as e:
        current_app.logger.exception(e)
        return server_error("create collection")


@collections_bp.route("/collections/<int:collection_id>", methods=["PATCH"])
def update_collection(collection_id):
    """Update the title and/or description of a collection.

    Only the fields present in the body are changed.
    """
    try:
        data = parse_payload(CollectionUpdate, request.get_json(silent=True))
    except ValidationError as e:
        return invalid(e)
    try:
        collection = collection_service.update_collection_by_id(
            collection_id, data.model_dump(exclude_unset=True)
        )
        if not collection:
            return not_found("Collection")
        return jsonify(collection)
    except Exception as e:
        current_app.logger.exception(e)
        return server_error("update collection")


@collections_bp.route("/collections/<int:collection_id>", methods=["DELETE"])
def delete_collection(collection_id):
    """Delete a collection and every prompt in it."""
    try:
        if not collection_service.delete_collection_by_id(collection_id):
            return not_found("Collection")
        return no_content()
    except Exception as e:
        current_app.logger.exception(e)
        return server_error("delete collection")
