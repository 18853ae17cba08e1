from flask import Blueprint, jsonify
from werkzeug.exceptions import HTTPException

# Import individual route blueprints
from .collection_routes import collections_bp
from .prompt_routes import prompts_bp

# Create a master blueprint for the v1 API
api_v1 = Blueprint('api_v1', __name__)

# Register the individual blueprints onto the master v1 blueprint
api_v1.register_blueprint(collections_bp)
api_v1.register_blueprint(prompts_bp)


def json_http_error(error: HTTPException):
    """Render werkzeug HTTP errors (404, 405, ...) as JSON for API clients."""
    return jsonify({"message": error.description}), error.code
