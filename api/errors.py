"""
api.errors - JSON error handlers for the API blueprint.
"""

from flask import jsonify
from werkzeug.exceptions import HTTPException

from api import api_bp


@api_bp.errorhandler(400)
@api_bp.errorhandler(404)
@api_bp.errorhandler(405)
def api_http_error(e: HTTPException):
    return jsonify({"error": e.name.lower()}), e.code


@api_bp.errorhandler(500)
def api_server_error(_e):
    return jsonify({"error": "internal server error"}), 500
