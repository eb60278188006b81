"""
api.routes_categories - /api/v1/categories read + article assignment.
"""

from flask import request, jsonify, abort

from api import api_bp
from db import get_session, Category
from import_engine import run_assignments


@api_bp.route("/categories/<int:category_id>")
def get_category(category_id: int):
    session = get_session()
    try:
        category = session.get(Category, category_id)
        if category is None:
            abort(404)
        return jsonify(category.to_dict())
    finally:
        session.close()


@api_bp.route("/categories/<int:category_id>/articles", methods=["POST"])
def assign_articles(category_id: int):
    """
    POST /api/v1/categories/<id>/articles
    Body: {"article_ids": [1, 2, 3]}
    """
    data = request.get_json(silent=True) or {}
    article_ids = data.get("article_ids")
    if not isinstance(article_ids, list):
        return jsonify({"error": "article_ids must be a list"}), 400

    report = run_assignments((article_id, category_id) for article_id in article_ids)
    return jsonify(report.to_dict())
