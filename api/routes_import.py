"""
api.routes_import - /api/v1/categories/import endpoint.

Accepts JSON or CSV via multipart file upload or raw request body.
"""

from flask import request, jsonify

from api import api_bp
from import_engine import run_import, parse_records, RecordParseError


@api_bp.route("/categories/import", methods=["POST"])
def api_import_categories():
    """
    POST /api/v1/categories/import

    Multipart: field name 'file' (CSV when the filename ends in .csv)
    Or: raw JSON / CSV as request body (Content-Type decides).
    """
    content_type = request.content_type or ""

    if "multipart" in content_type:
        f = request.files.get("file")
        if not f:
            return jsonify({"error": "no file in upload"}), 400
        content = f.read()
        content_type = "text/csv" if (f.filename or "").lower().endswith(".csv") \
            else (f.mimetype or "")
    else:
        content = request.get_data()

    if not content:
        return jsonify({"error": "empty body"}), 400

    try:
        records = parse_records(content, content_type)
    except RecordParseError as exc:
        return jsonify({"error": str(exc)}), 400

    report = run_import(records)
    return jsonify(report.to_dict())
