import logging

from flask import jsonify, render_template, request

from .exceptions import SessionStoreError

logger = logging.getLogger(__name__)


def _wants_json() -> bool:
    accept = request.accept_mimetypes
    return "application/json" in accept and not accept.accept_html


def register_error_handlers(app):
    @app.errorhandler(404)
    def not_found(error):
        if _wants_json():
            return jsonify({"error": "not_found"}), 404
        return render_template("errors/404.html"), 404

    @app.errorhandler(SessionStoreError)
    def session_unavailable(error):
        logger.error("Session store failure on %s %s: %s", request.method, request.path, error)
        return render_template("errors/500.html"), 500

    @app.errorhandler(500)
    def server_error(error):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return render_template("errors/500.html"), 500
