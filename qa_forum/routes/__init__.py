from flask import Blueprint, current_app, jsonify
from werkzeug.exceptions import HTTPException

bp = Blueprint('routes', __name__)

STATUS_BY_REASON = {
    "ok": 200,
    "not_found": 404,
    "store_error": 500,
}

DEFAULT_MESSAGES = {
    "not_found": "Resource not found.",
    "store_error": "Something went wrong! Please try again later.",
}


def status_for(reason: str) -> int:
    # every other reason is a validation failure
    return STATUS_BY_REASON.get(reason, 400)


def error_response(reason: str, messages: dict):
    message = messages.get(reason) or DEFAULT_MESSAGES.get(reason) or "Invalid request data."
    return jsonify({"message": message}), status_for(reason)


@bp.app_errorhandler(HTTPException)
def handle_http_error(error):
    return jsonify({"message": error.description}), error.code


@bp.app_errorhandler(Exception)
def handle_unexpected_error(error):
    current_app.logger.exception("Unhandled error")
    return jsonify({"message": "Something went wrong! Please try again later."}), 500


@bp.route('/test')
def health():
    return jsonify("Server API is working")


# view modules register on bp, so they import after it exists
from qa_forum.routes import questions, answers  # noqa: E402,F401
