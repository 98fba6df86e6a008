"""Request validation applied before any service call."""
import re
from functools import wraps

from flask import jsonify, request

from qa_forum.store import MAX_ID

_ID_RE = re.compile(r"[0-9]+")

_ID_LABELS = {
    "question_id": "questionId",
    "answer_id": "answerId",
}


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def validate_ids(view):
    """Reject non-numeric or out-of-range path ids and pass them on as ints."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        for name, label in _ID_LABELS.items():
            if name not in kwargs:
                continue
            raw = str(kwargs[name])
            if not _ID_RE.fullmatch(raw) or not 0 < int(raw) <= MAX_ID:
                return jsonify({"message": f"Invalid {label}. It should be a positive number."}), 400
            kwargs[name] = int(raw)
        return view(*args, **kwargs)
    return wrapper


def validate_vote(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        data = _json_body()
        vote = data.get("vote")
        # JSON true would otherwise pass as 1
        if isinstance(vote, bool) or vote not in (1, -1):
            return jsonify({"message": "Invalid vote value. Must be 1 or -1."}), 400
        return view(*args, **kwargs)
    return wrapper


def _missing_text(data: dict, fields) -> bool:
    return any(not isinstance(data.get(f), str) or not data.get(f).strip() for f in fields)


def validate_question_data(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        data = _json_body()
        if _missing_text(data, ("title", "description", "category")):
            return jsonify({"message": "Missing required fields: title, description, category."}), 400
        return view(*args, **kwargs)
    return wrapper


def validate_answer_data(view):
    @wraps(view)
    def wrapper(*args, **kwargs):
        data = _json_body()
        if _missing_text(data, ("content",)):
            return jsonify({"message": "Missing required field: content."}), 400
        return view(*args, **kwargs)
    return wrapper
