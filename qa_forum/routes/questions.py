from flask import jsonify, request

from qa_forum.routes import bp, error_response
from qa_forum.routes.validators import validate_ids, validate_question_data, validate_vote
from qa_forum.services import (
    cast_vote,
    create_question,
    delete_question,
    get_question,
    list_questions,
    search_questions,
    update_question,
)

QUESTION_MESSAGES = {
    "not_found": "Question not found.",
    "empty_content": "Missing required fields: title, description, category.",
    "too_long_title": "Question title must not exceed 200 characters.",
    "too_long_category": "Question category must not exceed 100 characters.",
}


@bp.route('/questions', methods=['POST'])
@validate_question_data
def create_question_route():
    data = request.get_json(silent=True)
    result = create_question(
        title=data["title"],
        description=data["description"],
        category=data["category"],
    )

    if result.created:
        return jsonify({"message": "Question created successfully.", "data": result.question}), 201
    return error_response(result.reason, {**QUESTION_MESSAGES, "store_error": "Unable to create question."})


@bp.route('/questions', methods=['GET'])
def list_questions_route():
    result = list_questions()

    if result.success:
        return jsonify({"data": list(result.questions)})
    return error_response(result.reason, {"store_error": "Unable to fetch questions."})


@bp.route('/questions/search', methods=['GET'])
def search_questions_route():
    result = search_questions(
        title=request.args.get('title'),
        category=request.args.get('category'),
    )

    if not result.success:
        return error_response(result.reason, {
            "empty_query": "At least one search parameter (title or category) is required.",
            "store_error": "Unable to fetch questions.",
        })
    if not result.questions:
        return jsonify({"message": "No questions found matching the search criteria."}), 404
    return jsonify({"message": "Questions found successfully.", "data": list(result.questions)})


@bp.route('/questions/<question_id>', methods=['GET'])
@validate_ids
def get_question_route(question_id: int):
    result = get_question(question_id)

    if result.found:
        return jsonify({"data": result.question})
    return error_response(result.reason, {**QUESTION_MESSAGES, "store_error": "Unable to fetch question."})


@bp.route('/questions/<question_id>', methods=['PUT'])
@validate_ids
@validate_question_data
def update_question_route(question_id: int):
    data = request.get_json(silent=True)
    result = update_question(
        question_id=question_id,
        title=data["title"],
        description=data["description"],
        category=data["category"],
    )

    if result.updated:
        return jsonify({"message": "Question updated successfully."})
    return error_response(result.reason, {**QUESTION_MESSAGES, "store_error": "Unable to update question."})


@bp.route('/questions/<question_id>', methods=['DELETE'])
@validate_ids
def delete_question_route(question_id: int):
    result = delete_question(question_id)

    if result.deleted:
        return jsonify({
            "message": "Question and all associated answers have been deleted successfully.",
            "deletedQuestion": result.question,
            "deletedAnswers": result.deleted_answers,
            "deletedVotes": result.deleted_votes,
        })
    return error_response(result.reason, {
        **QUESTION_MESSAGES,
        "store_error": "Unable to delete question and its answers.",
    })


@bp.route('/questions/<question_id>/vote', methods=['POST'])
@validate_ids
@validate_vote
def vote_question_route(question_id: int):
    vote = request.get_json(silent=True)["vote"]
    result = cast_vote("question", question_id, vote)

    if result.success:
        return jsonify({
            "message": "Upvote recorded successfully." if vote == 1 else "Downvote recorded successfully.",
            "score": result.score,
        })
    return error_response(result.reason, {
        **QUESTION_MESSAGES,
        "invalid_value": "Invalid vote value. Must be 1 or -1.",
        "store_error": "Unable to vote on question.",
    })
