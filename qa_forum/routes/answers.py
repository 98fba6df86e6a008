from flask import jsonify, request

from qa_forum.routes import bp, error_response
from qa_forum.routes.validators import validate_answer_data, validate_ids, validate_vote
from qa_forum.services import (
    cast_vote,
    create_answer,
    delete_answers_for_question,
    get_answers_ranked,
)


@bp.route('/questions/<question_id>/answers', methods=['POST'])
@validate_ids
@validate_answer_data
def create_answer_route(question_id: int):
    data = request.get_json(silent=True)
    result = create_answer(question_id=question_id, content=data["content"])

    if result.created:
        return jsonify({"message": "Answer created successfully.", "data": result.answer}), 201
    return error_response(result.reason, {
        "not_found": "Question not found.",
        "empty_content": "Answer content is required.",
        "too_long_content": "Answer content must not exceed 300 characters.",
        "store_error": "Unable to create answer.",
    })


@bp.route('/questions/<question_id>/answers', methods=['GET'])
@validate_ids
def list_answers_route(question_id: int):
    """Answers of a question, highest score first, newest first on ties."""
    result = get_answers_ranked(question_id)

    if not result.found:
        return error_response(result.reason, {
            "not_found": "Question not found.",
            "store_error": "Unable to fetch answers.",
        })

    question = {"id": result.question_id, "title": result.title}
    if not result.has_answers:
        return jsonify({
            "message": "No answers found for this question.",
            "question": question,
            "answers": [],
        })
    return jsonify({
        "message": "Answers retrieved successfully.",
        "question": question,
        "answersCount": len(result.answers),
        "answers": [a.to_dict() for a in result.answers],
    })


@bp.route('/questions/<question_id>/answers', methods=['DELETE'])
@validate_ids
def delete_answers_route(question_id: int):
    result = delete_answers_for_question(question_id)

    if result.deleted:
        return jsonify({
            "message": "All answers for the question have been deleted successfully.",
            "deletedCount": result.deleted_count,
        })
    return error_response(result.reason, {"store_error": "Unable to delete answers."})


@bp.route('/questions/<question_id>/answers/<answer_id>/vote', methods=['POST'])
@validate_ids
@validate_vote
def vote_answer_route(question_id: int, answer_id: int):
    vote = request.get_json(silent=True)["vote"]
    result = cast_vote("answer", answer_id, vote, question_id=question_id)

    if result.success:
        return jsonify({
            "message": "Upvote recorded successfully." if vote == 1 else "Downvote recorded successfully.",
            "score": result.score,
        })
    return error_response(result.reason, {
        "not_found": "Answer not found.",
        "invalid_value": "Invalid vote value. Must be 1 or -1.",
        "store_error": "Unable to vote on answer.",
    })
