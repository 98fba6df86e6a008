from sqlalchemy.exc import OperationalError

from qa_forum import store
from qa_forum.extensions import db
from qa_forum.models import Question, Answer, AnswerVote, QuestionVote


def test_delete_question_cascades_answers_and_votes(app, seed):
    from qa_forum.services import delete_question

    qid = seed.question("doomed")
    a1 = seed.answer(qid, "first")
    a2 = seed.answer(qid, "second")
    seed.answer_votes(a1, 1, 1, -1)
    seed.answer_votes(a2, 1)
    seed.question_votes(qid, 1, -1)

    other = seed.question("survivor")
    other_answer = seed.answer(other, "kept")
    seed.answer_votes(other_answer, 1)
    seed.question_votes(other, 1)

    with app.app_context():
        res = delete_question(qid)

        assert res.deleted is True
        assert res.reason == "ok"
        assert res.question["title"] == "doomed"
        assert res.deleted_answers == 2
        assert res.deleted_votes == 6

        db.session.expire_all()
        assert db.session.get(Question, qid) is None
        assert Answer.query.filter_by(question_id=qid).count() == 0
        assert AnswerVote.query.filter(AnswerVote.answer_id.in_([a1, a2])).count() == 0
        assert QuestionVote.query.filter_by(question_id=qid).count() == 0

        # unrelated rows untouched
        assert db.session.get(Question, other) is not None
        assert Answer.query.filter_by(question_id=other).count() == 1
        assert AnswerVote.query.filter_by(answer_id=other_answer).count() == 1
        assert QuestionVote.query.filter_by(question_id=other).count() == 1


def test_delete_missing_question_changes_nothing(app, seed, row_counts):
    from qa_forum.services import delete_question

    qid = seed.question()
    aid = seed.answer(qid)
    seed.answer_votes(aid, 1)
    before = row_counts()

    with app.app_context():
        res = delete_question(qid + 100)

    assert res.deleted is False
    assert res.reason == "not_found"
    assert res.question is None
    assert row_counts() == before


def test_failure_mid_cascade_leaves_database_untouched(app, seed, row_counts, monkeypatch):
    from qa_forum.services import delete_question

    qid = seed.question()
    aid = seed.answer(qid)
    seed.answer_votes(aid, 1, 1)
    seed.question_votes(qid, -1)
    before = row_counts()

    # answers and votes are already gone when the last step fails
    def boom(*args, **kwargs):
        raise OperationalError("DELETE FROM questions", {}, Exception("connection lost"))

    monkeypatch.setattr(store, "delete_question_row", boom)

    with app.app_context():
        res = delete_question(qid)

    assert res.deleted is False
    assert res.reason == "store_error"
    assert row_counts() == before


def test_delete_answers_without_answers_succeeds(app, seed):
    from qa_forum.services import delete_answers_for_question

    qid = seed.question()

    with app.app_context():
        res = delete_answers_for_question(qid)
        missing = delete_answers_for_question(qid + 100)

    assert (res.deleted, res.deleted_count, res.reason) == (True, 0, "ok")
    assert (missing.deleted, missing.deleted_count, missing.reason) == (True, 0, "ok")


def test_delete_answers_removes_their_votes_but_keeps_question(app, seed, row_counts):
    from qa_forum.services import delete_answers_for_question

    qid = seed.question()
    a1 = seed.answer(qid)
    a2 = seed.answer(qid)
    seed.answer_votes(a1, 1, -1)
    seed.answer_votes(a2, 1)
    seed.question_votes(qid, 1)

    with app.app_context():
        res = delete_answers_for_question(qid)

    assert res.deleted_count == 2
    assert row_counts() == {
        "questions": 1,
        "answers": 0,
        "question_votes": 1,
        "answer_votes": 0,
    }


def test_ids_beyond_the_integer_column_are_not_found(app, seed, row_counts):
    from qa_forum.services import (
        cast_vote,
        delete_answers_for_question,
        delete_question,
        get_answers_ranked,
        get_question,
    )

    qid = seed.question()
    seed.answer(qid)
    before = row_counts()
    huge = 2**64

    with app.app_context():
        assert delete_question(huge).reason == "not_found"
        assert get_answers_ranked(huge).reason == "not_found"
        assert get_question(huge).reason == "not_found"
        assert cast_vote("question", huge, 1).reason == "not_found"
        assert cast_vote("answer", 1, 1, question_id=2**31).reason == "not_found"

        cleared = delete_answers_for_question(huge)
        assert (cleared.reason, cleared.deleted_count) == ("ok", 0)

    assert row_counts() == before