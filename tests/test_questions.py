from qa_forum.extensions import db
from qa_forum.models import Question, Answer


def test_create_question_strips_and_persists(app):
    from qa_forum.services import create_question

    with app.app_context():
        res = create_question(title="  How?  ", description="Because", category="python")

        assert res.created is True
        assert res.question["title"] == "How?"
        assert db.session.get(Question, res.question["id"]).category == "python"


def test_create_question_requires_all_fields(app, row_counts):
    from qa_forum.services import create_question

    with app.app_context():
        res = create_question(title="t", description="   ", category="c")
        long_title = create_question(title="x" * 201, description="d", category="c")

    assert res.reason == "empty_content"
    assert long_title.reason == "too_long_title"
    assert row_counts()["questions"] == 0


def test_get_question_includes_score(app, seed):
    from qa_forum.services import get_question

    qid = seed.question("scored")
    seed.question_votes(qid, 1, 1, -1, 1)

    with app.app_context():
        res = get_question(qid)
        missing = get_question(qid + 1)

    assert res.found is True
    assert res.question["score"] == 2
    assert missing.reason == "not_found"


def test_update_question_in_place(app, seed):
    from qa_forum.services import update_question

    qid = seed.question("old")

    with app.app_context():
        res = update_question(qid, title="new", description="nd", category="nc")
        missing = update_question(qid + 1, title="new", description="nd", category="nc")

        db.session.expire_all()
        q = db.session.get(Question, qid)
        assert (q.title, q.description, q.category) == ("new", "nd", "nc")

    assert res.updated is True
    assert missing.reason == "not_found"


def test_search_matches_title_or_category(app, seed):
    from qa_forum.services import search_questions

    seed.question("Flask routing", category="web")
    seed.question("Pandas merge", category="data")
    seed.question("Async loops", category="WEB")

    with app.app_context():
        by_title = search_questions(title="flask")
        by_either = search_questions(title="pandas", category="web")
        empty = search_questions()

    assert [q["title"] for q in by_title.questions] == ["Flask routing"]
    assert [q["title"] for q in by_either.questions] == ["Flask routing", "Pandas merge", "Async loops"]
    assert empty.reason == "empty_query"


def test_list_questions_in_creation_order(app, seed):
    from qa_forum.services import list_questions

    first = seed.question("a")
    second = seed.question("b")

    with app.app_context():
        res = list_questions()

    assert [q["id"] for q in res.questions] == [first, second]


def test_create_answer_length_limit(app, seed):
    from qa_forum.services import create_answer

    qid = seed.question()

    with app.app_context():
        ok = create_answer(qid, "x" * 300)
        too_long = create_answer(qid, "x" * 301)
        blank = create_answer(qid, "   ")
        orphan = create_answer(qid + 1, "hello")

        assert Answer.query.count() == 1

    assert ok.created is True
    assert ok.answer["question_id"] == qid
    assert too_long.reason == "too_long_content"
    assert blank.reason == "empty_content"
    assert orphan.reason == "not_found"
