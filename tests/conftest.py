import pytest

from qa_forum import create_app
from qa_forum.extensions import db
from config import Config
from qa_forum.models import Question, Answer, QuestionVote, AnswerVote


class TestConfig(Config):
    TESTING = True
    IS_DEV = True
    SECRET_KEY = "test-secret-key"
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    AUTO_CREATE_DB = False


@pytest.fixture
def app():
    app = create_app(TestConfig)

    with app.app_context():
        db.drop_all()
        db.create_all()

    yield app

    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def seed(app):
    """Insert rows directly, bypassing the services. Returns plain ids."""
    class Seeder:
        def question(self, title="Q1", description="desc", category="general"):
            with app.app_context():
                q = Question(title=title, description=description, category=category)
                db.session.add(q)
                db.session.commit()
                return q.id

        def answer(self, question_id, content="an answer"):
            with app.app_context():
                a = Answer(question_id=question_id, content=content)
                db.session.add(a)
                db.session.commit()
                return a.id

        def answer_votes(self, answer_id, *values):
            with app.app_context():
                db.session.add_all([AnswerVote(answer_id=answer_id, value=v) for v in values])
                db.session.commit()

        def question_votes(self, question_id, *values):
            with app.app_context():
                db.session.add_all([QuestionVote(question_id=question_id, value=v) for v in values])
                db.session.commit()

    return Seeder()


@pytest.fixture
def row_counts(app):
    def _counts():
        with app.app_context():
            return {
                "questions": Question.query.count(),
                "answers": Answer.query.count(),
                "question_votes": QuestionVote.query.count(),
                "answer_votes": AnswerVote.query.count(),
            }
    return _counts
