from sqlalchemy import CheckConstraint

from qa_forum.extensions import db


class Question(db.Model):
    __tablename__ = 'questions'

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text, nullable=False)
    category = db.Column(db.String(100), nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'category': self.category,
        }

    def __repr__(self):
        return f"<Question {self.id} '{self.title}'>"


class Answer(db.Model):
    __tablename__ = 'answers'

    id = db.Column(db.Integer, primary_key=True)
    question_id = db.Column(db.Integer, db.ForeignKey('questions.id'), nullable=False, index=True)
    content = db.Column(db.String(300), nullable=False)

    def to_dict(self):
        return {
            'id': self.id,
            'question_id': self.question_id,
            'content': self.content,
        }

    def __repr__(self):
        return f"<Answer {self.id} question={self.question_id}>"


# Vote ledgers are append-only: one row per vote cast, no uniqueness per subject.
class QuestionVote(db.Model):
    __tablename__ = 'question_votes'
    id = db.Column(db.Integer, primary_key=True)
    question_id = db.Column(db.Integer, db.ForeignKey('questions.id'), nullable=False, index=True)
    value = db.Column(db.SmallInteger, nullable=False)

    __table_args__ = (
        CheckConstraint('value in (1, -1)', name='ck_question_vote_value'),
    )


class AnswerVote(db.Model):
    __tablename__ = 'answer_votes'
    id = db.Column(db.Integer, primary_key=True)
    answer_id = db.Column(db.Integer, db.ForeignKey('answers.id'), nullable=False, index=True)
    value = db.Column(db.SmallInteger, nullable=False)

    __table_args__ = (
        CheckConstraint('value in (1, -1)', name='ck_answer_vote_value'),
    )


# subject kind -> (subject model, ledger model, ledger FK column name)
VOTE_LEDGERS = {
    "question": (Question, QuestionVote, "question_id"),
    "answer": (Answer, AnswerVote, "answer_id"),
}
