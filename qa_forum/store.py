"""Persistence store: scoped transactions and the statements the services run.

Every helper takes the session explicitly so that all statements of one
operation execute, in order, on the same transaction.
"""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from qa_forum.extensions import db
from qa_forum.models import Answer, AnswerVote, Question, QuestionVote, VOTE_LEDGERS


# ids are 32-bit INTEGER columns on every backend we run on
MAX_ID = 2**31 - 1


class StoreError(Exception):
    """A statement, connection or commit failed; the transaction was rolled back."""


def id_in_range(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and 0 < value <= MAX_ID


def _rollback(session: Session, cause: BaseException) -> None:
    try:
        session.rollback()
    except SQLAlchemyError as exc:
        raise StoreError(f"rollback failed: {exc}") from cause


@contextmanager
def transaction() -> Iterator[Session]:
    """Run a unit of work on the scoped session.

    Commits on normal exit unless the caller already rolled back. Any failure,
    including the caller abandoning the operation, rolls everything back.
    The connection goes back to the pool when the app context tears down.
    """
    session = db.session()
    try:
        yield session
        if session.in_transaction():
            session.commit()
    except SQLAlchemyError as exc:
        _rollback(session, exc)
        raise StoreError(str(exc)) from exc
    except BaseException as exc:
        _rollback(session, exc)
        raise


# Reads

def get_question(session: Session, question_id: int, *, lock: bool = False) -> Optional[Question]:
    query = session.query(Question).filter(Question.id == question_id)
    if lock:
        # blocks concurrent answer inserts referencing this row (no-op on SQLite)
        query = query.with_for_update()
    return query.one_or_none()


def subject_exists(session: Session, kind: str, subject_id: int, question_id: Optional[int] = None) -> bool:
    model = VOTE_LEDGERS[kind][0]
    query = session.query(model.id).filter(model.id == subject_id)
    if kind == "answer" and question_id is not None:
        query = query.filter(Answer.question_id == question_id)
    return query.first() is not None


# Writes

def insert_vote(session: Session, kind: str, subject_id: int, value: int) -> None:
    _, ledger, fk = VOTE_LEDGERS[kind]
    session.add(ledger(**{fk: subject_id, "value": value}))
    session.flush()


def _answer_ids(question_id: int):
    return select(Answer.id).where(Answer.question_id == question_id)


def delete_answer_votes(session: Session, question_id: int) -> int:
    return (
        session.query(AnswerVote)
        .filter(AnswerVote.answer_id.in_(_answer_ids(question_id)))
        .delete(synchronize_session=False)
    )


def delete_answers(session: Session, question_id: int) -> int:
    return (
        session.query(Answer)
        .filter(Answer.question_id == question_id)
        .delete(synchronize_session=False)
    )


def delete_question_votes(session: Session, question_id: int) -> int:
    return (
        session.query(QuestionVote)
        .filter(QuestionVote.question_id == question_id)
        .delete(synchronize_session=False)
    )


def delete_question_row(session: Session, question_id: int) -> int:
    return (
        session.query(Question)
        .filter(Question.id == question_id)
        .delete(synchronize_session=False)
    )
