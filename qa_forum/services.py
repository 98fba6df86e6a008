from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Dict, Any, Tuple

from flask import current_app
from sqlalchemy import or_

from qa_forum import store
from qa_forum.models import Question, Answer, VOTE_LEDGERS
from qa_forum.ranking import RankedAnswer, rank_answers, subject_score
from qa_forum.store import StoreError, id_in_range, transaction

VOTE_VALUES = (1, -1)
MAX_TITLE_LEN = 200
MAX_CATEGORY_LEN = 100


def _log_store_failure(operation: str) -> None:
    # must be called from inside the except block
    current_app.logger.exception("%s failed, transaction rolled back", operation)


def _is_vote_value(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value in VOTE_VALUES


# Voting

@dataclass(frozen=True)
class CastVoteResult:
    success: bool
    reason: str  # "ok" | "not_found" | "invalid_value" | "store_error"
    score: Optional[int] = None


def cast_vote(subject_kind: str, subject_id: int, value: int, question_id: Optional[int] = None) -> CastVoteResult:
    """Append one ledger entry for a question or an answer.

    When ``question_id`` is given for an answer, the answer must belong to that
    question. Returns the subject's score as seen right after the insert.
    """
    if subject_kind not in VOTE_LEDGERS or not _is_vote_value(value):
        return CastVoteResult(success=False, reason="invalid_value")
    if not id_in_range(subject_id) or (question_id is not None and not id_in_range(question_id)):
        return CastVoteResult(success=False, reason="not_found")

    try:
        with transaction() as session:
            if not store.subject_exists(session, subject_kind, subject_id, question_id):
                session.rollback()
                current_app.logger.info("vote rejected: %s %s not found", subject_kind, subject_id)
                return CastVoteResult(success=False, reason="not_found")

            store.insert_vote(session, subject_kind, subject_id, value)
            score = subject_score(session, subject_kind, subject_id)
    except StoreError:
        _log_store_failure("cast_vote")
        return CastVoteResult(success=False, reason="store_error")

    return CastVoteResult(success=True, reason="ok", score=score)


# Question deletion (cascade)

@dataclass(frozen=True)
class DeleteQuestionResult:
    deleted: bool
    reason: str  # "ok" | "not_found" | "store_error"
    question: Optional[Dict[str, Any]] = None
    deleted_answers: int = 0
    deleted_votes: int = 0


def delete_question(question_id: int) -> DeleteQuestionResult:
    """Delete a question together with its answers and every vote on either.

    All or nothing: the question row is locked and checked before the first
    delete, and any failure rolls back the whole cascade.
    """
    if not id_in_range(question_id):
        return DeleteQuestionResult(deleted=False, reason="not_found")
    try:
        with transaction() as session:
            question = store.get_question(session, question_id, lock=True)
            if question is None:
                session.rollback()
                return DeleteQuestionResult(deleted=False, reason="not_found")
            snapshot = question.to_dict()

            # children first: answer ledgers, answers, question ledger, question
            deleted_votes = store.delete_answer_votes(session, question_id)
            deleted_answers = store.delete_answers(session, question_id)
            deleted_votes += store.delete_question_votes(session, question_id)

            if store.delete_question_row(session, question_id) == 0:
                session.rollback()
                return DeleteQuestionResult(deleted=False, reason="not_found")
    except StoreError:
        _log_store_failure("delete_question")
        return DeleteQuestionResult(deleted=False, reason="store_error")

    current_app.logger.info(
        "question %s deleted with %s answers and %s votes", question_id, deleted_answers, deleted_votes
    )
    return DeleteQuestionResult(
        deleted=True,
        reason="ok",
        question=snapshot,
        deleted_answers=deleted_answers,
        deleted_votes=deleted_votes,
    )


@dataclass(frozen=True)
class DeleteAnswersResult:
    deleted: bool
    deleted_count: int
    reason: str  # "ok" | "store_error"


def delete_answers_for_question(question_id: int) -> DeleteAnswersResult:
    # The question itself need not exist; zero answers is still a success.
    if not id_in_range(question_id):
        return DeleteAnswersResult(deleted=True, deleted_count=0, reason="ok")
    try:
        with transaction() as session:
            store.delete_answer_votes(session, question_id)
            deleted_count = store.delete_answers(session, question_id)
    except StoreError:
        _log_store_failure("delete_answers_for_question")
        return DeleteAnswersResult(deleted=False, deleted_count=0, reason="store_error")

    return DeleteAnswersResult(deleted=True, deleted_count=int(deleted_count), reason="ok")


# Ranked answers

@dataclass(frozen=True)
class RankedAnswersResult:
    found: bool
    reason: str  # "ok" | "not_found" | "store_error"
    question_id: Optional[int] = None
    title: Optional[str] = None
    answers: Tuple[RankedAnswer, ...] = ()

    @property
    def has_answers(self) -> bool:
        return len(self.answers) > 0


def get_answers_ranked(question_id: int) -> RankedAnswersResult:
    if not id_in_range(question_id):
        return RankedAnswersResult(found=False, reason="not_found")
    try:
        with transaction() as session:
            question = store.get_question(session, question_id)
            if question is None:
                session.rollback()
                return RankedAnswersResult(found=False, reason="not_found")
            title = question.title
            answers = tuple(rank_answers(session, question_id))
    except StoreError:
        _log_store_failure("get_answers_ranked")
        return RankedAnswersResult(found=False, reason="store_error")

    return RankedAnswersResult(found=True, reason="ok", question_id=question_id, title=title, answers=answers)


# Question CRUD

def _clean_question_fields(title, description, category) -> Tuple[Optional[Tuple[str, str, str]], str]:
    title = (title or "").strip()
    description = (description or "").strip()
    category = (category or "").strip()

    if not title or not description or not category:
        return None, "empty_content"
    if len(title) > MAX_TITLE_LEN:
        return None, "too_long_title"
    if len(category) > MAX_CATEGORY_LEN:
        return None, "too_long_category"
    return (title, description, category), "ok"


@dataclass(frozen=True)
class CreateQuestionResult:
    created: bool
    reason: str  # "ok" | "empty_content" | "too_long_title" | "too_long_category" | "store_error"
    question: Optional[Dict[str, Any]] = None


def create_question(title: str, description: str, category: str) -> CreateQuestionResult:
    fields, reason = _clean_question_fields(title, description, category)
    if fields is None:
        return CreateQuestionResult(created=False, reason=reason)

    title, description, category = fields
    try:
        with transaction() as session:
            question = Question(title=title, description=description, category=category)
            session.add(question)
            session.flush()
            payload = question.to_dict()
    except StoreError:
        _log_store_failure("create_question")
        return CreateQuestionResult(created=False, reason="store_error")

    return CreateQuestionResult(created=True, reason="ok", question=payload)


@dataclass(frozen=True)
class QuestionListResult:
    success: bool
    reason: str  # "ok" | "empty_query" | "store_error"
    questions: Tuple[Dict[str, Any], ...] = ()


def list_questions() -> QuestionListResult:
    try:
        with transaction() as session:
            questions = tuple(q.to_dict() for q in session.query(Question).order_by(Question.id.asc()).all())
    except StoreError:
        _log_store_failure("list_questions")
        return QuestionListResult(success=False, reason="store_error")
    return QuestionListResult(success=True, reason="ok", questions=questions)


def search_questions(title: Optional[str] = None, category: Optional[str] = None) -> QuestionListResult:
    """Case-insensitive substring match on title OR category."""
    title = (title or "").strip()
    category = (category or "").strip()
    if not title and not category:
        return QuestionListResult(success=False, reason="empty_query")

    conditions = []
    if title:
        conditions.append(Question.title.ilike(f"%{title}%"))
    if category:
        conditions.append(Question.category.ilike(f"%{category}%"))

    try:
        with transaction() as session:
            rows = session.query(Question).filter(or_(*conditions)).order_by(Question.id.asc()).all()
            questions = tuple(q.to_dict() for q in rows)
    except StoreError:
        _log_store_failure("search_questions")
        return QuestionListResult(success=False, reason="store_error")
    return QuestionListResult(success=True, reason="ok", questions=questions)


@dataclass(frozen=True)
class QuestionResult:
    found: bool
    reason: str  # "ok" | "not_found" | "store_error"
    question: Optional[Dict[str, Any]] = None


def get_question(question_id: int) -> QuestionResult:
    if not id_in_range(question_id):
        return QuestionResult(found=False, reason="not_found")
    try:
        with transaction() as session:
            question = store.get_question(session, question_id)
            if question is None:
                session.rollback()
                return QuestionResult(found=False, reason="not_found")
            payload = question.to_dict()
            payload["score"] = subject_score(session, "question", question_id)
    except StoreError:
        _log_store_failure("get_question")
        return QuestionResult(found=False, reason="store_error")
    return QuestionResult(found=True, reason="ok", question=payload)


@dataclass(frozen=True)
class UpdateQuestionResult:
    updated: bool
    reason: str  # "ok" | "not_found" | "empty_content" | "too_long_title" | "too_long_category" | "store_error"


def update_question(question_id: int, title: str, description: str, category: str) -> UpdateQuestionResult:
    fields, reason = _clean_question_fields(title, description, category)
    if fields is None:
        return UpdateQuestionResult(updated=False, reason=reason)
    if not id_in_range(question_id):
        return UpdateQuestionResult(updated=False, reason="not_found")

    try:
        with transaction() as session:
            question = store.get_question(session, question_id, lock=True)
            if question is None:
                session.rollback()
                return UpdateQuestionResult(updated=False, reason="not_found")
            question.title, question.description, question.category = fields
    except StoreError:
        _log_store_failure("update_question")
        return UpdateQuestionResult(updated=False, reason="store_error")
    return UpdateQuestionResult(updated=True, reason="ok")


# Answers

@dataclass(frozen=True)
class CreateAnswerResult:
    created: bool
    reason: str  # "ok" | "not_found" | "empty_content" | "too_long_content" | "store_error"
    answer: Optional[Dict[str, Any]] = None


def create_answer(question_id: int, content: str) -> CreateAnswerResult:
    max_len = current_app.config.get("ANSWER_MAX_LENGTH", 300)

    content = (content or "").strip()
    if not content:
        return CreateAnswerResult(created=False, reason="empty_content")
    if len(content) > max_len:
        return CreateAnswerResult(created=False, reason="too_long_content")
    if not id_in_range(question_id):
        return CreateAnswerResult(created=False, reason="not_found")

    try:
        with transaction() as session:
            if store.get_question(session, question_id) is None:
                session.rollback()
                return CreateAnswerResult(created=False, reason="not_found")
            answer = Answer(question_id=question_id, content=content)
            session.add(answer)
            session.flush()
            payload = answer.to_dict()
    except StoreError:
        _log_store_failure("create_answer")
        return CreateAnswerResult(created=False, reason="store_error")

    return CreateAnswerResult(created=True, reason="ok", answer=payload)
