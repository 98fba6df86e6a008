"""Vote scores and answer ordering.

Scores are never stored: a subject's score is the sum of its ledger entries
at query time, 0 when it has none. Answers rank by score DESC, then id DESC,
so among equally scored answers the most recent one comes first.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List

from sqlalchemy import func
from sqlalchemy.orm import Session

from qa_forum.models import Answer, AnswerVote, VOTE_LEDGERS


@dataclass(frozen=True)
class RankedAnswer:
    id: int
    content: str
    score: int

    def to_dict(self):
        return {"id": self.id, "content": self.content, "score": self.score}


def rank_answers(session: Session, question_id: int) -> List[RankedAnswer]:
    """Return the answers of a question ordered by score, newest first on ties.

    The caller checks that the question exists; an unknown or answerless
    question yields an empty list. Read-only.
    """
    score = func.coalesce(func.sum(AnswerVote.value), 0).label("score")
    rows = (
        session.query(Answer.id, Answer.content, score)
        .outerjoin(AnswerVote, AnswerVote.answer_id == Answer.id)
        .filter(Answer.question_id == question_id)
        .group_by(Answer.id, Answer.content)
        .order_by(score.desc(), Answer.id.desc())
        .all()
    )
    return [RankedAnswer(id=row.id, content=row.content, score=int(row.score)) for row in rows]


def subject_score(session: Session, kind: str, subject_id: int) -> int:
    _, ledger, fk = VOTE_LEDGERS[kind]
    total = (
        session.query(func.coalesce(func.sum(ledger.value), 0))
        .filter(getattr(ledger, fk) == subject_id)
        .scalar()
    )
    return int(total or 0)
