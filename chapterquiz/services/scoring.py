"""
Grading and best-score persistence.

The stored count only ever grows: the upsert keeps ``greatest(stored, new)``
inside a single statement so concurrent submissions for the same
(chapter, user) cannot lose an update. ``updated_at`` is refreshed on every
attempt, improving or not, so ranking ties are broken by the latest attempt.
"""
import logging
from datetime import datetime, timezone
from typing import Iterable, Mapping, Optional, Tuple
from sqlalchemy import func, select
from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from chapterquiz.core.errors import NotFoundError, PersistenceError
from chapterquiz.models.orm import ChapterScore, Choice, Question

logger = logging.getLogger(__name__)

scores = ChapterScore.__table__


def grade(correct: Iterable[Tuple[int, str]], answers: Mapping[int, str]) -> int:
    """Count questions whose submitted key matches. Unanswered questions are wrong."""
    return sum(1 for question_id, key in correct if answers.get(question_id) == key)


def best_score_upsert(dialect: str, chapter_id: int, userid: str, correct_count: int, now: datetime):
    values = {"chapter_id": chapter_id, "userid": userid, "correct_count": correct_count, "updated_at": now}
    if dialect == "mysql" or dialect == "mariadb":
        stmt = mysql_insert(scores).values(**values)
        return stmt.on_duplicate_key_update(
            correct_count=func.greatest(scores.c.correct_count, stmt.inserted.correct_count),
            updated_at=stmt.inserted.updated_at,
        )
    if dialect == "postgresql":
        stmt = pg_insert(scores).values(**values)
        greater = func.greatest(scores.c.correct_count, stmt.excluded.correct_count)
    elif dialect == "sqlite":
        stmt = sqlite_insert(scores).values(**values)
        # two-argument max() is SQLite's scalar greatest
        greater = func.max(scores.c.correct_count, stmt.excluded.correct_count)
    else:
        raise NotImplementedError(f"best-score upsert is not available for {dialect}")
    return stmt.on_conflict_do_update(
        index_elements=[scores.c.chapter_id, scores.c.userid],
        set_={"correct_count": greater, "updated_at": stmt.excluded.updated_at},
    )


def correct_keys(db: Session, chapter_id: int) -> list[Tuple[int, str]]:
    stmt = (
        select(Question.id, Choice.choice_key)
        .join(Choice, Choice.question_id == Question.id)
        .where(Question.chapter_id == chapter_id, Choice.is_correct.is_(True))
        .order_by(Question.id)
    )
    return [(row[0], row[1]) for row in db.execute(stmt)]


def submit_answers(db: Session, chapter_id: int, userid: str, answers: Mapping[int, str],
                   now: Optional[datetime] = None) -> int:
    """Grade ``answers`` and record the user's best score. Returns this attempt's count."""
    try:
        correct = correct_keys(db, chapter_id)
        if not correct:
            raise NotFoundError("chapter_not_found", chapter_id=chapter_id)
        count = grade(correct, answers)
        db.execute(best_score_upsert(db.get_bind().dialect.name, chapter_id, userid, count,
                                     now or datetime.now(timezone.utc)))
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Saving score for %s on chapter %d failed", userid, chapter_id)
        raise PersistenceError("score_save_failed") from exc
    except Exception:
        db.rollback()
        raise

    logger.info("User %s scored %d/%d on chapter %d", userid, count, len(correct), chapter_id)
    return count
