"""
Chapter authoring.

A chapter, its questions and their four choices are written in one
transaction. Input is validated completely before the first write, and any
failure after that rolls the whole chapter back.
"""
import logging
from typing import Dict, Optional, Sequence
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from chapterquiz.core.errors import PersistenceError, ValidationError
from chapterquiz.models.orm import CHOICE_KEYS, Chapter, Choice, Question
from chapterquiz.models.schemas import QuestionDraft

logger = logging.getLogger(__name__)


def _clean(value: Optional[str]) -> str:
    return (value or "").strip()


def validate_question(draft: QuestionDraft, index: int, values: Dict[str, str]) -> QuestionDraft:
    """Return a trimmed copy of ``draft`` or raise ``invalid_question`` for ``index``."""
    text = _clean(draft.question_text)
    options = {key: _clean(draft.options.get(key)) for key in CHOICE_KEYS}
    correct = _clean(draft.correct_choice)
    if not text or not all(options.values()) or correct not in CHOICE_KEYS:
        logger.warning("Rejected chapter %r: question %d is incomplete", values.get("title"), index + 1)
        raise ValidationError("invalid_question", values=values, question_index=index)
    return QuestionDraft(question_text=text, options=options, correct_choice=correct)


def create_chapter(db: Session, author_id: str, title: Optional[str], description: Optional[str],
                   drafts: Sequence[QuestionDraft]) -> int:
    """Persist a chapter with all of its questions and return the chapter id.

    Raises:
        ValidationError: ``missing_title_or_questions`` or ``invalid_question``.
            Nothing has been written when this is raised.
        PersistenceError: the transaction failed and was rolled back.
    """
    title, description = _clean(title), _clean(description)
    values = {"title": title, "description": description}
    if not title or not drafts:
        logger.warning("Rejected chapter from %s: title or questions missing", author_id)
        raise ValidationError("missing_title_or_questions", values=values)
    questions = [validate_question(d, i, values) for i, d in enumerate(drafts)]

    try:
        chapter = Chapter(title=title, description=description, created_by=author_id)
        db.add(chapter)
        db.flush()
        for draft in questions:
            question = Question(chapter_id=chapter.id, question_text=draft.question_text)
            db.add(question)
            db.flush()
            db.add_all([
                Choice(question_id=question.id, choice_key=key, choice_text=draft.options[key],
                       is_correct=(key == draft.correct_choice))
                for key in CHOICE_KEYS
            ])
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Chapter %r by %s rolled back", title, author_id)
        raise PersistenceError("chapter_create_failed") from exc
    except Exception:
        db.rollback()
        raise

    logger.info("Chapter %d created by %s with %d questions", chapter.id, author_id, len(questions))
    return chapter.id
