from typing import Dict
from sqlalchemy import select
from sqlalchemy.orm import Session
from chapterquiz.models.orm import Choice, Question
from chapterquiz.models.schemas import ChapterRef, ChoiceOut, QuizOut, QuizQuestion
from chapterquiz.services.chapters import get_chapter

def load_quiz(db: Session, chapter_id: int) -> QuizOut:
    """Questions in id order, each with choices A-D. Correctness is never selected."""
    chapter = get_chapter(db, chapter_id)
    stmt = (
        select(Question.id, Question.question_text, Choice.choice_key, Choice.choice_text)
        .join(Choice, Choice.question_id == Question.id)
        .where(Question.chapter_id == chapter_id)
        .order_by(Question.id.asc(), Choice.choice_key.asc())
    )
    grouped: Dict[int, QuizQuestion] = {}
    for question_id, question_text, choice_key, choice_text in db.execute(stmt):
        item = grouped.get(question_id)
        if item is None:
            item = grouped[question_id] = QuizQuestion(question_id=question_id, question_text=question_text)
        item.choices.append(ChoiceOut(choice_key=choice_key, choice_text=choice_text))
    return QuizOut(chapter=ChapterRef.model_validate(chapter), questions=list(grouped.values()))
