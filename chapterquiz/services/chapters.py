from typing import List
from sqlalchemy import select
from sqlalchemy.orm import Session
from chapterquiz.core.errors import NotFoundError
from chapterquiz.models.orm import Chapter
from chapterquiz.models.schemas import ChapterSummary

def get_chapter(db: Session, chapter_id: int) -> Chapter:
    chapter = db.get(Chapter, chapter_id)
    if chapter is None:
        raise NotFoundError("chapter_not_found", chapter_id=chapter_id)
    return chapter

def list_chapters(db: Session) -> List[ChapterSummary]:
    rows = db.scalars(select(Chapter).order_by(Chapter.created_at.desc(), Chapter.id.desc())).all()
    return [ChapterSummary.model_validate(c) for c in rows]
