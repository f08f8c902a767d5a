from typing import List
from sqlalchemy import func, select
from sqlalchemy.orm import Session
from chapterquiz.models.orm import ChapterScore, User
from chapterquiz.models.schemas import ChapterRef, RankingEntry, RankingOut
from chapterquiz.services.chapters import get_chapter

def chapter_ranking(db: Session, chapter_id: int) -> List[RankingEntry]:
    """Best count first; among equal counts the earlier ``updated_at`` ranks higher."""
    display_name = func.coalesce(func.nullif(User.display_name, ""), ChapterScore.userid)
    stmt = (
        select(ChapterScore.userid, display_name, ChapterScore.correct_count, ChapterScore.updated_at)
        .outerjoin(User, User.userid == ChapterScore.userid)
        .where(ChapterScore.chapter_id == chapter_id)
        .order_by(ChapterScore.correct_count.desc(), ChapterScore.updated_at.asc(), ChapterScore.userid.asc())
    )
    return [
        RankingEntry(userid=r[0], display_name=r[1], correct_count=r[2], updated_at=r[3])
        for r in db.execute(stmt)
    ]

def load_ranking(db: Session, chapter_id: int) -> RankingOut:
    chapter = get_chapter(db, chapter_id)
    return RankingOut(chapter=ChapterRef.model_validate(chapter), rankings=chapter_ranking(db, chapter_id))
