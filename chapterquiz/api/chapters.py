from typing import List
from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from chapterquiz.api.forms import submitted_chapter
from chapterquiz.core.auth import CurrentUser, get_current_user
from chapterquiz.core.database import get_db
from chapterquiz.models.schemas import ChapterCreate, ChapterCreated, ChapterSummary
from chapterquiz.services.authoring import create_chapter
from chapterquiz.services.chapters import list_chapters

router = APIRouter()

@router.get("", response_model=List[ChapterSummary])
def chapters(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return list_chapters(db)

@router.post("", response_model=ChapterCreated, status_code=201)
def author_chapter(payload: ChapterCreate, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    chapter_id = create_chapter(db, user.userid, payload.title, payload.description, payload.questions)
    return ChapterCreated(chapter_id=chapter_id)

@router.post("/new")
def author_chapter_form(user: CurrentUser = Depends(get_current_user), payload: ChapterCreate = Depends(submitted_chapter),
                        db: Session = Depends(get_db)):
    create_chapter(db, user.userid, payload.title, payload.description, payload.questions)
    return RedirectResponse("/chapters", status_code=status.HTTP_303_SEE_OTHER)
