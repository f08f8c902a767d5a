from typing import Dict
from fastapi import APIRouter, Depends, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from chapterquiz.api.forms import submitted_answers
from chapterquiz.core.auth import CurrentUser, get_current_user
from chapterquiz.core.database import get_db
from chapterquiz.models.schemas import QuizOut, RankingOut
from chapterquiz.services.delivery import load_quiz
from chapterquiz.services.ranking import load_ranking
from chapterquiz.services.scoring import submit_answers

router = APIRouter()

@router.get("/{chapter_id}/quiz", response_model=QuizOut)
def quiz(chapter_id: int, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return load_quiz(db, chapter_id)

@router.post("/{chapter_id}/quiz")
def submit_quiz(chapter_id: int, user: CurrentUser = Depends(get_current_user),
                answers: Dict[int, str] = Depends(submitted_answers), db: Session = Depends(get_db)):
    submit_answers(db, chapter_id, user.userid, answers)
    return RedirectResponse(f"/chapters/{chapter_id}/ranking", status_code=status.HTTP_303_SEE_OTHER)

@router.get("/{chapter_id}/ranking", response_model=RankingOut)
def ranking(chapter_id: int, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return load_ranking(db, chapter_id)
