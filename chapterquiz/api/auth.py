import logging
from typing import Tuple
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session
from chapterquiz.api.forms import submitted_credentials
from chapterquiz.core.auth import SESSION_USER_KEY, CurrentUser, get_current_user, login_session, logout_session
from chapterquiz.core.database import get_db
from chapterquiz.core.errors import AuthenticationError, ValidationError
from chapterquiz.core.security import authenticate

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get("/login")
def login_status(request: Request):
    if request.session.get(SESSION_USER_KEY):
        return RedirectResponse("/chapters", status_code=status.HTTP_303_SEE_OTHER)
    return {"authenticated": False}

@router.post("/login")
def login(request: Request, credentials: Tuple[str, str] = Depends(submitted_credentials), db: Session = Depends(get_db)):
    userid, password = credentials
    if not userid or not password:
        raise ValidationError("missing_credentials", values={"userid": userid})
    user = authenticate(db, userid, password)
    if user is None:
        logger.warning("Failed login for %r", userid)
        raise AuthenticationError("invalid_credentials")
    login_session(request, user)
    logger.info("User %s logged in", user.userid)
    return RedirectResponse("/chapters", status_code=status.HTTP_303_SEE_OTHER)

@router.post("/logout")
def logout(request: Request):
    logout_session(request)
    return RedirectResponse("/login", status_code=status.HTTP_303_SEE_OTHER)

@router.get("/me", response_model=CurrentUser)
def me(user: CurrentUser = Depends(get_current_user)):
    return user
