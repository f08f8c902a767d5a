from fastapi import Request
from pydantic import BaseModel
from chapterquiz.core.errors import AuthenticationError
from chapterquiz.models.orm import User

SESSION_USER_KEY = "user"

class CurrentUser(BaseModel):
    userid: str
    display_name: str

def login_session(request: Request, user: User) -> CurrentUser:
    current = CurrentUser(userid=user.userid, display_name=user.display_name or user.userid)
    request.session[SESSION_USER_KEY] = current.model_dump()
    return current

def logout_session(request: Request) -> None:
    request.session.clear()

def get_current_user(request: Request) -> CurrentUser:
    data = request.session.get(SESSION_USER_KEY)
    if not data:
        raise AuthenticationError("not_authenticated")
    return CurrentUser(**data)
