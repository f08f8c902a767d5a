from typing import Optional
from passlib.context import CryptContext
from sqlalchemy.orm import Session
from chapterquiz.core.config import settings
from chapterquiz.models.orm import User

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def verify_password(password: str, password_hash: str) -> bool:
    try:
        return pwd_context.verify(password, password_hash)
    except ValueError:
        # malformed or foreign hash in the users table
        return False

def authenticate(db: Session, userid: str, password: str) -> Optional[User]:
    user = db.get(User, userid)
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user
