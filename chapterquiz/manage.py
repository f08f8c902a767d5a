"""
Out-of-band administration: schema creation and user accounts.

    python -m chapterquiz.manage init-db
    python -m chapterquiz.manage create-user alice --display-name "Alice"
"""
import argparse
import getpass
import logging
import sys
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from chapterquiz.core.database import SessionLocal, init_db
from chapterquiz.core.security import hash_password
from chapterquiz.models.orm import User

logger = logging.getLogger("chapterquiz.manage")

def create_user(userid: str, password: str, display_name: Optional[str] = None, session_factory=SessionLocal) -> User:
    with session_factory() as db:
        user = User(userid=userid, display_name=display_name or None, password_hash=hash_password(password))
        db.add(user)
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ValueError(f"user {userid!r} already exists") from None
        logger.info("Created user %s", userid)
        return user

def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="chapterquiz-manage")
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("init-db", help="create all tables")
    cu = sub.add_parser("create-user", help="add a login account")
    cu.add_argument("userid")
    cu.add_argument("--display-name", default=None)
    cu.add_argument("--password", default=None, help="prompted for when omitted")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    if args.command == "init-db":
        init_db()
        return 0
    password = args.password or getpass.getpass(f"Password for {args.userid}: ")
    if not password:
        print("password must not be empty", file=sys.stderr)
        return 2
    try:
        create_user(args.userid, password, args.display_name)
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 1
    return 0

if __name__ == "__main__":
    sys.exit(main())
