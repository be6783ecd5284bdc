# employee-directory-api/app/api/graphql/context.py
from fastapi import Depends, Request
from sqlalchemy.orm import Session
from strawberry.fastapi import BaseContext

from app.core import security
from app.core.config import settings
from app.db import session
from app.schemas.user import SessionUser
from app.services import sessions


class Context(BaseContext):
    """Per-request GraphQL context. ``user`` is None for anonymous callers."""

    def __init__(self, db: Session, user: SessionUser | None, session_token: str | None):
        super().__init__()
        self.db = db
        self.user = user
        self.session_token = session_token


def get_context(request: Request, db: Session = Depends(session.get_db)) -> Context:
    token = security.read_session_token(request.cookies.get(settings.SESSION_COOKIE_NAME))
    return Context(db=db, user=sessions.get_session_user(db, token), session_token=token)
