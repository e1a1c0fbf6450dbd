from typing import Iterator, Optional

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from starlette.requests import Request

from app.core.errors import UnauthorizedError
from app.core.security import verify_access_token
from app.models.domain import User
from app.storage.repository import SqlRepository

bearer_scheme = HTTPBearer(auto_error=False)


def get_repository(request: Request) -> Iterator[SqlRepository]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise HTTPException(status_code=500, detail="Database not initialized")
    with session_factory() as session:
        yield SqlRepository(session)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    repository: SqlRepository = Depends(get_repository),
) -> User:
    if credentials is None:
        raise UnauthorizedError("Authentication required.")
    username = verify_access_token(credentials.credentials)
    if username is None:
        raise UnauthorizedError("Invalid token.")
    user = repository.get_user_by_username(username)
    if user is None:
        raise UnauthorizedError("Unknown user.")
    return user
