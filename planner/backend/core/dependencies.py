"""
FastAPI Dependencies.

Shared dependencies for request handling.
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from planner.backend.core.database import get_db_session
from planner.backend.core.exceptions import AuthenticationError
from planner.backend.core.logging import get_logger
from planner.backend.core.security import decode_token
from planner.backend.storage import BlobStorage, get_blob_storage

logger = get_logger(__name__)

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]

_bearer = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Identity of the authenticated caller."""

    id: str


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> CurrentUser:
    """
    Resolve the caller from the bearer session token.

    Raises:
        AuthenticationError: If no token is supplied or it does not validate
    """
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise AuthenticationError("Authentication required")

    payload = decode_token(credentials.credentials)
    return CurrentUser(id=str(payload["sub"]))


AuthUser = Annotated[CurrentUser, Depends(get_current_user)]

Storage = Annotated[BlobStorage, Depends(get_blob_storage)]
