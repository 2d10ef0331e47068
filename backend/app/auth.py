"""Session-cookie authentication and role checks.

Sessions are issued by the login flow of the main application; this API only
resolves the cookie to a user.
"""
import logging
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from .config import settings
from .database import get_db
from .errors import AuthenticationRequired, AuthorizationDenied
from .models import User, UserSession
from .utils.dates import utcnow

logger = logging.getLogger(__name__)

# Roles allowed to create, change or delete management resources
EDITOR_ROLES = ("admin", "editor")


async def get_current_user(request: Request, db: AsyncSession = Depends(get_db)) -> User:
    """Resolve the session cookie to a user or fail with 401."""
    token: Optional[str] = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise AuthenticationRequired("User not logged in")

    result = await db.execute(
        select(UserSession)
        .options(selectinload(UserSession.user))
        .where(UserSession.token == token)
    )
    session = result.scalar_one_or_none()

    if session is None or session.user is None:
        raise AuthenticationRequired("User not logged in")
    if session.expires_at <= utcnow():
        logger.info(f"Rejected expired session for user {session.user_id}")
        raise AuthenticationRequired("User not logged in")

    return session.user


async def require_editor(user: User = Depends(get_current_user)) -> User:
    """Allow only admins and editors through."""
    if user.role not in EDITOR_ROLES:
        logger.warning(f"User {user.id} with role '{user.role}' denied a write")
        raise AuthorizationDenied("Only Admins and Editors can perform this action")
    return user
