"""
Authentication dependencies.

The session cookie (Starlette SessionMiddleware) stores the logged-in
user's id under "user_id"; these dependencies resolve it to a UserModel
and enforce roles.

Responsibility: Session-based authentication guards for API routes
"""

import logging
from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import UserModel
from src.db.repositories import UserRepository
from src.db.session import get_db
from src.models.team import UserRole

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "user_id"


async def get_current_user(
    request: Request,
    db: AsyncSession = Depends(get_db)
) -> UserModel:
    """
    Resolve the authenticated user.

    Raises:
        HTTPException: 401 when there is no session or its user is gone
    """
    user_id = request.session.get(SESSION_USER_KEY)
    if user_id is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required"
        )

    user = await UserRepository(db).get_by_id(int(user_id))
    if user is None:
        logger.warning(f"Session references missing user {user_id}; clearing session")
        request.session.clear()
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required"
        )
    return user


async def require_editor(user: UserModel = Depends(get_current_user)) -> UserModel:
    """Admins and editors"""
    if user.role not in (UserRole.ADMIN.value, UserRole.EDITOR.value):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Editor access required"
        )
    return user


async def require_admin(user: UserModel = Depends(get_current_user)) -> UserModel:
    if user.role != UserRole.ADMIN.value:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return user
