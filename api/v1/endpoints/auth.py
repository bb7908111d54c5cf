"""
API endpoints for authentication.

Provides endpoints for:
- Logging in (stores the user id in the signed session cookie)
- Logging out
- Retrieving the current user

Responsibility: Session login endpoints
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth import verify_password
from src.db.models import UserModel
from src.db.repositories import UserRepository
from src.db.session import get_db
from api.dependencies import SESSION_USER_KEY, get_current_user
from api.v1.schemas.team import LoginRequest, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.post("/login", response_model=UserResponse)
async def login(
    credentials: LoginRequest,
    request: Request,
    db: AsyncSession = Depends(get_db)
):
    """
    Verify credentials and open a session.

    Raises:
        HTTPException: 401 on unknown user or wrong password
    """
    user = await UserRepository(db).get_by_username(credentials.username)
    if not user or not verify_password(credentials.password, user.password_hash):
        logger.warning(f"Failed login for {credentials.username!r}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid username or password"
        )

    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id
    logger.info(f"{user.username} logged in")
    return user


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(request: Request):
    request.session.clear()


@router.get("/me", response_model=UserResponse)
async def me(user: UserModel = Depends(get_current_user)):
    return user
