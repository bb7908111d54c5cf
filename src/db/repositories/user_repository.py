"""
Repository for back-office users.

Responsibility: Data access layer for the users table
"""

import logging
from typing import Any, Dict, List, Optional
from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import UserModel, utcnow

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("display_name", "title", "bio", "avatar_url", "role", "is_team_member")


class UserRepository:
    """
    Repository for user persistence.

    Password hashing happens in src.auth.security; this class only ever
    sees the resulting hash.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def get_by_id(self, user_id: int) -> Optional[UserModel]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_username(self, username: str) -> Optional[UserModel]:
        result = await self.session.execute(
            select(UserModel).where(UserModel.username == username)
        )
        return result.scalar_one_or_none()

    async def list_users(self) -> List[UserModel]:
        result = await self.session.execute(select(UserModel).order_by(UserModel.username))
        return list(result.scalars().all())

    async def list_team_members(self) -> List[UserModel]:
        """Users shown on the public team page, by display name."""
        result = await self.session.execute(
            select(UserModel)
            .where(UserModel.is_team_member == True)  # noqa: E712
            .order_by(UserModel.display_name)
        )
        return list(result.scalars().all())

    async def create(
        self,
        username: str,
        password_hash: str,
        display_name: str,
        role: str = "editor",
        **profile: Any
    ) -> UserModel:
        """
        Create a user.

        Args:
            username: Unique login name
            password_hash: bcrypt hash of the password
            display_name: Name shown as author in feeds
            role: One of admin, editor, user
            **profile: Optional title, bio, avatar_url, is_team_member

        Returns:
            Created UserModel
        """
        user = UserModel(
            username=username,
            password_hash=password_hash,
            display_name=display_name,
            role=role,
            title=profile.get("title"),
            bio=profile.get("bio"),
            avatar_url=profile.get("avatar_url"),
            is_team_member=bool(profile.get("is_team_member", False)),
            created_at=utcnow(),
        )
        self.session.add(user)
        await self.session.flush()
        logger.info(f"Created user {username} ({role})")
        return user

    async def update_profile(self, username: str, data: Dict[str, Any]) -> Optional[UserModel]:
        user = await self.get_by_username(username)
        if user is None:
            return None

        for key, value in data.items():
            if key in PROFILE_FIELDS:
                setattr(user, key, value)
        await self.session.flush()
        return user

    async def update_password(self, username: str, password_hash: str) -> bool:
        user = await self.get_by_username(username)
        if user is None:
            return False

        user.password_hash = password_hash
        await self.session.flush()
        return True

    async def delete(self, username: str) -> bool:
        result = await self.session.execute(
            delete(UserModel).where(UserModel.username == username)
        )
        return result.rowcount > 0
