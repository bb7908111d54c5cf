"""
Team API endpoints.

Public team page and job applications, plus admin review of
applications and user management.

Responsibility: Team, application and user endpoints
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.auth import hash_password
from src.db.models import UserModel
from src.db.repositories import TeamApplicationRepository, UserRepository
from src.db.session import get_db
from src.models.team import ApplicationStatus
from api.dependencies import require_admin
from api.v1.schemas.team import (
    UserResponse,
    TeamMemberResponse,
    UserCreateRequest,
    UserProfileUpdateRequest,
    PasswordUpdateRequest,
    TeamApplicationRequest,
    TeamApplicationResponse,
    TeamApplicationListResponse,
    ApplicationReviewRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter(prefix="/admin")


# MARK: Public

@router.get("/team", response_model=list[TeamMemberResponse])
async def list_team_members(db: AsyncSession = Depends(get_db)):
    return await UserRepository(db).list_team_members()


@router.post(
    "/team/applications",
    response_model=TeamApplicationResponse,
    status_code=status.HTTP_201_CREATED
)
async def submit_application(
    request: TeamApplicationRequest,
    db: AsyncSession = Depends(get_db)
):
    application = await TeamApplicationRepository(db).submit(request.model_dump())
    await db.commit()
    logger.info(f"Team application {application.id} received for {application.position}")
    return application


# MARK: Admin applications

@admin_router.get("/team/applications", response_model=TeamApplicationListResponse)
async def list_applications(
    status_filter: Optional[ApplicationStatus] = Query(None, alias="status"),
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    applications = await TeamApplicationRepository(db).list_applications(
        status=status_filter.value if status_filter else None
    )
    return {
        "applications": [TeamApplicationResponse.model_validate(a) for a in applications],
        "total": len(applications),
    }


@admin_router.get("/team/applications/{application_id}", response_model=TeamApplicationResponse)
async def get_application(
    application_id: int,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    application = await TeamApplicationRepository(db).get_by_id(application_id)
    if not application:
        raise HTTPException(status_code=404, detail=f"Application {application_id} not found")
    return application


@admin_router.patch(
    "/team/applications/{application_id}/status",
    response_model=TeamApplicationResponse
)
async def review_application(
    application_id: int,
    request: ApplicationReviewRequest,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    application = await TeamApplicationRepository(db).review(
        application_id, request.status.value, reviewer_id=user.id, notes=request.notes
    )
    if not application:
        raise HTTPException(status_code=404, detail=f"Application {application_id} not found")
    await db.commit()
    return application


@admin_router.delete("/team/applications/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_application(
    application_id: int,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    deleted = await TeamApplicationRepository(db).delete(application_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Application {application_id} not found")
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# MARK: Admin users

@admin_router.get("/users", response_model=list[UserResponse])
async def list_users(
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    return await UserRepository(db).list_users()


@admin_router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: UserCreateRequest,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """
    Create a back-office user.

    Raises:
        HTTPException: 409 if the username is taken
    """
    repo = UserRepository(db)
    if await repo.get_by_username(request.username):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Username '{request.username}' already exists"
        )

    created = await repo.create(
        username=request.username,
        password_hash=hash_password(request.password),
        display_name=request.display_name,
        role=request.role.value,
        title=request.title,
        bio=request.bio,
        avatar_url=request.avatar_url,
        is_team_member=request.is_team_member,
    )
    await db.commit()
    return created


@admin_router.put("/users/{username}/profile", response_model=UserResponse)
async def update_user_profile(
    username: str,
    request: UserProfileUpdateRequest,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    data = request.model_dump(exclude_unset=True)
    if data.get("role") is not None:
        data["role"] = data["role"].value
    updated = await UserRepository(db).update_profile(username, data)
    if not updated:
        raise HTTPException(status_code=404, detail=f"User '{username}' not found")
    await db.commit()
    return updated


@admin_router.put("/users/{username}/password", status_code=status.HTTP_204_NO_CONTENT)
async def update_user_password(
    username: str,
    request: PasswordUpdateRequest,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    updated = await UserRepository(db).update_password(username, hash_password(request.password))
    if not updated:
        raise HTTPException(status_code=404, detail=f"User '{username}' not found")
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@admin_router.delete("/users/{username}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    username: str,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    if username == user.username:
        raise HTTPException(status_code=400, detail="Admins cannot delete their own account")

    deleted = await UserRepository(db).delete(username)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"User '{username}' not found")
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
