"""
Site alert API endpoints.

Responsibility: Public active alerts and their admin CRUD
"""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import UserModel
from src.db.repositories import SiteAlertRepository
from src.db.session import get_db
from api.dependencies import require_admin
from api.v1.schemas.site_alerts import (
    SiteAlertResponse,
    SiteAlertCreateRequest,
    SiteAlertUpdateRequest,
)

router = APIRouter()
admin_router = APIRouter(prefix="/admin/site-alerts")


@router.get("/site-alerts", response_model=list[SiteAlertResponse])
async def list_active_alerts(db: AsyncSession = Depends(get_db)):
    """Active alerts, highest priority first."""
    return await SiteAlertRepository(db).list_active()


@admin_router.get("", response_model=list[SiteAlertResponse])
async def list_alerts(
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    return await SiteAlertRepository(db).list_all()


@admin_router.post("", response_model=SiteAlertResponse, status_code=status.HTTP_201_CREATED)
async def create_alert(
    request: SiteAlertCreateRequest,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    alert = await SiteAlertRepository(db).create(request.model_dump(), created_by=user.id)
    await db.commit()
    return alert


@admin_router.put("/{alert_id}", response_model=SiteAlertResponse)
async def update_alert(
    alert_id: int,
    request: SiteAlertUpdateRequest,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    alert = await SiteAlertRepository(db).update(alert_id, request.model_dump(exclude_unset=True))
    if not alert:
        raise HTTPException(status_code=404, detail=f"Site alert {alert_id} not found")
    await db.commit()
    return alert


@admin_router.patch("/{alert_id}/toggle", response_model=SiteAlertResponse)
async def toggle_alert(
    alert_id: int,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    alert = await SiteAlertRepository(db).toggle(alert_id)
    if not alert:
        raise HTTPException(status_code=404, detail=f"Site alert {alert_id} not found")
    await db.commit()
    return alert


@admin_router.delete("/{alert_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_alert(
    alert_id: int,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    deleted = await SiteAlertRepository(db).delete(alert_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Site alert {alert_id} not found")
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
