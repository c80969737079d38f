"""Notification endpoints."""

from fastapi import APIRouter, Depends, Query, status

from outletstock.api.dependencies import get_notification_svc
from outletstock.application.dto.requests import CreateNotificationRequest
from outletstock.application.dto.responses import (
    CountResponse,
    ErrorResponse,
    NotificationListResponse,
    NotificationResponse,
)
from outletstock.core.services import NotificationService

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.post(
    "",
    response_model=NotificationResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_notification(
    request: CreateNotificationRequest,
    service: NotificationService = Depends(get_notification_svc),
) -> NotificationResponse:
    notification = await service.notify(**request.model_dump())
    return NotificationResponse.model_validate(notification, from_attributes=True)


@router.get("/{location}", response_model=NotificationListResponse)
async def list_notifications(
    location: str,
    type: str | None = None,
    limit: int = Query(default=50, ge=1, le=500),
    service: NotificationService = Depends(get_notification_svc),
) -> NotificationListResponse:
    """Newest-first notifications for a location."""
    notifications = await service.list_for_location(location, type=type, limit=limit)
    return NotificationListResponse(
        notifications=[
            NotificationResponse.model_validate(n, from_attributes=True) for n in notifications
        ],
        count=len(notifications),
    )


@router.put(
    "/{notification_id}/read",
    response_model=NotificationResponse,
    responses={404: {"model": ErrorResponse}},
)
async def mark_read(
    notification_id: str,
    service: NotificationService = Depends(get_notification_svc),
) -> NotificationResponse:
    notification = await service.mark_read(notification_id)
    return NotificationResponse.model_validate(notification, from_attributes=True)


@router.put("/{location}/read-all", response_model=CountResponse)
async def mark_all_read(
    location: str,
    service: NotificationService = Depends(get_notification_svc),
) -> CountResponse:
    return CountResponse(count=await service.mark_all_read(location))


@router.delete("/{location}", response_model=CountResponse)
async def clear_notifications(
    location: str,
    service: NotificationService = Depends(get_notification_svc),
) -> CountResponse:
    """Delete every notification addressed to a location."""
    return CountResponse(count=await service.clear_all(location))
