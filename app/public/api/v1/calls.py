"""Call log endpoints."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, status

from app.config.service import settings
from app.core.dependencies import get_call_log_service, get_current_user_id
from app.models import CallStatus, CallType
from app.schemas.call_log import (
    CallAnalytics,
    CallDetailsUpdate,
    CallInitiate,
    CallLogEntry,
    CallLogFilters,
    CallLogResponse,
    CallNotesUpdate,
)
from app.services.call_log_service import CallLogService

router = APIRouter(prefix="/calls", tags=["calls"])


@router.post("/", response_model=CallLogResponse, status_code=status.HTTP_201_CREATED)
async def initiate_call(
    payload: CallInitiate,
    user_id: int = Depends(get_current_user_id),
    call_service: CallLogService = Depends(get_call_log_service),
) -> CallLogResponse:
    """Start a call log entry."""
    return call_service.initiate_call(user_id, payload.recipient_id, payload.call_type)


@router.get("/", response_model=list[CallLogEntry])
async def get_call_logs(
    user_id: int = Depends(get_current_user_id),
    call_service: CallLogService = Depends(get_call_log_service),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.HISTORY_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    call_type: CallType | None = Query(None),
    call_status: CallStatus | None = Query(None, alias="status"),
    start_date: datetime | None = Query(None),
    end_date: datetime | None = Query(None),
) -> list[CallLogEntry]:
    """List the current user's calls."""
    filters = CallLogFilters(
        call_type=call_type, status=call_status, start_date=start_date, end_date=end_date
    )
    return call_service.get_call_logs(user_id, page=page, limit=limit, filters=filters)


@router.get("/analytics", response_model=CallAnalytics)
async def get_call_analytics(
    user_id: int = Depends(get_current_user_id),
    call_service: CallLogService = Depends(get_call_log_service),
    start_date: datetime | None = Query(None),
    end_date: datetime | None = Query(None),
) -> CallAnalytics:
    """Aggregate statistics over the current user's calls."""
    return call_service.get_call_analytics(user_id, start_date=start_date, end_date=end_date)


@router.get("/history/{other_user_id}", response_model=list[CallLogResponse])
async def get_call_history_with_user(
    other_user_id: int,
    user_id: int = Depends(get_current_user_id),
    call_service: CallLogService = Depends(get_call_log_service),
    page: int = Query(1, ge=1),
    limit: int = Query(settings.HISTORY_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
) -> list[CallLogResponse]:
    """Calls between the current user and another user."""
    return call_service.get_call_history_with_user(user_id, other_user_id, page=page, limit=limit)


@router.patch("/{call_id}", response_model=CallLogResponse)
async def log_call_details(
    call_id: int,
    payload: CallDetailsUpdate,
    user_id: int = Depends(get_current_user_id),
    call_service: CallLogService = Depends(get_call_log_service),
) -> CallLogResponse:
    """Report a call status change."""
    return call_service.log_call_details(
        call_id, user_id, payload.status, duration=payload.duration, notes=payload.notes
    )


@router.put("/{call_id}/notes", response_model=CallLogResponse)
async def update_call_notes(
    call_id: int,
    payload: CallNotesUpdate,
    user_id: int = Depends(get_current_user_id),
    call_service: CallLogService = Depends(get_call_log_service),
) -> CallLogResponse:
    """Replace a call's notes."""
    return call_service.update_call_notes(call_id, user_id, payload.notes)
