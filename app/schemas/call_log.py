from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.models.call_log import CallStatus, CallType


class CallInitiate(BaseModel):
    """Schema for starting a call."""

    recipient_id: int
    call_type: CallType = CallType.OUTBOUND


class CallDetailsUpdate(BaseModel):
    """Schema for a call status update."""

    status: CallStatus
    duration: int = Field(default=0, ge=0, description="Call duration in seconds")
    notes: str | None = None


class CallNotesUpdate(BaseModel):
    notes: str


class CallLogFilters(BaseModel):
    """Optional narrowing for call log listings."""

    call_type: CallType | None = None
    status: CallStatus | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


class CallLogResponse(BaseModel):
    """Schema for call log response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    caller_id: int
    recipient_id: int
    call_type: CallType
    status: CallStatus
    duration: int
    start_time: datetime
    end_time: datetime | None = None
    notes: str | None = None
    created_at: datetime


class CallLogEntry(CallLogResponse):
    """Call log row enriched with both parties' details."""

    caller_name: str
    caller_role: str
    recipient_name: str
    recipient_role: str


class CallAnalytics(BaseModel):
    """Aggregate call statistics for one user."""

    total_calls: int
    completed_calls: int
    missed_calls: int
    inbound_calls: int
    outbound_calls: int
    avg_duration: float
    total_duration: int
    max_duration: int
