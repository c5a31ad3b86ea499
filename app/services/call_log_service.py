"""Call Log Service for recording calls between platform users."""

import logging
from datetime import datetime
from typing import Any

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import and_, case, desc, func, or_
from sqlalchemy.orm import aliased

from app.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from app.core.validation import pagination_offset, require_fields, sanitize_content
from app.models import CallLog, CallStatus, CallType, User
from app.models.base import utcnow
from app.schemas.call_log import (
    CallAnalytics,
    CallLogEntry,
    CallLogFilters,
    CallLogResponse,
)
from app.services.base import CommunicationService

logger = logging.getLogger(__name__)

# Statuses a participant may report. INITIATED is only ever set on creation.
REPORTABLE_STATUSES = (
    CallStatus.RINGING,
    CallStatus.ANSWERED,
    CallStatus.MISSED,
    CallStatus.COMPLETED,
    CallStatus.FAILED,
)


def involving(user_id: int):
    return or_(CallLog.caller_id == user_id, CallLog.recipient_id == user_id)


class CallLogService(CommunicationService):
    """Service for call log operations and analytics."""

    def initiate_call(
        self,
        caller_id: int,
        recipient_id: int,
        call_type: CallType | str = CallType.OUTBOUND,
    ) -> CallLogResponse:
        """Open a call log in INITIATED status."""
        require_fields(caller_id=caller_id, recipient_id=recipient_id)
        call_type = self._choice(CallType, call_type, "call_type")

        with self._store_errors("initiate call"):
            self._require_access(caller_id, recipient_id)

            call = CallLog(
                caller_id=caller_id,
                recipient_id=recipient_id,
                call_type=call_type,
                status=CallStatus.INITIATED,
                start_time=utcnow(),
            )
            self.db.add(call)
            self.db.commit()
            self.db.refresh(call)
            response = CallLogResponse.model_validate(call)

        self._audit(
            caller_id,
            "initiate_call",
            "call_logs",
            response.id,
            {"recipient_id": recipient_id, "call_type": call_type.value},
        )
        logger.info(f"User {caller_id} initiated call {response.id} to user {recipient_id}")
        return response

    def log_call_details(
        self,
        call_id: int,
        user_id: int,
        status: CallStatus | str,
        duration: int = 0,
        notes: str | None = None,
    ) -> CallLogResponse:
        """Overwrite status, duration, end time and notes of a call.

        No transition rules apply: any participant may set any reportable
        status at any time, including moving a completed call back to ringing.
        """
        status = self._choice(CallStatus, status, "status", allowed=REPORTABLE_STATUSES)
        if duration is None or duration < 0:
            raise ValidationError("duration must be a non-negative number of seconds", field="duration")

        with self._store_errors("log call details"):
            call = self._get_participant_call(call_id, user_id)
            call.status = status
            call.duration = duration
            call.end_time = utcnow()
            call.notes = sanitize_content(notes) if notes else None
            self.db.commit()
            self.db.refresh(call)
            response = CallLogResponse.model_validate(call)

        self._audit(
            user_id,
            "log_call_details",
            "call_logs",
            call_id,
            {"status": status.value, "duration": duration},
        )
        return response

    def get_call_logs(
        self,
        user_id: int,
        page: int = 1,
        limit: int = 50,
        filters: CallLogFilters | dict[str, Any] | None = None,
    ) -> list[CallLogEntry]:
        """All calls the user took part in, newest first."""
        offset = pagination_offset(page, limit)
        filters = self._coerce_filters(filters)

        caller = aliased(User)
        recipient = aliased(User)

        with self._store_errors("list call logs"):
            query = (
                self.db.query(
                    CallLog,
                    caller.name,
                    caller.role,
                    recipient.name,
                    recipient.role,
                )
                .join(caller, CallLog.caller_id == caller.id)
                .join(recipient, CallLog.recipient_id == recipient.id)
                .filter(involving(user_id))
            )

            if filters.call_type:
                query = query.filter(CallLog.call_type == filters.call_type)
            if filters.status:
                query = query.filter(CallLog.status == filters.status)
            query = self._within(query, filters.start_date, filters.end_date)

            rows = (
                query.order_by(desc(CallLog.start_time), desc(CallLog.id))
                .offset(offset)
                .limit(limit)
                .all()
            )

        return [
            CallLogEntry(
                **CallLogResponse.model_validate(call).model_dump(),
                caller_name=caller_name,
                caller_role=caller_role,
                recipient_name=recipient_name,
                recipient_role=recipient_role,
            )
            for call, caller_name, caller_role, recipient_name, recipient_role in rows
        ]

    def get_call_history_with_user(
        self, current_user_id: int, other_user_id: int, page: int = 1, limit: int = 50
    ) -> list[CallLogResponse]:
        """Calls between exactly these two users, in either direction."""
        offset = pagination_offset(page, limit)

        with self._store_errors("load call history"):
            self._require_access(current_user_id, other_user_id)

            calls = (
                self.db.query(CallLog)
                .filter(
                    or_(
                        and_(
                            CallLog.caller_id == current_user_id,
                            CallLog.recipient_id == other_user_id,
                        ),
                        and_(
                            CallLog.caller_id == other_user_id,
                            CallLog.recipient_id == current_user_id,
                        ),
                    )
                )
                .order_by(desc(CallLog.start_time), desc(CallLog.id))
                .offset(offset)
                .limit(limit)
                .all()
            )

        return [CallLogResponse.model_validate(call) for call in calls]

    def get_call_analytics(
        self,
        user_id: int,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
    ) -> CallAnalytics:
        """Aggregate statistics over the user's calls."""
        with self._store_errors("compute call analytics"):
            query = self.db.query(
                func.count(CallLog.id).label("total_calls"),
                func.sum(case((CallLog.status == CallStatus.COMPLETED, 1), else_=0)).label(
                    "completed_calls"
                ),
                func.sum(case((CallLog.status == CallStatus.MISSED, 1), else_=0)).label(
                    "missed_calls"
                ),
                func.sum(case((CallLog.call_type == CallType.INBOUND, 1), else_=0)).label(
                    "inbound_calls"
                ),
                func.sum(case((CallLog.call_type == CallType.OUTBOUND, 1), else_=0)).label(
                    "outbound_calls"
                ),
                # Unanswered calls have zero duration and would drag the average down.
                func.avg(case((CallLog.duration > 0, CallLog.duration))).label("avg_duration"),
                func.sum(CallLog.duration).label("total_duration"),
                func.max(CallLog.duration).label("max_duration"),
            ).filter(involving(user_id))
            row = self._within(query, start_date, end_date).one()

        return CallAnalytics(
            total_calls=row.total_calls or 0,
            completed_calls=row.completed_calls or 0,
            missed_calls=row.missed_calls or 0,
            inbound_calls=row.inbound_calls or 0,
            outbound_calls=row.outbound_calls or 0,
            avg_duration=round(float(row.avg_duration or 0), 2),
            total_duration=row.total_duration or 0,
            max_duration=row.max_duration or 0,
        )

    def update_call_notes(self, call_id: int, user_id: int, notes: str) -> CallLogResponse:
        """Replace a call's notes without touching its status."""
        with self._store_errors("update call notes"):
            call = self._get_participant_call(call_id, user_id)
            call.notes = sanitize_content(notes)
            self.db.commit()
            self.db.refresh(call)
            response = CallLogResponse.model_validate(call)

        self._audit(user_id, "update_call_notes", "call_logs", call_id)
        return response

    def _get_participant_call(self, call_id: int, user_id: int) -> CallLog:
        call = self.db.get(CallLog, call_id)
        if call is None:
            raise NotFoundError("Call", str(call_id))
        if not call.involves(user_id):
            raise AuthorizationError(
                "Only the caller or recipient can update a call",
                details={"call_id": call_id},
            )
        return call

    @staticmethod
    def _within(query, start_date: datetime | None, end_date: datetime | None):
        if start_date:
            query = query.filter(CallLog.start_time >= start_date)
        if end_date:
            query = query.filter(CallLog.start_time <= end_date)
        return query

    @staticmethod
    def _coerce_filters(filters: CallLogFilters | dict[str, Any] | None) -> CallLogFilters:
        if filters is None:
            return CallLogFilters()
        if isinstance(filters, CallLogFilters):
            return filters
        try:
            return CallLogFilters(**filters)
        except PydanticValidationError as e:
            field = str(e.errors()[0]["loc"][0]) if e.errors() else None
            raise ValidationError("Invalid call log filters", field=field) from e
