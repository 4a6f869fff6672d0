"""
List filtering for the dashboard views.

Every view works the same way: a case-insensitive substring search over a
handful of text fields, combined with an optional enum filter, evaluated by a
linear scan over the rows fetched from the store. Nothing here talks to
Supabase; the endpoints fetch, these functions derive.
"""

import math
from collections import Counter
from datetime import date, datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional, Sequence, TypeVar

from app.schemas.advisory import AdvisoryRequest, AdvisoryStatus
from app.schemas.audit import AuditLog, DateRange
from app.schemas.base import EmptyState
from app.schemas.case import Case
from app.schemas.document import Document, DocumentType
from app.schemas.user import User, UserRole

T = TypeVar("T")

# Kanban column order on the advisory board
ADVISORY_COLUMNS = [
    AdvisoryStatus.urgent,
    AdvisoryStatus.pending,
    AdvisoryStatus.in_progress,
    AdvisoryStatus.completed,
]


def _now() -> datetime:
    return datetime.now(timezone.utc)


def matches_query(query: Optional[str], *fields: Optional[str]) -> bool:
    """
    True when the query is empty or is a substring of any field, ignoring case.
    """
    if not query:
        return True
    needle = query.lower()
    return any(needle in (field or "").lower() for field in fields)


def empty_state(items: Sequence[T], noun: str) -> Optional[EmptyState]:
    """
    Descriptor the client renders when a filtered list comes back empty.

    Args:
        items: The filtered rows
        noun: Plural name of the rows, e.g. "cases"

    Returns:
        None when there is something to show, otherwise the empty state
    """
    if items:
        return None
    return EmptyState(title=f"No {noun} found")


# Litigation registry

def filter_cases(
    cases: Iterable[Case],
    query: Optional[str] = None,
    stage: Optional[str] = None,
) -> List[Case]:
    return [
        case for case in cases
        if matches_query(
            query,
            case.suit_number,
            case.case_title,
            case.adversary_party,
            case.assigned_counsel,
        )
        and (not stage or stage == "all" or case.procedural_stage == stage)
    ]


def upcoming_hearings(
    cases: Iterable[Case],
    now: Optional[datetime] = None,
    limit: Optional[int] = 4,
    include_now: bool = False,
) -> List[Case]:
    """
    Cases with a future hearing, soonest first.

    The dashboard shows strictly future hearings; the calendar also keeps a
    hearing scheduled for this very moment (include_now).
    """
    now = now or _now()
    if include_now:
        pending = [c for c in cases if c.next_hearing and c.next_hearing >= now]
    else:
        pending = [c for c in cases if c.next_hearing and c.next_hearing > now]
    pending.sort(key=lambda c: c.next_hearing)
    return pending[:limit] if limit is not None else pending


def hearings_on(cases: Iterable[Case], day: date) -> List[Case]:
    """Cases whose next hearing falls on the given calendar day."""
    return [
        c for c in cases
        if c.next_hearing and c.next_hearing.date() == day
    ]


def urgent_hearings(
    cases: Iterable[Case],
    now: Optional[datetime] = None,
    window_hours: int = 72,
) -> List[Case]:
    """Hearings due within the next window_hours, soonest first."""
    now = now or _now()
    window = timedelta(hours=window_hours)
    urgent = [
        c for c in cases
        if c.next_hearing and timedelta(0) < c.next_hearing - now <= window
    ]
    urgent.sort(key=lambda c: c.next_hearing)
    return urgent


def format_time_remaining(when: datetime, now: Optional[datetime] = None) -> str:
    now = now or _now()
    hours = math.floor((when - now).total_seconds() / 3600)
    days = hours // 24
    if days > 0:
        return f"{days}d {hours % 24}h"
    return f"{hours}h"


# Advisory workflow

def filter_advisory(
    requests: Iterable[AdvisoryRequest],
    query: Optional[str] = None,
    status: Optional[str] = None,
) -> List[AdvisoryRequest]:
    return [
        r for r in requests
        if matches_query(query, r.title, r.request_number, r.requested_by)
        and (not status or status == "all" or r.status == status)
    ]


def group_advisory(requests: Iterable[AdvisoryRequest]) -> Dict[str, List[AdvisoryRequest]]:
    groups: Dict[str, List[AdvisoryRequest]] = {s.value: [] for s in ADVISORY_COLUMNS}
    for request in requests:
        groups[request.status.value].append(request)
    return groups


def days_remaining(due: Optional[datetime], now: Optional[datetime] = None) -> Optional[int]:
    """Whole days until due, rounded up; negative once overdue."""
    if due is None:
        return None
    now = now or _now()
    return math.ceil((due - now).total_seconds() / 86400)


# Document vault

def filter_documents(
    documents: Iterable[Document],
    query: Optional[str] = None,
    doc_type: Optional[str] = None,
) -> List[Document]:
    return [
        d for d in documents
        if matches_query(query, d.name, d.uploaded_by)
        and (not doc_type or doc_type == "all" or d.type == doc_type)
    ]


def document_type_counts(documents: Iterable[Document]) -> Dict[str, int]:
    counts = Counter(d.type.value for d in documents)
    return {t.value: counts.get(t.value, 0) for t in DocumentType}


# Audit trail

def filter_audit_logs(
    logs: Iterable[AuditLog],
    query: Optional[str] = None,
    action: Optional[str] = None,
    date_range: DateRange = DateRange.all,
    now: Optional[datetime] = None,
) -> List[AuditLog]:
    now = now or _now()
    return [
        log for log in logs
        if matches_query(query, log.user_name, log.resource_id, log.details)
        and (not action or action == "all" or log.action == action)
        and _in_range(log.timestamp, date_range, now)
    ]


def _in_range(timestamp: datetime, date_range: DateRange, now: datetime) -> bool:
    if date_range == DateRange.today:
        return timestamp.astimezone(now.tzinfo).date() == now.date()
    if date_range == DateRange.week:
        return timestamp >= now - timedelta(days=7)
    if date_range == DateRange.month:
        return timestamp >= now - timedelta(days=30)
    return True


def audit_stats(logs: Sequence[AuditLog], now: Optional[datetime] = None) -> Dict[str, int]:
    now = now or _now()
    return {
        "total": len(logs),
        "today": sum(1 for log in logs if _in_range(log.timestamp, DateRange.today, now)),
        "unique_users": len({log.user_id for log in logs}),
        "resources_accessed": len({log.resource_id for log in logs}),
    }


# User management

def filter_users(
    users: Iterable[User],
    query: Optional[str] = None,
    role: Optional[str] = None,
) -> List[User]:
    return [
        u for u in users
        if matches_query(query, u.full_name, u.email)
        and (not role or role == "all" or u.role == role)
    ]


def role_counts(users: Sequence[User]) -> Dict[str, int]:
    counts = Counter(u.role.value for u in users if u.role)
    result = {r.value: counts.get(r.value, 0) for r in UserRole}
    result["total"] = len(users)
    return result
