from datetime import datetime, timezone
from typing import Optional, Sequence

from app.core.config import settings
from app.schemas.advisory import AdvisoryRequest, AdvisoryStatus
from app.schemas.case import Case, CaseStatus, UrgentHearing
from app.schemas.dashboard import DashboardMetrics, DashboardResponse
from app.services import filters


def compute_metrics(
    cases: Sequence[Case],
    requests: Sequence[AdvisoryRequest],
    now: Optional[datetime] = None,
) -> DashboardMetrics:
    urgent = filters.urgent_hearings(cases, now, settings.URGENT_HEARING_WINDOW_HOURS)
    return DashboardMetrics(
        active_litigation=sum(1 for c in cases if c.status == CaseStatus.active),
        advisory_backlog=sum(1 for r in requests if r.status != AdvisoryStatus.completed),
        urgent_hearings=len(urgent),
        # Outcomes are not recorded on cases yet
        win_rate=0,
        total_cases=len(cases),
        pending_advisory=sum(
            1 for r in requests
            if r.status in (AdvisoryStatus.pending, AdvisoryStatus.urgent)
        ),
        urgent_advisory=sum(1 for r in requests if r.status == AdvisoryStatus.urgent),
    )


def build_dashboard(
    cases: Sequence[Case],
    requests: Sequence[AdvisoryRequest],
    now: Optional[datetime] = None,
) -> DashboardResponse:
    """
    Everything the landing page shows: metric cards, the next four hearings
    and the risk monitor.
    """
    now = now or datetime.now(timezone.utc)
    urgent = filters.urgent_hearings(cases, now, settings.URGENT_HEARING_WINDOW_HOURS)
    return DashboardResponse(
        metrics=compute_metrics(cases, requests, now),
        upcoming_hearings=filters.upcoming_hearings(cases, now, limit=4),
        urgent_hearings=[
            UrgentHearing(
                case=c,
                time_remaining=filters.format_time_remaining(c.next_hearing, now),
            )
            for c in urgent
        ],
    )
