from datetime import datetime, timedelta, timezone

from app.schemas.advisory import AdvisoryRequest
from app.schemas.case import Case
from app.services.dashboard import build_dashboard, compute_metrics

NOW = datetime(2024, 6, 10, 9, 0, tzinfo=timezone.utc)


def case(id, status="Active", hours=None):
    return Case(
        id=id,
        suit_number=id,
        case_title=id,
        adversary_party="X",
        status=status,
        next_hearing=NOW + timedelta(hours=hours) if hours is not None else None,
    )


def request(id, status):
    return AdvisoryRequest(id=id, title=id, requested_by="R", department="D", status=status)


def test_metrics():
    cases = [
        case("a", "Active", hours=10),
        case("b", "Active", hours=100),
        case("c", "Closed", hours=-5),
        case("d", "Urgent", hours=48),
    ]
    requests = [
        request("1", "Pending"),
        request("2", "In Progress"),
        request("3", "Urgent"),
        request("4", "Completed"),
    ]
    metrics = compute_metrics(cases, requests, NOW)
    assert metrics.active_litigation == 2
    assert metrics.advisory_backlog == 3
    assert metrics.urgent_hearings == 2
    assert metrics.win_rate == 0
    assert metrics.total_cases == 4
    assert metrics.pending_advisory == 2
    assert metrics.urgent_advisory == 1


def test_empty_dashboard():
    dashboard = build_dashboard([], [], NOW)
    assert dashboard.metrics.total_cases == 0
    assert dashboard.upcoming_hearings == []
    assert dashboard.urgent_hearings == []


def test_dashboard_lists():
    cases = [case(str(i), hours=i * 20) for i in range(1, 7)]
    dashboard = build_dashboard(cases, [], NOW)
    assert [c.id for c in dashboard.upcoming_hearings] == ["1", "2", "3", "4"]
    assert [u.case.id for u in dashboard.urgent_hearings] == ["1", "2", "3"]
    assert dashboard.urgent_hearings[0].time_remaining == "20h"
    assert dashboard.urgent_hearings[2].time_remaining == "2d 12h"
