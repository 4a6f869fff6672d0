from datetime import date, datetime, timedelta, timezone

from app.schemas.advisory import AdvisoryRequest, AdvisoryStatus
from app.schemas.audit import AuditLog, DateRange
from app.schemas.case import Case, ProceduralStage
from app.services import filters

NOW = datetime(2024, 6, 10, 9, 0, tzinfo=timezone.utc)


def make_case(id, next_hearing=None, **kwargs):
    data = {
        "id": id,
        "suit_number": f"LD/{id}/2024",
        "case_title": f"LASU v. {id}",
        "adversary_party": "Someone",
        "next_hearing": next_hearing,
    }
    data.update(kwargs)
    return Case(**data)


def make_request(id, status="Pending", due_date=None, **kwargs):
    return AdvisoryRequest(
        id=id,
        title=kwargs.pop("title", f"Request {id}"),
        requested_by="Registry",
        department="Registry",
        status=status,
        due_date=due_date,
        **kwargs,
    )


def test_matches_query():
    assert filters.matches_query(None, "anything")
    assert filters.matches_query("", "anything")
    assert filters.matches_query("lasu", "Bello v. LASU")
    assert not filters.matches_query("lasu", None, "Bello")


def test_empty_state():
    assert filters.empty_state([1], "cases") is None
    state = filters.empty_state([], "cases")
    assert state.title == "No cases found"
    assert state.message == "Try adjusting your search or filter criteria"


def test_filter_cases_combines_search_and_stage():
    cases = [
        make_case("a", procedural_stage="Trial", assigned_counsel="Barr. Adeyemi"),
        make_case("b", procedural_stage="Mention", assigned_counsel="Barr. Adeyemi"),
        make_case("c", procedural_stage="Trial", assigned_counsel="Barr. Okonkwo"),
    ]
    result = filters.filter_cases(cases, "adeyemi", ProceduralStage.trial)
    assert [c.id for c in result] == ["a"]
    assert len(filters.filter_cases(cases, None, "all")) == 3


def test_upcoming_hearings_excludes_now_for_dashboard():
    cases = [
        make_case("now", NOW),
        make_case("later", NOW + timedelta(days=3)),
        make_case("soon", NOW + timedelta(hours=1)),
        make_case("none"),
        make_case("past", NOW - timedelta(hours=1)),
    ]
    assert [c.id for c in filters.upcoming_hearings(cases, NOW)] == ["soon", "later"]
    assert [c.id for c in filters.upcoming_hearings(cases, NOW, include_now=True)] == ["now", "soon", "later"]


def test_upcoming_hearings_limit():
    cases = [make_case(str(i), NOW + timedelta(days=i)) for i in range(1, 8)]
    assert len(filters.upcoming_hearings(cases, NOW)) == 4
    assert len(filters.upcoming_hearings(cases, NOW, limit=None)) == 7


def test_urgent_window_boundaries():
    cases = [
        make_case("now", NOW),
        make_case("edge", NOW + timedelta(hours=72)),
        make_case("outside", NOW + timedelta(hours=72, seconds=1)),
        make_case("inside", NOW + timedelta(hours=2)),
    ]
    assert [c.id for c in filters.urgent_hearings(cases, NOW)] == ["inside", "edge"]


def test_format_time_remaining():
    assert filters.format_time_remaining(NOW + timedelta(hours=50, minutes=59), NOW) == "2d 2h"
    assert filters.format_time_remaining(NOW + timedelta(hours=5, minutes=30), NOW) == "5h"


def test_hearings_on():
    cases = [
        make_case("a", datetime(2024, 6, 12, 10, 0, tzinfo=timezone.utc)),
        make_case("b", datetime(2024, 6, 13, 10, 0, tzinfo=timezone.utc)),
    ]
    assert [c.id for c in filters.hearings_on(cases, date(2024, 6, 12))] == ["a"]


def test_naive_hearing_times_are_utc():
    case = make_case("a", datetime(2024, 6, 10, 10, 0))
    assert case.next_hearing.tzinfo == timezone.utc
    assert filters.urgent_hearings([case], NOW) == [case]


def test_group_advisory_keeps_column_order():
    requests = [
        make_request("1", "Completed"),
        make_request("2", "Urgent"),
        make_request("3", "Pending"),
    ]
    groups = filters.group_advisory(requests)
    assert list(groups) == ["Urgent", "Pending", "In Progress", "Completed"]
    assert [r.id for r in groups["Urgent"]] == ["2"]
    assert groups["In Progress"] == []


def test_days_remaining_rounds_up():
    assert filters.days_remaining(NOW + timedelta(days=1, hours=1), NOW) == 2
    assert filters.days_remaining(NOW + timedelta(days=2), NOW) == 2
    assert filters.days_remaining(NOW - timedelta(hours=36), NOW) == -1
    assert filters.days_remaining(None, NOW) is None


def test_filter_advisory():
    requests = [
        make_request("1", "Urgent", title="Review MoU"),
        make_request("2", "Pending", title="Review contract"),
    ]
    assert [r.id for r in filters.filter_advisory(requests, "review", AdvisoryStatus.pending)] == ["2"]


def make_log(id, timestamp, user_id="u1", resource_id="r1", action="VIEW"):
    return AuditLog(
        id=id,
        user_id=user_id,
        user_name="Barr. Adeyemi",
        action=action,
        resource="case",
        resource_id=resource_id,
        timestamp=timestamp,
    )


def test_audit_ranges_and_stats():
    logs = [
        make_log("today", NOW - timedelta(hours=1)),
        make_log("yesterday", NOW - timedelta(days=1), user_id="u2"),
        make_log("fortnight", NOW - timedelta(days=14), resource_id="r2"),
        make_log("old", NOW - timedelta(days=60), action="DELETE"),
    ]
    def ids(date_range):
        return [log.id for log in filters.filter_audit_logs(logs, date_range=date_range, now=NOW)]

    assert ids(DateRange.today) == ["today"]
    assert ids(DateRange.week) == ["today", "yesterday"]
    assert ids(DateRange.month) == ["today", "yesterday", "fortnight"]
    assert len(ids(DateRange.all)) == 4

    assert filters.audit_stats(logs, NOW) == {
        "total": 4,
        "today": 1,
        "unique_users": 2,
        "resources_accessed": 2,
    }
