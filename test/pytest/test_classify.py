# test/pytest/test_classify.py
from datetime import datetime

import pytest

from courseboard.schemas.aggregate import JoinedRecord
from courseboard.schemas.classroom import Course, CourseWork, Date, StudentSubmission, TimeOfDay
from courseboard.services.classify import NOT_STARTED, due_datetime, missing, upcoming

NOW = datetime(2026, 3, 10, 9, 30)


def _rec(work_id, due=None, state=None, course=("c1", "Storia"), **work_fields):
    cw = CourseWork(
        id=work_id,
        title=work_id,
        dueDate=Date(year=due[0], month=due[1], day=due[2]) if due else None,
        **work_fields,
    )
    sub = StudentSubmission(id=f"s-{work_id}", courseWorkId=work_id, state=state) if state else None
    return JoinedRecord(course=Course(id=course[0], name=course[1]), courseWork=cw, submission=sub)


def test_due_datetime_uses_local_midnight():
    cw = CourseWork(id="w", dueDate=Date(year=2026, month=3, day=15), dueTime=TimeOfDay(hours=23, minutes=59))
    assert due_datetime(cw) == datetime(2026, 3, 15)
    assert due_datetime(CourseWork(id="w")) is None


# --------------------------------- upcoming ----------------------------------
def test_upcoming_scenario_with_due_time():
    rec = _rec("w1", due=(2026, 3, 15), dueTime=TimeOfDay(hours=23, minutes=59), maxPoints=100)
    items = upcoming([rec], days=7, now=NOW)
    assert len(items) == 1
    assert items[0].dueDate == "2026-03-15"
    assert items[0].dueTime == "23:59"
    assert items[0].maxPoints == 100
    assert items[0].courseName == "Storia"


def test_upcoming_window_bounds():
    records = [
        _rec("past", due=(2026, 3, 9)),
        _rec("today-midnight", due=(2026, 3, 10)),
        _rec("tomorrow", due=(2026, 3, 11)),
        _rec("edge", due=(2026, 3, 17)),
        _rec("beyond", due=(2026, 3, 18)),
        _rec("no-date"),
    ]
    ids = [i.courseWorkId for i in upcoming(records, days=7, now=NOW)]
    # 2026-03-17 00:00 <= NOW + 7 days; 2026-03-10 00:00 is before NOW
    assert ids == ["tomorrow", "edge"]


def test_upcoming_zero_days_at_midnight():
    midnight = datetime(2026, 3, 10)
    ids = [i.courseWorkId for i in upcoming([_rec("w", due=(2026, 3, 10))], days=0, now=midnight)]
    assert ids == ["w"]


def test_upcoming_sorted_with_stable_ties():
    records = [
        _rec("c1-late", due=(2026, 3, 14)),
        _rec("c1-tie", due=(2026, 3, 12)),
        _rec("c2-early", due=(2026, 3, 11), course=("c2", "Fisica")),
        _rec("c2-tie", due=(2026, 3, 12), course=("c2", "Fisica")),
    ]
    items = upcoming(records, days=7, now=NOW)
    assert [i.courseWorkId for i in items] == ["c2-early", "c1-tie", "c2-tie", "c1-late"]
    dates = [i.dueDate for i in items]
    assert dates == sorted(dates)


def test_upcoming_carries_submission_state_or_none():
    items = upcoming([_rec("a", due=(2026, 3, 12), state="TURNED_IN"), _rec("b", due=(2026, 3, 12))], now=NOW)
    assert [(i.courseWorkId, i.state) for i in items] == [("a", "TURNED_IN"), ("b", None)]


def test_upcoming_normalizes_materials():
    rec = _rec("w", due=(2026, 3, 12), materials=[{"link": {"url": "https://x", "title": "X"}}, {"mystery": {}}])
    item = upcoming([rec], now=NOW)[0]
    assert [m.type for m in item.materials] == ["link", "unknown"]


@pytest.mark.parametrize("days", [10**7, 10**9, 10**12])
def test_upcoming_huge_days_is_open_ended(days):
    records = [_rec("near", due=(2026, 3, 12)), _rec("far", due=(9999, 12, 31)), _rec("past", due=(2026, 3, 1))]
    assert [i.courseWorkId for i in upcoming(records, days=days, now=NOW)] == ["near", "far"]


@pytest.mark.parametrize("days", [-1, 1.5, True, "7"])
def test_upcoming_rejects_bad_days(days):
    with pytest.raises(ValueError):
        upcoming([], days=days, now=NOW)


# ---------------------------------- missing ----------------------------------
def test_missing_rules():
    records = [
        _rec("no-sub", due=(2026, 3, 1)),
        _rec("created", due=(2026, 3, 2), state="CREATED"),
        _rec("reclaimed", due=(2026, 3, 3), state="RECLAIMED_BY_STUDENT"),
        _rec("turned-in", due=(2026, 3, 4), state="TURNED_IN"),
        _rec("returned", due=(2026, 3, 5), state="RETURNED"),
        _rec("future", due=(2026, 3, 20)),
        _rec("no-date"),
    ]
    items = missing(records, now=NOW)
    assert [(i.courseWorkId, i.status) for i in items] == [
        ("no-sub", NOT_STARTED),
        ("created", "CREATED"),
        ("reclaimed", "RECLAIMED_BY_STUDENT"),
    ]
    assert items[0].state is None


def test_missing_includes_today_when_now_is_past_midnight():
    items = missing([_rec("today", due=(2026, 3, 10))], now=NOW)
    assert [i.courseWorkId for i in items] == ["today"]


def test_missing_sorted_by_due_date():
    records = [_rec("b", due=(2026, 2, 20)), _rec("a", due=(2025, 12, 1)), _rec("c", due=(2026, 1, 5))]
    assert [i.courseWorkId for i in missing(records, now=NOW)] == ["a", "c", "b"]
