from datetime import datetime, timedelta
from typing import Iterable, List, Optional, TypeVar

from courseboard.schemas.aggregate import JoinedRecord, MissingItem, UpcomingItem
from courseboard.schemas.classroom import CourseWork
from courseboard.services.normalize import format_due_date, format_due_time, normalize_materials

DONE_STATES = {"TURNED_IN", "RETURNED"}
NOT_STARTED = "NOT_STARTED"

T = TypeVar("T", bound=UpcomingItem)


def due_datetime(cw: CourseWork) -> Optional[datetime]:
    """Due date at local midnight. dueTime is ignored."""
    if cw.dueDate is None:
        return None
    d = cw.dueDate
    return datetime(d.year, d.month, d.day)


def _item_fields(rec: JoinedRecord) -> dict:
    cw = rec.courseWork
    sub = rec.submission
    return dict(
        courseId=rec.course.id,
        courseName=rec.course.name,
        courseWorkId=cw.id,
        title=cw.title,
        description=cw.description,
        workType=cw.workType,
        dueDate=format_due_date(cw.dueDate),
        dueTime=format_due_time(cw.dueDate, cw.dueTime),
        maxPoints=cw.maxPoints,
        state=sub.state if sub else None,
        late=sub.late if sub else None,
        alternateLink=cw.alternateLink,
        materials=normalize_materials(cw.materials),
    )


def _by_due_date(items: List[T]) -> List[T]:
    # stable: equal dates keep course-then-item order
    return sorted(items, key=lambda i: i.dueDate)


def check_days(days: int) -> None:
    if isinstance(days, bool) or not isinstance(days, int) or days < 0:
        raise ValueError(f"days must be a non-negative integer, got {days!r}")


def upcoming(records: Iterable[JoinedRecord], days: int = 7, now: Optional[datetime] = None) -> List[UpcomingItem]:
    check_days(days)
    now = now or datetime.now()
    try:
        until = now + timedelta(days=days)
    except OverflowError:
        # oltre l'anno 9999: finestra aperta
        until = datetime.max

    items = []
    for rec in records:
        due = due_datetime(rec.courseWork)
        if due is None or not (now <= due <= until):
            continue
        items.append(UpcomingItem(**_item_fields(rec)))
    return _by_due_date(items)


def missing(records: Iterable[JoinedRecord], now: Optional[datetime] = None) -> List[MissingItem]:
    now = now or datetime.now()

    items = []
    for rec in records:
        due = due_datetime(rec.courseWork)
        if due is None or due >= now:
            continue
        sub = rec.submission
        if sub is not None and sub.state in DONE_STATES:
            continue
        status = sub.state if sub is not None and sub.state else NOT_STARTED
        items.append(MissingItem(status=status, **_item_fields(rec)))
    return _by_due_date(items)
