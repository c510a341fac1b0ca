"""
Join coursework with submissions and flatten the remote service's nested
shapes (dates, materials) into output-ready values.
"""
import math
from typing import Any, Dict, List, Optional, Sequence

from courseboard.schemas.aggregate import (
    DriveFileMaterial,
    FormMaterial,
    JoinedRecord,
    LinkMaterial,
    Material,
    UnknownMaterial,
    YouTubeMaterial,
)
from courseboard.schemas.classroom import Course, CourseWork, Date, StudentSubmission, TimeOfDay


def format_due_date(due_date: Optional[Date]) -> Optional[str]:
    if due_date is None:
        return None
    return f"{due_date.year:04d}-{due_date.month:02d}-{due_date.day:02d}"


def format_due_time(due_date: Optional[Date], due_time: Optional[TimeOfDay]) -> Optional[str]:
    if due_date is None or due_time is None:
        return None
    return f"{due_time.hours or 0:02d}:{due_time.minutes or 0:02d}"


def percentage(earned: Optional[float], possible: Optional[float]) -> Optional[float]:
    """Percent with one decimal, half-up; None unless both sides exist and possible > 0."""
    if earned is None or possible is None or possible <= 0:
        return None
    return math.floor(earned / possible * 1000 + 0.5) / 10


def normalize_material(raw: Dict[str, Any]) -> Material:
    if "driveFile" in raw:
        shared = raw["driveFile"] or {}
        f = shared.get("driveFile") or {}
        return DriveFileMaterial(
            title=f.get("title"),
            url=f.get("alternateLink"),
            shareMode=shared.get("shareMode"),
            thumbnailUrl=f.get("thumbnailUrl"),
        )
    if "youtubeVideo" in raw:
        v = raw["youtubeVideo"] or {}
        return YouTubeMaterial(
            title=v.get("title"),
            url=v.get("alternateLink"),
            thumbnailUrl=v.get("thumbnailUrl"),
        )
    if "link" in raw:
        link = raw["link"] or {}
        return LinkMaterial(
            title=link.get("title"),
            url=link.get("url"),
            thumbnailUrl=link.get("thumbnailUrl"),
        )
    if "form" in raw:
        form = raw["form"] or {}
        return FormMaterial(
            title=form.get("title"),
            url=form.get("formUrl"),
            responseUrl=form.get("responseUrl"),
            thumbnailUrl=form.get("thumbnailUrl"),
        )
    return UnknownMaterial(raw=raw)


def normalize_materials(materials: Sequence[Dict[str, Any]]) -> List[Material]:
    return [normalize_material(m) for m in materials]


def join_course(
    course: Course,
    course_work: Sequence[CourseWork],
    submissions: Sequence[StudentSubmission],
) -> List[JoinedRecord]:
    """
    One record per coursework id, in coursework order. Duplicate ids are not
    validated: the later coursework (or submission) overwrites the earlier one.
    """
    work_by_id: Dict[str, CourseWork] = {}
    for cw in course_work:
        work_by_id[cw.id] = cw

    sub_by_work_id: Dict[str, StudentSubmission] = {}
    for sub in submissions:
        sub_by_work_id[sub.courseWorkId] = sub

    return [
        JoinedRecord(course=course, courseWork=cw, submission=sub_by_work_id.get(work_id))
        for work_id, cw in work_by_id.items()
    ]
