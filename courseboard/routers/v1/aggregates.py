from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from courseboard.core.config import settings
from courseboard.core.deps import get_repository, get_student_id
from courseboard.core.errors import upstream_failed
from courseboard.repositories.classroom_repo import ClassroomRepo, UpstreamError
from courseboard.schemas.aggregate import CourseGradeSummary, GradeRow, MissingItem, UpcomingItem
from courseboard.services.aggregation_service import AggregationService

router = APIRouter()

RepoDep = Annotated[ClassroomRepo, Depends(get_repository)]
StudentDep = Annotated[str, Depends(get_student_id)]


@router.get("/aggregates/upcoming", response_model=list[UpcomingItem])
async def upcoming_endpoint(
    repo: RepoDep,
    student_id: StudentDep,
    days: Annotated[Optional[int], Query(ge=0)] = None,
):
    if days is None:
        days = settings.default_lookahead_days
    try:
        return await AggregationService.get_upcoming(repo, days=days, student_id=student_id)
    except UpstreamError as e:
        raise upstream_failed(e)


@router.get("/aggregates/missing", response_model=list[MissingItem])
async def missing_endpoint(repo: RepoDep, student_id: StudentDep):
    try:
        return await AggregationService.get_missing(repo, student_id=student_id)
    except UpstreamError as e:
        raise upstream_failed(e)


@router.get("/aggregates/grades", response_model=list[GradeRow])
async def grades_endpoint(repo: RepoDep, student_id: StudentDep):
    try:
        return await AggregationService.get_grades(repo, student_id=student_id)
    except UpstreamError as e:
        raise upstream_failed(e)


@router.get("/aggregates/courses/{course_id}/grades", response_model=CourseGradeSummary)
async def course_grades_endpoint(course_id: str, repo: RepoDep, student_id: StudentDep):
    try:
        return await AggregationService.get_course_grades(repo, course_id, student_id=student_id)
    except UpstreamError as e:
        raise upstream_failed(e)
