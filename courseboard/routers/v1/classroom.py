from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse

from courseboard.core.deps import get_repository
from courseboard.core.errors import upstream_failed
from courseboard.repositories.classroom_repo import ClassroomRepo, UpstreamError
from courseboard.schemas.classroom import (
    Announcement,
    Course,
    CourseWork,
    CourseWorkCreate,
    Student,
    StudentSubmission,
)
from courseboard.services.classroom_service import ClassroomService

router = APIRouter()

RepoDep = Annotated[ClassroomRepo, Depends(get_repository)]
StatesQuery = Annotated[Optional[List[str]], Query()]


@router.get("/courses", response_model=list[Course])
async def list_courses_endpoint(
    repo: RepoDep,
    courseStates: StatesQuery = None,
    teacherId: Optional[str] = None,
    studentId: Optional[str] = None,
):
    try:
        return await ClassroomService.list_courses(repo, courseStates, teacherId, studentId)
    except UpstreamError as e:
        raise upstream_failed(e)


@router.get("/courses/{course_id}", response_model=Course)
async def get_course_endpoint(course_id: str, repo: RepoDep):
    try:
        return await ClassroomService.get_course(repo, course_id)
    except UpstreamError as e:
        raise upstream_failed(e)


@router.get("/courses/{course_id}/coursework", response_model=list[CourseWork])
async def list_course_work_endpoint(course_id: str, repo: RepoDep, courseWorkStates: StatesQuery = None):
    try:
        return await ClassroomService.list_course_work(repo, course_id, courseWorkStates)
    except UpstreamError as e:
        raise upstream_failed(e)


@router.get("/courses/{course_id}/coursework/{course_work_id}", response_model=CourseWork)
async def get_course_work_endpoint(course_id: str, course_work_id: str, repo: RepoDep):
    try:
        return await ClassroomService.get_course_work(repo, course_id, course_work_id)
    except UpstreamError as e:
        raise upstream_failed(e)


@router.get("/courses/{course_id}/students", response_model=list[Student])
async def list_students_endpoint(course_id: str, repo: RepoDep):
    try:
        return await ClassroomService.list_students(repo, course_id)
    except UpstreamError as e:
        raise upstream_failed(e)


@router.get(
    "/courses/{course_id}/coursework/{course_work_id}/submissions",
    response_model=list[StudentSubmission],
)
async def list_submissions_endpoint(
    course_id: str,
    course_work_id: str,
    repo: RepoDep,
    userId: Optional[str] = None,
):
    try:
        return await ClassroomService.list_submissions(repo, course_id, course_work_id, userId)
    except UpstreamError as e:
        raise upstream_failed(e)


@router.get("/courses/{course_id}/announcements", response_model=list[Announcement])
async def list_announcements_endpoint(course_id: str, repo: RepoDep, announcementStates: StatesQuery = None):
    try:
        return await ClassroomService.list_announcements(repo, course_id, announcementStates)
    except UpstreamError as e:
        raise upstream_failed(e)


@router.post("/courses/{course_id}/coursework", status_code=status.HTTP_201_CREATED)
async def create_course_work_endpoint(course_id: str, data: CourseWorkCreate, repo: RepoDep):
    try:
        created = await ClassroomService.create_course_work(repo, course_id, data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    except UpstreamError as e:
        raise upstream_failed(e)

    location = f"/api/v1/courses/{course_id}/coursework/{created.id}"
    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=created.model_dump(mode="json"),
        headers={"Location": location},
    )
