# courseboard/services/fanout.py
import asyncio
import enum
import logging
from typing import List, Sequence

from pydantic import BaseModel, Field

from courseboard.repositories.classroom_repo import ALL_COURSE_WORK, ClassroomRepo
from courseboard.schemas.classroom import Course, CourseWork, StudentSubmission

log = logging.getLogger(__name__)

PUBLISHED_ONLY = ["PUBLISHED"]


class FetchKind(str, enum.Enum):
    COURSEWORK = "coursework"
    SUBMISSIONS = "submissions"
    BOTH = "both"


class CourseBundle(BaseModel):
    """Risultato del fetch di un singolo corso; vuoto se il fetch è fallito."""
    course: Course
    courseWork: List[CourseWork] = Field(default_factory=list)
    submissions: List[StudentSubmission] = Field(default_factory=list)


async def _fetch_course_work(repo: ClassroomRepo, course: Course) -> List[CourseWork]:
    return list(await repo.list_course_work(course.id, PUBLISHED_ONLY))


async def _fetch_submissions(repo: ClassroomRepo, course: Course, student_id: str) -> List[StudentSubmission]:
    return list(await repo.list_submissions(course.id, ALL_COURSE_WORK, student_id))


async def _fetch_one(repo: ClassroomRepo, course: Course, fetch: FetchKind, student_id: str) -> CourseBundle:
    try:
        if fetch is FetchKind.COURSEWORK:
            return CourseBundle(course=course, courseWork=await _fetch_course_work(repo, course))
        if fetch is FetchKind.SUBMISSIONS:
            return CourseBundle(course=course, submissions=await _fetch_submissions(repo, course, student_id))
        # aspetta entrambe anche se una fallisce
        work, subs = await asyncio.gather(
            _fetch_course_work(repo, course),
            _fetch_submissions(repo, course, student_id),
            return_exceptions=True,
        )
        for r in (work, subs):
            if isinstance(r, Exception):
                raise r
        return CourseBundle(course=course, courseWork=work, submissions=subs)
    except Exception:
        # un corso che fallisce contribuisce un risultato vuoto, senza toccare gli altri
        log.warning("Fetch %s fallito per il corso %s, uso risultato vuoto", fetch.value, course.id, exc_info=True)
        return CourseBundle(course=course)


async def fan_out(
    repo: ClassroomRepo,
    courses: Sequence[Course],
    fetch: FetchKind = FetchKind.BOTH,
    student_id: str = "me",
) -> List[CourseBundle]:
    """
    Lancia un fetch per corso in parallelo e aspetta che finiscano tutti.
    Non solleva mai per errori del singolo corso.
    """
    tasks = [
        asyncio.create_task(_fetch_one(repo, course, fetch, student_id))
        for course in courses
    ]
    if not tasks:
        return []
    return list(await asyncio.gather(*tasks))
