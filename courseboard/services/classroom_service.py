import re
from datetime import date
from typing import Optional, Sequence

from courseboard.repositories.classroom_repo import ALL_COURSE_WORK, ClassroomRepo
from courseboard.schemas.classroom import (
    Announcement,
    Course,
    CourseWork,
    CourseWorkCreate,
    Student,
    StudentSubmission,
)

_DATE_RE = re.compile(r"^\d{4}-\d{1,2}-\d{1,2}$")
_TIME_RE = re.compile(r"^\d{1,2}:\d{2}$")


def _validate_create(data: CourseWorkCreate) -> None:
    if not data.title.strip():
        raise ValueError("title must not be empty")
    if data.dueDate is not None:
        if not _DATE_RE.match(data.dueDate):
            raise ValueError(f"dueDate must be YYYY-MM-DD, got {data.dueDate!r}")
        year, month, day = (int(p) for p in data.dueDate.split("-"))
        try:
            date(year, month, day)
        except ValueError:
            raise ValueError(f"dueDate is not a calendar date: {data.dueDate!r}") from None
    if data.dueTime is not None:
        if not _TIME_RE.match(data.dueTime):
            raise ValueError(f"dueTime must be HH:MM, got {data.dueTime!r}")
        hours, minutes = (int(p) for p in data.dueTime.split(":"))
        if hours > 23 or minutes > 59:
            raise ValueError(f"dueTime out of range: {data.dueTime!r}")


class ClassroomService:
    """Operazioni dirette sul servizio remoto, senza aggregazione."""

    @staticmethod
    async def list_courses(
        repo: ClassroomRepo,
        course_states: Optional[Sequence[str]] = None,
        teacher_id: Optional[str] = None,
        student_id: Optional[str] = None,
    ) -> Sequence[Course]:
        return await repo.list_courses(course_states, teacher_id, student_id)

    @staticmethod
    async def get_course(repo: ClassroomRepo, course_id: str) -> Course:
        return await repo.get_course(course_id)

    @staticmethod
    async def list_course_work(
        repo: ClassroomRepo, course_id: str, course_work_states: Optional[Sequence[str]] = None
    ) -> Sequence[CourseWork]:
        return await repo.list_course_work(course_id, course_work_states)

    @staticmethod
    async def get_course_work(repo: ClassroomRepo, course_id: str, course_work_id: str) -> CourseWork:
        return await repo.get_course_work(course_id, course_work_id)

    @staticmethod
    async def list_students(repo: ClassroomRepo, course_id: str) -> Sequence[Student]:
        return await repo.list_students(course_id)

    @staticmethod
    async def list_submissions(
        repo: ClassroomRepo,
        course_id: str,
        course_work_id: str = ALL_COURSE_WORK,
        user_id: Optional[str] = None,
    ) -> Sequence[StudentSubmission]:
        return await repo.list_submissions(course_id, course_work_id, user_id)

    @staticmethod
    async def list_announcements(
        repo: ClassroomRepo, course_id: str, announcement_states: Optional[Sequence[str]] = None
    ) -> Sequence[Announcement]:
        return await repo.list_announcements(course_id, announcement_states)

    @staticmethod
    async def create_course_work(repo: ClassroomRepo, course_id: str, data: CourseWorkCreate) -> CourseWork:
        _validate_create(data)
        return await repo.create_course_work(course_id, data)
