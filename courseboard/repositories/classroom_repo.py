from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from courseboard.schemas.classroom import (
    Announcement,
    Course,
    CourseWork,
    CourseWorkCreate,
    Student,
    StudentSubmission,
)

# courseWorkId jolly: tutte le submission del corso
ALL_COURSE_WORK = "-"


class UpstreamError(Exception):
    """Il servizio classroom remoto ha fallito o ha risposto con un payload inutilizzabile."""


class ClassroomRepo(ABC):
    @abstractmethod
    async def list_courses(
        self,
        course_states: Optional[Sequence[str]] = None,
        teacher_id: Optional[str] = None,
        student_id: Optional[str] = None,
    ) -> Sequence[Course]:
        """Ritorna i corsi visibili all'utente, nell'ordine del servizio remoto."""
        raise NotImplementedError

    @abstractmethod
    async def get_course(self, course_id: str) -> Course:
        raise NotImplementedError

    @abstractmethod
    async def list_course_work(
        self, course_id: str, course_work_states: Optional[Sequence[str]] = None
    ) -> Sequence[CourseWork]:
        raise NotImplementedError

    @abstractmethod
    async def get_course_work(self, course_id: str, course_work_id: str) -> CourseWork:
        raise NotImplementedError

    @abstractmethod
    async def list_submissions(
        self,
        course_id: str,
        course_work_id: str = ALL_COURSE_WORK,
        user_id: Optional[str] = None,
    ) -> Sequence[StudentSubmission]:
        """Ritorna le submission di un coursework, o di tutto il corso con ALL_COURSE_WORK."""
        raise NotImplementedError

    @abstractmethod
    async def list_students(self, course_id: str) -> Sequence[Student]:
        raise NotImplementedError

    @abstractmethod
    async def list_announcements(
        self, course_id: str, announcement_states: Optional[Sequence[str]] = None
    ) -> Sequence[Announcement]:
        raise NotImplementedError

    @abstractmethod
    async def create_course_work(self, course_id: str, data: CourseWorkCreate) -> CourseWork:
        """Crea un coursework pubblicato e ritorna la risorsa creata."""
        raise NotImplementedError
