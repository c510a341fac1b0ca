import asyncio
import logging
from datetime import datetime
from typing import List, Optional, Sequence

from courseboard.repositories.classroom_repo import ALL_COURSE_WORK, ClassroomRepo
from courseboard.schemas.aggregate import (
    CourseGradeSummary,
    GradeRow,
    JoinedRecord,
    MissingItem,
    UpcomingItem,
)
from courseboard.schemas.classroom import Course
from courseboard.services import classify, grades
from courseboard.services.fanout import PUBLISHED_ONLY, FetchKind, fan_out
from courseboard.services.normalize import join_course

log = logging.getLogger(__name__)

# le viste aggregate lavorano sempre e solo sui corsi attivi
AGGREGATE_COURSE_STATES = ("ACTIVE",)


async def resolve_courses(repo: ClassroomRepo, course_states: Optional[Sequence[str]] = None) -> List[Course]:
    """Gli errori qui non vengono assorbiti: senza corsi non c'è aggregazione."""
    return list(await repo.list_courses(course_states=course_states))


async def _joined_active(repo: ClassroomRepo, student_id: str) -> List[JoinedRecord]:
    courses = await resolve_courses(repo, AGGREGATE_COURSE_STATES)
    bundles = await fan_out(repo, courses, FetchKind.BOTH, student_id)
    records: List[JoinedRecord] = []
    for b in bundles:
        records.extend(join_course(b.course, b.courseWork, b.submissions))
    log.info("Aggregazione: %d corsi attivi, %d record", len(courses), len(records))
    return records


class AggregationService:

    @staticmethod
    async def get_upcoming(
        repo: ClassroomRepo,
        days: int = 7,
        now: Optional[datetime] = None,
        student_id: str = "me",
    ) -> List[UpcomingItem]:
        classify.check_days(days)
        records = await _joined_active(repo, student_id)
        return classify.upcoming(records, days=days, now=now)

    @staticmethod
    async def get_missing(
        repo: ClassroomRepo,
        now: Optional[datetime] = None,
        student_id: str = "me",
    ) -> List[MissingItem]:
        records = await _joined_active(repo, student_id)
        return classify.missing(records, now=now)

    @staticmethod
    async def get_grades(repo: ClassroomRepo, student_id: str = "me") -> List[GradeRow]:
        records = await _joined_active(repo, student_id)
        return grades.grade_rows(records)

    @staticmethod
    async def get_course_grades(
        repo: ClassroomRepo,
        course_id: str,
        student_id: str = "me",
    ) -> CourseGradeSummary:
        """
        Calcolo voti di un solo corso. Qui non c'è fan-out: un errore del
        servizio remoto arriva al chiamante.
        """
        course, work, subs = await asyncio.gather(
            repo.get_course(course_id),
            repo.list_course_work(course_id, PUBLISHED_ONLY),
            repo.list_submissions(course_id, ALL_COURSE_WORK, student_id),
        )
        records = join_course(course, work, subs)
        return grades.course_grade_summary(course, records)
