# courseboard/repositories/google_classroom.py
import asyncio
import logging
from typing import Any, Dict, List, Optional, Sequence, Type, TypeVar

import google_auth_httplib2
import httplib2
from google.auth.exceptions import GoogleAuthError
from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from pydantic import BaseModel, ValidationError

from courseboard.repositories.classroom_repo import ALL_COURSE_WORK, ClassroomRepo, UpstreamError
from courseboard.schemas.classroom import (
    Announcement,
    Course,
    CourseWork,
    CourseWorkCreate,
    Student,
    StudentSubmission,
)

log = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def build_credentials(
    client_id: str,
    client_secret: str,
    refresh_token: str,
    token_uri: str,
    scopes: Sequence[str],
) -> Credentials:
    """OAuth utente da refresh token salvato; l'access token viene ottenuto al primo uso."""
    return Credentials(
        token=None,
        refresh_token=refresh_token,
        client_id=client_id,
        client_secret=client_secret,
        token_uri=token_uri,
        scopes=list(scopes),
    )


def parse_due_date(value: str) -> Dict[str, int]:
    try:
        year, month, day = (int(p) for p in value.split("-"))
    except ValueError:
        raise ValueError(f"dueDate must be YYYY-MM-DD, got {value!r}")
    return {"year": year, "month": month, "day": day}


def parse_due_time(value: str) -> Dict[str, int]:
    try:
        hours, minutes = (int(p) for p in value.split(":"))
    except ValueError:
        raise ValueError(f"dueTime must be HH:MM, got {value!r}")
    return {"hours": hours, "minutes": minutes}


def course_work_body(data: CourseWorkCreate) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "title": data.title,
        "workType": data.workType or "ASSIGNMENT",
        "state": "PUBLISHED",
    }
    if data.description:
        body["description"] = data.description
    if data.maxPoints:
        body["maxPoints"] = data.maxPoints
    if data.dueDate:
        body["dueDate"] = parse_due_date(data.dueDate)
        # dueTime senza dueDate non ha significato
        if data.dueTime:
            body["dueTime"] = parse_due_time(data.dueTime)
    return body


class GoogleClassroomRepository(ClassroomRepo):
    """Classroom v1 via googleapiclient; le chiamate bloccanti girano su thread di lavoro."""

    def __init__(self, credentials: Credentials, service: Any = None):
        self._creds = credentials
        self._service = service or build(
            "classroom", "v1", credentials=credentials, cache_discovery=False
        )

    def _execute(self, request) -> Dict[str, Any]:
        # httplib2.Http non è thread-safe: un trasporto nuovo per ogni richiesta
        http = google_auth_httplib2.AuthorizedHttp(self._creds, http=httplib2.Http())
        return request.execute(http=http)

    async def _call(self, request, what: str) -> Dict[str, Any]:
        try:
            return await asyncio.to_thread(self._execute, request)
        except HttpError as e:
            raise UpstreamError(f"{what} failed: {e}") from e
        except (GoogleAuthError, httplib2.HttpLib2Error, OSError) as e:
            # token scaduto/revocato, DNS, timeout di rete
            raise UpstreamError(f"{what} failed: {type(e).__name__}: {e}") from e

    async def _list_all(self, collection, key: str, what: str, **params) -> List[Dict[str, Any]]:
        items: List[Dict[str, Any]] = []
        request = collection.list(**params)
        while request is not None:
            resp = await self._call(request, what)
            items.extend(resp.get(key, []))
            request = collection.list_next(request, resp)
        log.debug("%s returned %d item(s)", what, len(items))
        return items

    @staticmethod
    def _from_doc(model: Type[M], d: Dict[str, Any], what: str) -> M:
        try:
            return model.model_validate(d)
        except ValidationError as e:
            raise UpstreamError(f"{what} returned a malformed {model.__name__}: {e}") from e

    def _from_docs(self, model: Type[M], docs: List[Dict[str, Any]], what: str) -> List[M]:
        return [self._from_doc(model, d, what) for d in docs]

    async def list_courses(
        self,
        course_states: Optional[Sequence[str]] = None,
        teacher_id: Optional[str] = None,
        student_id: Optional[str] = None,
    ) -> Sequence[Course]:
        params: Dict[str, Any] = {}
        if course_states:
            params["courseStates"] = list(course_states)
        if teacher_id:
            params["teacherId"] = teacher_id
        if student_id:
            params["studentId"] = student_id
        docs = await self._list_all(self._service.courses(), "courses", "courses.list", **params)
        return self._from_docs(Course, docs, "courses.list")

    async def get_course(self, course_id: str) -> Course:
        d = await self._call(self._service.courses().get(id=course_id), "courses.get")
        return self._from_doc(Course, d, "courses.get")

    async def list_course_work(
        self, course_id: str, course_work_states: Optional[Sequence[str]] = None
    ) -> Sequence[CourseWork]:
        params: Dict[str, Any] = {"courseId": course_id}
        if course_work_states:
            params["courseWorkStates"] = list(course_work_states)
        docs = await self._list_all(
            self._service.courses().courseWork(), "courseWork", "courseWork.list", **params
        )
        return self._from_docs(CourseWork, docs, "courseWork.list")

    async def get_course_work(self, course_id: str, course_work_id: str) -> CourseWork:
        request = self._service.courses().courseWork().get(courseId=course_id, id=course_work_id)
        d = await self._call(request, "courseWork.get")
        return self._from_doc(CourseWork, d, "courseWork.get")

    async def list_submissions(
        self,
        course_id: str,
        course_work_id: str = ALL_COURSE_WORK,
        user_id: Optional[str] = None,
    ) -> Sequence[StudentSubmission]:
        params: Dict[str, Any] = {"courseId": course_id, "courseWorkId": course_work_id}
        if user_id:
            params["userId"] = user_id
        docs = await self._list_all(
            self._service.courses().courseWork().studentSubmissions(),
            "studentSubmissions",
            "studentSubmissions.list",
            **params,
        )
        return self._from_docs(StudentSubmission, docs, "studentSubmissions.list")

    async def list_students(self, course_id: str) -> Sequence[Student]:
        docs = await self._list_all(
            self._service.courses().students(), "students", "students.list", courseId=course_id
        )
        return self._from_docs(Student, docs, "students.list")

    async def list_announcements(
        self, course_id: str, announcement_states: Optional[Sequence[str]] = None
    ) -> Sequence[Announcement]:
        params: Dict[str, Any] = {"courseId": course_id}
        if announcement_states:
            params["announcementStates"] = list(announcement_states)
        docs = await self._list_all(
            self._service.courses().announcements(), "announcements", "announcements.list", **params
        )
        return self._from_docs(Announcement, docs, "announcements.list")

    async def create_course_work(self, course_id: str, data: CourseWorkCreate) -> CourseWork:
        request = self._service.courses().courseWork().create(
            courseId=course_id, body=course_work_body(data)
        )
        d = await self._call(request, "courseWork.create")
        return self._from_doc(CourseWork, d, "courseWork.create")
