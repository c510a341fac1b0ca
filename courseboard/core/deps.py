from fastapi import HTTPException, Request, status

from courseboard.core.config import settings
from courseboard.repositories.classroom_repo import ClassroomRepo


def get_repository(request: Request) -> ClassroomRepo:
    repo = getattr(request.app.state, "classroom_repo", None)
    if repo is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Google Classroom API not initialized. Please check authentication.",
        )
    return repo


def get_student_id() -> str:
    return settings.student_id
