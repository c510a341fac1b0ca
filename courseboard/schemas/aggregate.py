from pydantic import BaseModel, Field
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from courseboard.schemas.classroom import Course, CourseWork, StudentSubmission


class DriveFileMaterial(BaseModel):
    type: Literal["driveFile"] = "driveFile"
    title: Optional[str] = None
    url: Optional[str] = None
    shareMode: Optional[str] = None
    thumbnailUrl: Optional[str] = None


class YouTubeMaterial(BaseModel):
    type: Literal["youTubeVideo"] = "youTubeVideo"
    title: Optional[str] = None
    url: Optional[str] = None
    thumbnailUrl: Optional[str] = None


class LinkMaterial(BaseModel):
    type: Literal["link"] = "link"
    title: Optional[str] = None
    url: Optional[str] = None
    thumbnailUrl: Optional[str] = None


class FormMaterial(BaseModel):
    type: Literal["form"] = "form"
    title: Optional[str] = None
    url: Optional[str] = None
    responseUrl: Optional[str] = None
    thumbnailUrl: Optional[str] = None


class UnknownMaterial(BaseModel):
    type: Literal["unknown"] = "unknown"
    raw: Dict[str, Any] = Field(default_factory=dict)


Material = Annotated[
    Union[DriveFileMaterial, YouTubeMaterial, LinkMaterial, FormMaterial, UnknownMaterial],
    Field(discriminator="type"),
]


class JoinedRecord(BaseModel):
    """One coursework item joined with the student's submission, if any."""
    course: Course
    courseWork: CourseWork
    submission: Optional[StudentSubmission] = None


class UpcomingItem(BaseModel):
    courseId: str
    courseName: str
    courseWorkId: str
    title: str
    description: Optional[str] = None
    workType: Optional[str] = None
    dueDate: str
    dueTime: Optional[str] = None
    maxPoints: Optional[float] = None
    state: Optional[str] = None
    late: Optional[bool] = None
    alternateLink: Optional[str] = None
    materials: List[Material] = Field(default_factory=list)


class MissingItem(UpcomingItem):
    status: str


class GradeRow(BaseModel):
    courseId: str
    courseName: str
    courseWorkId: str
    title: str
    state: Optional[str] = None
    assignedGrade: Optional[float] = None
    draftGrade: Optional[float] = None
    maxPoints: Optional[float] = None
    percentage: Optional[float] = None
    dueDate: Optional[str] = None
    late: Optional[bool] = None


class AssignmentGrade(BaseModel):
    courseWorkId: str
    title: str
    assignedGrade: float
    maxPoints: float
    percentage: Optional[float] = None
    dueDate: Optional[str] = None
    state: Optional[str] = None


class CourseGradeSummary(BaseModel):
    courseId: str
    courseName: str
    totalEarned: float = 0
    totalPossible: float = 0
    percentage: Optional[float] = None
    gradedCount: int = 0
    assignments: List[AssignmentGrade] = Field(default_factory=list)
