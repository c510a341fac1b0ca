from pydantic import BaseModel, Field
from typing import Any, Dict, List, Literal, Optional

WorkType = Literal["ASSIGNMENT", "SHORT_ANSWER_QUESTION", "MULTIPLE_CHOICE_QUESTION"]


class Course(BaseModel):
    id: str
    name: str = ""
    section: Optional[str] = None
    descriptionHeading: Optional[str] = None
    room: Optional[str] = None
    ownerId: Optional[str] = None
    courseState: Optional[str] = None
    alternateLink: Optional[str] = None


class Date(BaseModel):
    year: int
    month: int
    day: int


class TimeOfDay(BaseModel):
    # the API omits zero-valued fields
    hours: Optional[int] = None
    minutes: Optional[int] = None


class CourseWork(BaseModel):
    id: str
    courseId: Optional[str] = None
    title: str = ""
    description: Optional[str] = None
    workType: Optional[str] = None
    state: Optional[str] = None
    dueDate: Optional[Date] = None
    dueTime: Optional[TimeOfDay] = None
    maxPoints: Optional[float] = None
    materials: List[Dict[str, Any]] = Field(default_factory=list)
    alternateLink: Optional[str] = None
    creationTime: Optional[str] = None
    updateTime: Optional[str] = None


class StudentSubmission(BaseModel):
    id: str
    courseId: Optional[str] = None
    courseWorkId: str
    userId: Optional[str] = None
    state: Optional[str] = None
    assignedGrade: Optional[float] = None
    draftGrade: Optional[float] = None
    late: bool = False
    updateTime: Optional[str] = None
    alternateLink: Optional[str] = None


class Student(BaseModel):
    courseId: Optional[str] = None
    userId: str
    profile: Dict[str, Any] = Field(default_factory=dict)


class Announcement(BaseModel):
    id: str
    courseId: Optional[str] = None
    text: Optional[str] = None
    state: Optional[str] = None
    alternateLink: Optional[str] = None
    creationTime: Optional[str] = None
    updateTime: Optional[str] = None


class CourseWorkCreate(BaseModel):
    title: str
    description: Optional[str] = None
    dueDate: Optional[str] = Field(default=None, description="YYYY-MM-DD")
    dueTime: Optional[str] = Field(default=None, description="HH:MM")
    maxPoints: Optional[float] = Field(default=None, ge=0)
    workType: WorkType = "ASSIGNMENT"
