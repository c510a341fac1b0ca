from typing import Iterable, List

from courseboard.schemas.aggregate import AssignmentGrade, CourseGradeSummary, GradeRow, JoinedRecord
from courseboard.schemas.classroom import Course
from courseboard.services.normalize import format_due_date, percentage


def grade_rows(records: Iterable[JoinedRecord]) -> List[GradeRow]:
    rows = []
    for rec in records:
        cw = rec.courseWork
        sub = rec.submission
        earned = sub.assignedGrade if sub else None
        rows.append(GradeRow(
            courseId=rec.course.id,
            courseName=rec.course.name,
            courseWorkId=cw.id,
            title=cw.title,
            state=sub.state if sub else None,
            assignedGrade=earned,
            draftGrade=sub.draftGrade if sub else None,
            maxPoints=cw.maxPoints,
            percentage=percentage(earned, cw.maxPoints),
            dueDate=format_due_date(cw.dueDate),
            late=sub.late if sub else None,
        ))
    return rows


def course_grade_summary(course: Course, records: Iterable[JoinedRecord]) -> CourseGradeSummary:
    """
    Totali sui soli record con voto assegnato e punteggio massimo;
    gli altri non contano nemmeno come zero.
    """
    summary = CourseGradeSummary(courseId=course.id, courseName=course.name)
    for rec in records:
        cw = rec.courseWork
        sub = rec.submission
        if sub is None or sub.assignedGrade is None or cw.maxPoints is None:
            continue
        summary.totalEarned += sub.assignedGrade
        summary.totalPossible += cw.maxPoints
        summary.gradedCount += 1
        summary.assignments.append(AssignmentGrade(
            courseWorkId=cw.id,
            title=cw.title,
            assignedGrade=sub.assignedGrade,
            maxPoints=cw.maxPoints,
            percentage=percentage(sub.assignedGrade, cw.maxPoints),
            dueDate=format_due_date(cw.dueDate),
            state=sub.state,
        ))
    summary.percentage = percentage(summary.totalEarned, summary.totalPossible)
    return summary
