# test/pytest/test_normalize.py
import pytest

from courseboard.schemas.aggregate import (
    DriveFileMaterial,
    FormMaterial,
    LinkMaterial,
    UnknownMaterial,
    YouTubeMaterial,
)
from courseboard.schemas.classroom import Course, CourseWork, Date, StudentSubmission, TimeOfDay
from courseboard.services.normalize import (
    format_due_date,
    format_due_time,
    join_course,
    normalize_material,
    normalize_materials,
    percentage,
)


# ------------------------------ due date / time ------------------------------
def test_due_date_is_zero_padded():
    assert format_due_date(Date(year=2026, month=3, day=5)) == "2026-03-05"


def test_due_date_absent():
    assert format_due_date(None) is None


def test_due_time_only_with_due_date():
    assert format_due_time(Date(year=2026, month=3, day=15), TimeOfDay(hours=23, minutes=59)) == "23:59"
    assert format_due_time(None, TimeOfDay(hours=23, minutes=59)) is None
    assert format_due_time(Date(year=2026, month=3, day=15), None) is None


def test_due_time_omitted_fields_are_zero():
    assert format_due_time(Date(year=2026, month=1, day=1), TimeOfDay(hours=9)) == "09:00"
    assert format_due_time(Date(year=2026, month=1, day=1), TimeOfDay()) == "00:00"


# -------------------------------- percentage ---------------------------------
@pytest.mark.parametrize(
    "earned,possible,expected",
    [(87, 100, 87.0), (1, 3, 33.3), (2, 3, 66.7), (1, 8, 12.5), (110, 100, 110.0), (0, 10, 0.0)],
)
def test_percentage_rounding(earned, possible, expected):
    assert percentage(earned, possible) == expected


@pytest.mark.parametrize("earned,possible", [(None, 100), (5, None), (5, 0), (None, None)])
def test_percentage_absent_not_zero(earned, possible):
    assert percentage(earned, possible) is None


# --------------------------------- materials ---------------------------------
def test_material_variants():
    drive = normalize_material({
        "driveFile": {
            "driveFile": {"id": "d1", "title": "Slides", "alternateLink": "https://drive/d1", "thumbnailUrl": "t"},
            "shareMode": "VIEW",
        }
    })
    assert isinstance(drive, DriveFileMaterial)
    assert (drive.title, drive.url, drive.shareMode, drive.thumbnailUrl) == ("Slides", "https://drive/d1", "VIEW", "t")

    video = normalize_material({"youtubeVideo": {"id": "y1", "title": "Lezione", "alternateLink": "https://yt/y1"}})
    assert isinstance(video, YouTubeMaterial)
    assert video.url == "https://yt/y1"
    assert video.type == "youTubeVideo"

    link = normalize_material({"link": {"url": "https://example.org", "title": "Esempio"}})
    assert isinstance(link, LinkMaterial)
    assert link.url == "https://example.org"

    form = normalize_material({"form": {"formUrl": "https://forms/f", "responseUrl": "https://forms/r", "title": "Quiz"}})
    assert isinstance(form, FormMaterial)
    assert (form.url, form.responseUrl) == ("https://forms/f", "https://forms/r")


def test_unknown_material_is_passed_through():
    raw = {"gemMaterial": {"id": "g1"}}
    out = normalize_material(raw)
    assert isinstance(out, UnknownMaterial)
    assert out.raw == raw


def test_normalize_materials_keeps_order():
    out = normalize_materials([{"link": {"url": "a"}}, {"other": {}}, {"link": {"url": "b"}}])
    assert [m.type for m in out] == ["link", "unknown", "link"]


# ----------------------------------- join ------------------------------------
def _course():
    return Course(id="c1", name="Storia")


def test_join_matches_by_course_work_id():
    work = [CourseWork(id="w1", title="A"), CourseWork(id="w2", title="B")]
    subs = [StudentSubmission(id="s2", courseWorkId="w2", state="TURNED_IN")]
    records = join_course(_course(), work, subs)
    assert [r.courseWork.id for r in records] == ["w1", "w2"]
    assert records[0].submission is None
    assert records[1].submission.state == "TURNED_IN"
    assert all(r.course.id == "c1" for r in records)


def test_join_ignores_submissions_without_course_work():
    records = join_course(_course(), [CourseWork(id="w1")], [StudentSubmission(id="s9", courseWorkId="w9")])
    assert len(records) == 1
    assert records[0].submission is None


def test_join_duplicate_course_work_later_wins():
    work = [CourseWork(id="w1", title="first"), CourseWork(id="w1", title="second")]
    records = join_course(_course(), work, [])
    assert len(records) == 1
    assert records[0].courseWork.title == "second"
