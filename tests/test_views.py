import pytest

from academia.accounts import STUDENT_NOT_FOUND
from academia.courses import FACULTY_NOT_FOUND, Catalog
from academia.views import NO_COURSES_AVAILABLE, NO_COURSES_FOUND, CourseViews


def _write(path, lines):
    path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")


@pytest.fixture
def root(tmp_path):
    _write(
        tmp_path / "faculties.txt",
        ["alice:password:CS101,CS102", "carol:password:x", "dave:password:MA201"],
    )
    _write(
        tmp_path / "students.txt",
        ["bob:password:CS101:1", "erin:password:x:1"],
    )
    return tmp_path


def test_view_all_courses_lists_each_course_in_file_order(root):
    text = CourseViews(root).view_all_courses()
    assert text.splitlines() == [
        "Course: CS101 (Faculty: alice)",
        "Course: CS102 (Faculty: alice)",
        "Course: MA201 (Faculty: dave)",
    ]
    assert text.endswith("\n")


def test_view_all_courses_skips_faculty_without_courses(root):
    assert "carol" not in CourseViews(root).view_all_courses()


def test_view_all_courses_when_nothing_offered(tmp_path):
    _write(tmp_path / "faculties.txt", ["carol:password:x", "zed:password"])
    assert CourseViews(tmp_path).view_all_courses() == NO_COURSES_AVAILABLE
    assert NO_COURSES_AVAILABLE == "No courses available.\n"


def test_view_all_courses_without_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        CourseViews(tmp_path).view_all_courses()


def test_student_details_returns_stored_courses(root):
    assert CourseViews(root).student_details("bob") == "CS101"


def test_student_details_without_courses(root):
    assert CourseViews(root).student_details("erin") == "No courses found.\n"


def test_student_details_unknown_student(root):
    with pytest.raises(LookupError) as info:
        CourseViews(root).student_details("nobody")
    assert str(info.value) == STUDENT_NOT_FOUND


def test_student_details_follows_enrolment(root):
    Catalog(root).enroll_course("erin", "MA201")
    assert CourseViews(root).student_details("erin") == "MA201"


def test_faculty_details_lists_courses(root):
    assert CourseViews(root).faculty_details("alice") == "Faculty: alice\nCS101,CS102\n"


def test_faculty_details_without_courses(root):
    text = CourseViews(root).faculty_details("carol")
    assert text == "Faculty: carol\n" + NO_COURSES_FOUND


def test_faculty_details_unknown_faculty(root):
    with pytest.raises(LookupError) as info:
        CourseViews(root).faculty_details("nobody")
    assert str(info.value) == FACULTY_NOT_FOUND


def test_faculty_details_follows_added_course(root):
    Catalog(root).add_course("carol", "PH110")
    views = CourseViews(root)
    assert views.faculty_details("carol").splitlines()[1] == "PH110"
    assert "Course: PH110 (Faculty: carol)\n" in views.view_all_courses()