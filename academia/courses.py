"""Course catalogue operations on the faculty and student record files.

Faculty records list the courses they offer and student records list the
courses they are enrolled in, both as comma-separated codes (``x`` for none).
Each operation returns the confirmation text on success and raises
LookupError carrying the reply text when its target is missing.
"""

from __future__ import annotations

import os
from pathlib import Path

from .accounts import ACTIVE, FACULTIES_FILE, STUDENT_NOT_FOUND, STUDENTS_FILE
from .records import (
    COURSE_SEPARATOR,
    FIELD_SEPARATOR,
    NO_COURSES,
    RecordFile,
    join_course_list,
    tokens,
)

COURSE_ADDED = "Course added successfully."
ENROLLED = "Enrolled successfully."
NO_SUCH_COURSE = "No such course found."
FACULTY_NOT_FOUND = "Faculty not found."
COURSE_UPDATED = "Course ID updated for faculty and students."
DEFAULT_STATUS = "activated"


def _field(fields: list[str], index: int, default: str | None = "") -> str | None:
    return fields[index] if len(fields) > index else default


def _with_course(courses: str | None, course: str) -> str:
    if courses is None or courses == NO_COURSES:
        return course
    return courses + COURSE_SEPARATOR + course


def _first_line(text: str) -> str:
    return text.split("\n", 1)[0]


class Catalog:
    """Course operations on the record files under *root*."""

    def __init__(self, root: str | os.PathLike[str] = ".") -> None:
        self.root = Path(root)
        self.faculties = RecordFile(self.root / FACULTIES_FILE)
        self.students = RecordFile(self.root / STUDENTS_FILE)

    def _is_offered(self, course: str) -> bool:
        with self.faculties.locked():
            lines = self.faculties.lines()
        for line in lines:
            parts = line.split(FIELD_SEPARATOR, 2)
            if len(parts) < 3 or parts[2] == NO_COURSES:
                continue
            if course in tokens(parts[2], COURSE_SEPARATOR):
                return True
        return False

    def add_course(self, faculty_username: str, course: str) -> str:
        """Add *course* to the courses a faculty member offers.

        Raises LookupError for an unknown faculty member and FileNotFoundError
        when there is no faculty file.
        """
        found = False

        def transform(line: str) -> str:
            nonlocal found
            fields = tokens(line, FIELD_SEPARATOR)
            if not fields or fields[0] != faculty_username:
                return line
            found = True
            password = _field(fields, 1)
            courses = _field(fields, 2, None)
            return FIELD_SEPARATOR.join(
                (fields[0], password, _with_course(courses, course))
            )

        self.faculties.rewrite(transform)
        if not found:
            raise LookupError(FACULTY_NOT_FOUND)
        return COURSE_ADDED

    def enroll_course(self, student_username: str, course: str) -> str:
        """Enrol a student in a course some faculty member offers.

        The student's account is marked active. Raises LookupError when the
        course is not offered or the student is unknown.
        """
        if not self._is_offered(course):
            raise LookupError(NO_SUCH_COURSE)
        found = False

        def transform(line: str) -> str:
            nonlocal found
            fields = tokens(line, FIELD_SEPARATOR)
            if not fields or fields[0] != student_username:
                return line
            found = True
            password = _field(fields, 1)
            courses = _field(fields, 2, None)
            return FIELD_SEPARATOR.join(
                (fields[0], password, _with_course(courses, course), ACTIVE)
            )

        self.students.rewrite(transform)
        if not found:
            raise LookupError(STUDENT_NOT_FOUND)
        return ENROLLED

    def delete_course(self, username: str, course: str, filename: str) -> str:
        """Remove *course* from a user's record in *filename* under the root.

        The user's record is rewritten with four fields, the last being the
        existing status or ``activated``. Raises LookupError when the user or
        the course is not found.
        """
        records = RecordFile(self.root / filename)
        found_user = False
        found_course = False

        def transform(line: str) -> str:
            nonlocal found_user, found_course
            fields = tokens(line, FIELD_SEPARATOR)
            if not fields or fields[0] != username:
                return line
            found_user = True
            password = _field(fields, 1)
            existing = tokens(_field(fields, 2), COURSE_SEPARATOR)
            status = _field(fields, 3, DEFAULT_STATUS)
            kept = [code for code in existing if code != course]
            if len(kept) < len(existing):
                found_course = True
            return FIELD_SEPARATOR.join(
                (fields[0], password, join_course_list(kept), status)
            )

        records.rewrite(transform)
        if not found_user:
            raise LookupError(f"User '{username}' not found.")
        if not found_course:
            raise LookupError(f"Course '{course}' not found for user.")
        return f"Course '{course}' deleted successfully."

    def update_course(
        self, faculty_username: str, old_course: str, new_course: str
    ) -> str:
        """Rename a course code for its faculty member and for every student.

        Raises LookupError, leaving both files untouched, for an unknown
        faculty member.
        """
        old_course = _first_line(old_course)
        new_course = _first_line(new_course)

        def renamed(courses: str | None) -> str:
            return COURSE_SEPARATOR.join(
                new_course if code == old_course else code
                for code in tokens(courses, COURSE_SEPARATOR)
            )

        def faculty_transform(line: str) -> str:
            fields = tokens(line, FIELD_SEPARATOR)
            if not fields or fields[0] != faculty_username:
                return line
            return FIELD_SEPARATOR.join(
                (fields[0], _field(fields, 1), renamed(_field(fields, 2, None)))
            )

        def student_transform(line: str) -> str:
            fields = tokens(line, FIELD_SEPARATOR)
            if len(fields) < 4:
                return line
            name, password, courses, flag = fields[:4]
            return FIELD_SEPARATOR.join((name, password, renamed(courses), flag))

        with self.faculties.locked():
            listed = any(
                tokens(line, FIELD_SEPARATOR)[:1] == [faculty_username]
                for line in self.faculties.lines()
            )
            if not listed:
                raise LookupError(FACULTY_NOT_FOUND)
            self.faculties.rewrite(faculty_transform)
        self.students.rewrite(student_transform)
        return COURSE_UPDATED