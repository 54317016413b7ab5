"""Read-only views of the course catalogue and of users' course lists.

Each view returns the exact reply text the server sends to the client.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from .accounts import FACULTIES_FILE, STUDENT_NOT_FOUND, STUDENTS_FILE
from .courses import FACULTY_NOT_FOUND
from .records import FIELD_SEPARATOR, NO_COURSES, RecordFile, split_course_list, tokens

NO_COURSES_AVAILABLE = "No courses available.\n"
NO_COURSES_FOUND = "No courses found.\n"

_log = logging.getLogger(__name__)


def _find(records: RecordFile, username: str) -> list[str] | None:
    """Fields of the first record whose username is *username*."""
    for line in records.lines():
        fields = tokens(line, FIELD_SEPARATOR)
        if fields and fields[0] == username:
            return fields
    return None


def _courses_field(fields: list[str]) -> str | None:
    courses = fields[2] if len(fields) > 2 else None
    if courses is None or courses == NO_COURSES:
        return None
    return courses


class CourseViews:
    """Views over the record files under *root*.

    Every view raises FileNotFoundError when the file it reads is missing.
    """

    def __init__(self, root: str | os.PathLike[str] = ".") -> None:
        self.root = Path(root)
        self.faculties = RecordFile(self.root / FACULTIES_FILE)
        self.students = RecordFile(self.root / STUDENTS_FILE)

    def view_all_courses(self) -> str:
        """One ``Course: code (Faculty: name)`` line per offered course."""
        entries: list[str] = []
        for line in self.faculties.lines():
            fields = tokens(line, FIELD_SEPARATOR)
            if len(fields) < 3:
                continue
            username = fields[0]
            entries.extend(
                f"Course: {course} (Faculty: {username})\n"
                for course in split_course_list(fields[2])
            )
        return "".join(entries) or NO_COURSES_AVAILABLE

    def student_details(self, username: str) -> str:
        """The student's courses field as stored, or a no-courses notice.

        Raises LookupError for an unknown student.
        """
        fields = _find(self.students, username)
        if fields is None:
            _log.error("%s", STUDENT_NOT_FOUND)
            raise LookupError(STUDENT_NOT_FOUND)
        courses = _courses_field(fields)
        return courses if courses is not None else NO_COURSES_FOUND

    def faculty_details(self, username: str) -> str:
        """The faculty member's name and the courses they offer.

        Raises LookupError for an unknown faculty member.
        """
        fields = _find(self.faculties, username)
        if fields is None:
            raise LookupError(FACULTY_NOT_FOUND)
        courses = _courses_field(fields)
        listing = courses + "\n" if courses is not None else NO_COURSES_FOUND
        return f"Faculty: {fields[0]}\n{listing}"