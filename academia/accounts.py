"""Student and faculty accounts kept in ``students.txt`` and ``faculties.txt``.

Student records are ``user:password:courses:flag`` where the flag is ``1`` for
an active account and ``0`` for a blocked one. Faculty records are
``user:password:courses``. A courses field of ``x`` means no courses.
"""

from __future__ import annotations

import logging
import os
from enum import Enum
from pathlib import Path

from .records import FIELD_SEPARATOR, NO_COURSES, RecordFile, tokens

STUDENTS_FILE = "students.txt"
FACULTIES_FILE = "faculties.txt"
ACTIVE = "1"
BLOCKED = "0"

USERNAME_TAKEN = "Username already exists."
STUDENT_NOT_FOUND = "Student not found."
USER_NOT_FOUND = "User not found."
INVALID_ROLE = "Invalid role."

_log = logging.getLogger(__name__)


class Role(str, Enum):
    """Login roles, by the character the client sends."""

    ADMIN = "1"
    FACULTY = "2"
    STUDENT = "3"


def _first_field(line: str) -> str | None:
    fields = tokens(line, FIELD_SEPARATOR)
    return fields[0] if fields else None


def _next_token(text: str, pos: int) -> tuple[str | None, int]:
    """The next colon-delimited token from *pos*, skipping empty ones."""
    while pos < len(text) and text[pos] == FIELD_SEPARATOR:
        pos += 1
    if pos >= len(text):
        return None, pos
    end = text.find(FIELD_SEPARATOR, pos)
    if end == -1:
        return text[pos:], len(text)
    return text[pos:end], end + 1


def _split_for_password(line: str) -> tuple[str | None, str | None]:
    """Username and everything after the password field, if anything."""
    username, pos = _next_token(line, 0)
    if username is None:
        return None, None
    password, pos = _next_token(line, pos)
    if password is None:
        return username, None
    rest = line[pos:]
    return username, rest or None


class Accounts:
    """Account operations on the record files under *root*."""

    def __init__(self, root: str | os.PathLike[str] = ".") -> None:
        self.root = Path(root)
        self.students = RecordFile(self.root / STUDENTS_FILE)
        self.faculties = RecordFile(self.root / FACULTIES_FILE)

    def _records(self, records: RecordFile) -> list[str] | None:
        if not records.exists():
            _log.error("Error opening %s", records.path.name)
            return None
        return records.lines()

    def _username_listed(self, records: RecordFile, username: str) -> bool:
        lines = self._records(records)
        if lines is None:
            return False
        for line in lines:
            name, sep, _ = line.partition(FIELD_SEPARATOR)
            if sep and name == username:
                return True
        return False

    def _credentials_match(
        self, records: RecordFile, username: str, password: str
    ) -> bool:
        lines = self._records(records)
        if lines is None:
            return False
        for line in lines:
            fields = tokens(line, FIELD_SEPARATOR)
            if len(fields) >= 2 and fields[0] == username and fields[1] == password:
                return True
        return False

    def student_exists(self, username: str) -> bool:
        """Whether a student record carries *username*; False without a file."""
        return self._username_listed(self.students, username)

    def faculty_exists(self, username: str) -> bool:
        """Whether a faculty record carries *username*; False without a file."""
        return self._username_listed(self.faculties, username)

    def validate_student(self, username: str, password: str) -> bool:
        return self._credentials_match(self.students, username, password)

    def validate_faculty(self, username: str, password: str) -> bool:
        return self._credentials_match(self.faculties, username, password)

    def check_if_blocked(self, username: str) -> bool | None:
        """True if blocked, False if active, None if the student is unknown."""
        lines = self._records(self.students)
        if lines is None:
            return None
        for line in lines:
            fields = tokens(line, FIELD_SEPARATOR)
            if fields and fields[0] == username:
                flag = fields[3] if len(fields) > 3 else None
                return flag == BLOCKED
        return None

    def add_student(self, username: str, password: str) -> None:
        """Append an active student with no courses.

        Raises ValueError when the username is taken.
        """
        with self.students.locked():
            if self.student_exists(username):
                raise ValueError(USERNAME_TAKEN)
            self.students.append(
                FIELD_SEPARATOR.join((username, password, NO_COURSES, ACTIVE))
            )

    def add_faculty(self, username: str, password: str) -> None:
        """Append a faculty member with no courses.

        Raises ValueError when the username is taken.
        """
        with self.faculties.locked():
            if self.faculty_exists(username):
                raise ValueError(USERNAME_TAKEN)
            self.faculties.append(
                FIELD_SEPARATOR.join((username, password, NO_COURSES))
            )

    def _set_flag(self, username: str, flag: str) -> None:
        def transform(line: str) -> str:
            fields = tokens(line, FIELD_SEPARATOR)
            if not fields or fields[0] != username:
                return line
            password = fields[1] if len(fields) > 1 else ""
            courses = fields[2] if len(fields) > 2 else NO_COURSES
            return FIELD_SEPARATOR.join((username, password, courses, flag))

        with self.students.locked():
            if not any(_first_field(line) == username for line in self.students.lines()):
                raise LookupError(STUDENT_NOT_FOUND)
            self.students.rewrite(transform)

    def activate(self, username: str) -> None:
        """Mark a student active. Raises LookupError for an unknown student."""
        self._set_flag(username, ACTIVE)

    def block(self, username: str) -> None:
        """Mark a student blocked. Raises LookupError for an unknown student."""
        self._set_flag(username, BLOCKED)

    def change_password(
        self, role: Role | str, username: str, new_password: str
    ) -> None:
        """Replace the password of a faculty member or student.

        Raises ValueError for any other role and LookupError for an unknown user.
        """
        try:
            role = Role(role)
        except ValueError:
            raise ValueError(INVALID_ROLE) from None
        if role is Role.FACULTY:
            records = self.faculties
        elif role is Role.STUDENT:
            records = self.students
        else:
            raise ValueError(INVALID_ROLE)

        def transform(line: str) -> str:
            name, rest = _split_for_password(line)
            if name != username:
                return line
            if rest is None:
                return FIELD_SEPARATOR.join((name, new_password))
            return FIELD_SEPARATOR.join((name, new_password, rest))

        with records.locked():
            lines = records.lines()
            if not any(_split_for_password(line)[0] == username for line in lines):
                raise LookupError(USER_NOT_FOUND)
            records.rewrite(transform)