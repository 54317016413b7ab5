# academia

The storage side of a small course registration system. Accounts, the course
catalogue and course listings are kept in two plain text files in a data
directory, and this package reads and updates them.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Data files

Both files have one record per line, with fields separated by `:`. Course
lists are separated by commas, and `x` marks an empty list.

`faculties.txt`:

```
username:password:course1,course2
```

`students.txt`. The last field is `1` for an active student and `0` for a
blocked one:

```
username:password:course1,course2:1
```

Appends and rewrites happen under an exclusive lock. A rewrite goes to a
temporary file, which then replaces the original in one step.

## Modules

- `academia.records`: `RecordFile` with `exists()`, `lines()`, `append(line)`,
  `rewrite(transform)` and the `locked()` context manager. It also has the
  helpers `tokens`, `split_course_list` and `join_course_list`.
- `academia.accounts`: `Role` (`ADMIN`, `FACULTY`, `STUDENT`) and `Accounts`.
  `Accounts` checks, validates, adds, activates and blocks users, and changes
  passwords. It raises `ValueError` for a username that is already taken or
  for an invalid role, and `LookupError` for an unknown user.
- `academia.courses`: `Catalog` with `add_course`, `enroll_course`,
  `delete_course` and `update_course`. Each returns a confirmation message.
  Each raises `LookupError`, carrying the message, when the user or course is
  missing.
- `academia.views`: `CourseViews` with `view_all_courses()`,
  `student_details(username)` and `faculty_details(username)`.
- `academia.console`: `Console`, which prompts on a terminal with `ask`,
  `ask_word`, `say` and `warn`.

```python
from academia.accounts import Accounts
from academia.courses import Catalog
from academia.views import CourseViews

accounts = Accounts("data")
accounts.add_faculty("prof", "password")
accounts.add_student("alice", "password")

catalog = Catalog("data")
catalog.add_course("prof", "CS101")
catalog.enroll_course("alice", "CS101")

print(CourseViews("data").view_all_courses())
# Course: CS101 (Faculty: prof)
```

## What this package does not do

There is no network layer. The package has no TCP server, no interactive
client with role menus, and no commands to install. It provides only the file
storage and the terminal prompt helper described above, for use from your own
Python code.