import pytest

from academia.accounts import Accounts, Role


@pytest.fixture
def accounts(tmp_path):
    return Accounts(tmp_path)


def test_add_student_writes_active_record(accounts):
    accounts.add_student("alice", "password")
    assert accounts.students.path.read_text() == "alice:password:x:1\n"


def test_add_faculty_writes_record_without_flag(accounts):
    accounts.add_faculty("carol", "password")
    assert accounts.faculties.path.read_text() == "carol:password:x\n"


def test_duplicate_student_rejected(accounts):
    accounts.add_student("alice", "password")
    with pytest.raises(ValueError, match="Username already exists."):
        accounts.add_student("alice", "secret")
    assert accounts.students.lines() == ["alice:password:x:1"]


def test_duplicate_faculty_rejected(accounts):
    accounts.add_faculty("carol", "password")
    with pytest.raises(ValueError, match="Username already exists."):
        accounts.add_faculty("carol", "secret")


def test_exists_without_files_is_false(accounts):
    assert accounts.student_exists("alice") is False
    assert accounts.faculty_exists("carol") is False


def test_exists_after_adding(accounts):
    accounts.add_student("alice", "password")
    accounts.add_faculty("carol", "password")
    assert accounts.student_exists("alice")
    assert not accounts.student_exists("carol")
    assert accounts.faculty_exists("carol")
    assert not accounts.faculty_exists("alice")


def test_validate_credentials(accounts):
    accounts.add_student("alice", "password")
    accounts.add_faculty("carol", "secret")
    assert accounts.validate_student("alice", "password")
    assert not accounts.validate_student("alice", "secret")
    assert accounts.validate_faculty("carol", "secret")
    assert not accounts.validate_faculty("carol", "password")
    assert not accounts.validate_student("nobody", "password")


def test_block_and_activate_cycle(accounts):
    accounts.add_student("alice", "password")
    assert accounts.check_if_blocked("alice") is False
    accounts.block("alice")
    assert accounts.check_if_blocked("alice") is True
    assert accounts.students.lines() == ["alice:password:x:0"]
    accounts.activate("alice")
    assert accounts.check_if_blocked("alice") is False
    assert accounts.students.lines() == ["alice:password:x:1"]


def test_block_leaves_other_students(accounts):
    accounts.add_student("alice", "password")
    accounts.add_student("bob", "secret")
    accounts.block("bob")
    assert accounts.check_if_blocked("alice") is False
    assert accounts.check_if_blocked("bob") is True


def test_check_if_blocked_unknown(accounts):
    assert accounts.check_if_blocked("alice") is None
    accounts.add_student("alice", "password")
    assert accounts.check_if_blocked("bob") is None


def test_activate_unknown_student_leaves_file(accounts):
    accounts.add_student("alice", "password")
    before = accounts.students.path.read_text()
    with pytest.raises(LookupError, match="Student not found."):
        accounts.activate("bob")
    assert accounts.students.path.read_text() == before


def test_block_without_file_raises(accounts):
    with pytest.raises(FileNotFoundError):
        accounts.block("alice")


def test_change_student_password_keeps_courses(accounts):
    accounts.students.path.write_text("bob:password:CS101,CS102:1\n")
    accounts.change_password(Role.STUDENT, "bob", "secret")
    assert accounts.students.lines() == ["bob:secret:CS101,CS102:1"]
    assert accounts.validate_student("bob", "secret")


def test_change_faculty_password_by_role_character(accounts):
    accounts.add_faculty("carol", "password")
    accounts.change_password("2", "carol", "secret")
    assert accounts.faculties.lines() == ["carol:secret:x"]


def test_change_password_without_rest(accounts):
    accounts.faculties.path.write_text("dave:password\n")
    accounts.change_password(Role.FACULTY, "dave", "secret")
    assert accounts.faculties.lines() == ["dave:secret"]


def test_change_password_unknown_user(accounts):
    accounts.add_student("alice", "password")
    with pytest.raises(LookupError, match="User not found."):
        accounts.change_password(Role.STUDENT, "bob", "secret")
    assert accounts.validate_student("alice", "password")


@pytest.mark.parametrize("role", [Role.ADMIN, "1", "9"])
def test_change_password_invalid_role(accounts, role):
    with pytest.raises(ValueError, match="Invalid role."):
        accounts.change_password(role, "alice", "secret")


def test_role_values():
    assert Role("1") is Role.ADMIN
    assert Role("2") is Role.FACULTY
    assert Role("3") is Role.STUDENT