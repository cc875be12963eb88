import pytest
from sqlalchemy.exc import IntegrityError

from models import Student, utcnow
from repository import StudentRepository


@pytest.fixture(name="students")
def students_fixture(repository: StudentRepository):
    """Three students aged 20, 25 and 30"""
    return [
        repository.create(Student(name="John Doe", email="john@example.com", age=20)),
        repository.create(Student(name="Bob Johnson", email="bob@example.com", age=25)),
        repository.create(Student(name="Jane Smith", email="jane@example.com", age=30)),
    ]


def test_create_assigns_id(repository: StudentRepository):
    student = repository.create(Student(name="John Doe", email="john@example.com", age=20))
    assert student.id is not None
    assert repository.exists_by_id(student.id)


def test_unique_email_constraint(repository: StudentRepository, students):
    with pytest.raises(IntegrityError):
        repository.create(Student(name="Copy Cat", email="john@example.com", age=40))
    assert len(repository.list_all()) == 3


def test_find_by_email(repository: StudentRepository, students):
    assert repository.get_by_email("bob@example.com").name == "Bob Johnson"
    assert repository.get_by_email("BOB@example.com") is None
    assert repository.exists_by_email("jane@example.com")
    assert not repository.exists_by_email("nobody@example.com")


def test_delete_by_id(repository: StudentRepository, students):
    student_id = students[0].id
    repository.delete_by_id(student_id)
    assert not repository.exists_by_id(student_id)
    assert repository.get(student_id) is None
    assert len(repository.list_all()) == 2


def test_search_by_name_is_case_insensitive_substring(repository: StudentRepository, students):
    names = sorted(s.name for s in repository.search_by_name("john"))
    assert names == ["Bob Johnson", "John Doe"]
    assert [s.name for s in repository.search_by_name("SMITH")] == ["Jane Smith"]


def test_search_by_name_treats_wildcards_literally(repository: StudentRepository, students):
    repository.create(Student(name="Top 100% Student", email="top@example.com", age=18))
    assert repository.search_by_name("o_n") == []
    assert [s.name for s in repository.search_by_name("100%")] == ["Top 100% Student"]


def test_list_by_age_range_is_inclusive(repository: StudentRepository, students):
    ages = sorted(s.age for s in repository.list_by_age_range(20, 25))
    assert ages == [20, 25]


def test_list_older_than_is_inclusive(repository: StudentRepository, students):
    ages = sorted(s.age for s in repository.list_older_than(25))
    assert ages == [25, 30]


def test_count_by_age_range(repository: StudentRepository, students):
    assert repository.count_by_age_range(20, 25) == 2
    assert repository.count_by_age_range(31, 40) == 0


def test_create_stores_naive_utc_timestamps(repository: StudentRepository):
    student = repository.create(Student(name="Ann Lee", email="a@x.com", age=20))
    assert student.created_at.tzinfo is None
    assert student.updated_at.tzinfo is None
    assert abs((utcnow() - student.created_at).total_seconds()) < 60
