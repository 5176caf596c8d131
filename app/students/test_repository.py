"""Tests for the student repositories."""

import pytest
from sqlalchemy.exc import IntegrityError

from students.models import Student
from students.repository import InMemoryStudentRepository, SqlAlchemyStudentRepository


@pytest.fixture(params=["sql", "memory"])
def repo(request, db_session):
    if request.param == "sql":
        return SqlAlchemyStudentRepository(db_session)
    return InMemoryStudentRepository()


def make(email="john@x.com", name="John Doe", department="CS"):
    return Student(name=name, email=email, department=department)


class TestStudentRepository:
    """Contract shared by every repository implementation."""

    def test_save_assigns_id_and_timestamps(self, repo):
        """Test insert assigns id and equal timestamps."""
        student = repo.save(make())

        assert student.id is not None
        assert student.created_at is not None
        assert student.created_at == student.updated_at

    def test_find_methods(self, repo):
        """Test lookups by id, email and department."""
        first = repo.save(make(email="a@x.com", department="CS"))
        repo.save(make(email="b@x.com", department="Math"))

        assert repo.find_by_id(first.id).email == "a@x.com"
        assert repo.find_by_id(first.id + 100) is None
        assert repo.find_by_email("b@x.com").department == "Math"
        assert repo.find_by_email("missing@x.com") is None
        assert [s.email for s in repo.find_by_department("CS")] == ["a@x.com"]
        assert repo.find_by_department("Physics") == []
        assert [s.email for s in repo.find_all()] == ["a@x.com", "b@x.com"]

    def test_exists_methods(self, repo):
        """Test existence checks."""
        student = repo.save(make())

        assert repo.exists_by_id(student.id)
        assert not repo.exists_by_id(student.id + 1)
        assert repo.exists_by_email("john@x.com")
        assert not repo.exists_by_email("John@x.com")

    def test_unique_email_constraint(self, repo):
        """Test the storage rejects a second row with the same email."""
        repo.save(make())

        with pytest.raises(IntegrityError):
            repo.save(make(name="Other"))

        assert len(repo.find_all()) == 1

    def test_update_keeps_created_at(self, repo):
        """Test saving an existing row keeps id and createdAt."""
        student = repo.save(make())
        student_id, created_at = student.id, student.created_at

        student.name = "Johnny"
        updated = repo.save(student)

        assert updated.id == student_id
        assert updated.created_at == created_at
        assert updated.updated_at >= created_at
        assert repo.find_by_id(student_id).name == "Johnny"

    def test_delete_by_id(self, repo):
        """Test hard delete."""
        student = repo.save(make())

        repo.delete_by_id(student.id)

        assert repo.find_by_id(student.id) is None
        assert repo.find_all() == []


class TestSqlAlchemyStudentRepository:
    """SQL-specific behaviour."""

    def test_session_usable_after_integrity_error(self, db_session):
        """Test the session is rolled back after a constraint violation."""
        repo = SqlAlchemyStudentRepository(db_session)
        repo.save(make())

        with pytest.raises(IntegrityError):
            repo.save(make(name="Other"))

        assert repo.save(make(email="other@x.com")).id is not None
