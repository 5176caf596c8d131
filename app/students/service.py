"""Business logic for students."""

import logging
from typing import List

from errors import DuplicateEmailError, StudentNotFoundError
from metrics import STUDENT_OPERATIONS
from students.models import Student
from students.repository import StudentRepository
from students.schemas import StudentRequest

logger = logging.getLogger(__name__)


class StudentService:
    """Service class for student operations.

    Field formats are validated at the API boundary; this layer owns the
    email uniqueness check and the not-found translation.
    """

    def __init__(self, repository: StudentRepository):
        self.repository = repository

    def list(self) -> List[Student]:
        """Get every student."""
        return self.repository.find_all()

    def list_by_department(self, department: str) -> List[Student]:
        """Get students whose department matches exactly."""
        return self.repository.find_by_department(department)

    def get_by_id(self, student_id: int) -> Student:
        """Get student by ID."""
        student = self.repository.find_by_id(student_id)
        if student is None:
            raise StudentNotFoundError.for_id(student_id)
        return student

    def get_by_email(self, email: str) -> Student:
        """Get student by email."""
        student = self.repository.find_by_email(email)
        if student is None:
            raise StudentNotFoundError.for_email(email)
        return student

    def create(self, student_data: StudentRequest) -> Student:
        """Create a new student."""
        if self.repository.exists_by_email(student_data.email):
            logger.warning("Rejected create: email %s already in use", student_data.email)
            raise DuplicateEmailError(student_data.email)

        student = self.repository.save(
            Student(
                name=student_data.name,
                email=student_data.email,
                department=student_data.department,
            )
        )
        STUDENT_OPERATIONS.labels(operation="create").inc()
        logger.info("Created student %s <%s>", student.id, student.email)
        return student

    def update(self, student_id: int, student_data: StudentRequest) -> Student:
        """Replace name, email and department of a student."""
        student = self.get_by_id(student_id)

        if student.email != student_data.email and self.repository.exists_by_email(
            student_data.email
        ):
            logger.warning(
                "Rejected update of %s: email %s already in use",
                student_id,
                student_data.email,
            )
            raise DuplicateEmailError(student_data.email)

        student.name = student_data.name
        student.email = student_data.email
        student.department = student_data.department

        student = self.repository.save(student)
        STUDENT_OPERATIONS.labels(operation="update").inc()
        logger.info("Updated student %s", student_id)
        return student

    def delete(self, student_id: int) -> None:
        """Delete a student permanently."""
        if not self.repository.exists_by_id(student_id):
            raise StudentNotFoundError.for_id(student_id)

        self.repository.delete_by_id(student_id)
        STUDENT_OPERATIONS.labels(operation="delete").inc()
        logger.info("Deleted student %s", student_id)

    def exists_by_id(self, student_id: int) -> bool:
        return self.repository.exists_by_id(student_id)

    def exists_by_email(self, email: str) -> bool:
        return self.repository.exists_by_email(email)
