"""Persistence boundary for students.

The service only ever talks to the eight methods of ``StudentRepository``.
``SqlAlchemyStudentRepository`` backs the API; ``InMemoryStudentRepository``
keeps the same contract (including the unique email constraint) for tests
and local tooling.
"""

import itertools
from datetime import datetime, timezone
from typing import Dict, List, Optional, Protocol

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from students.models import Student


class StudentRepository(Protocol):
    def find_all(self) -> List[Student]: ...

    def find_by_id(self, student_id: int) -> Optional[Student]: ...

    def find_by_email(self, email: str) -> Optional[Student]: ...

    def find_by_department(self, department: str) -> List[Student]: ...

    def exists_by_email(self, email: str) -> bool: ...

    def exists_by_id(self, student_id: int) -> bool: ...

    def save(self, student: Student) -> Student: ...

    def delete_by_id(self, student_id: int) -> None: ...


class SqlAlchemyStudentRepository:
    """Repository over a SQLAlchemy session; every write commits."""

    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> List[Student]:
        return list(self.db.scalars(select(Student).order_by(Student.id)))

    def find_by_id(self, student_id: int) -> Optional[Student]:
        return self.db.get(Student, student_id)

    def find_by_email(self, email: str) -> Optional[Student]:
        return self.db.scalars(select(Student).where(Student.email == email)).first()

    def find_by_department(self, department: str) -> List[Student]:
        query = (
            select(Student).where(Student.department == department).order_by(Student.id)
        )
        return list(self.db.scalars(query))

    def exists_by_email(self, email: str) -> bool:
        return bool(self.db.scalar(select(exists().where(Student.email == email))))

    def exists_by_id(self, student_id: int) -> bool:
        return bool(self.db.scalar(select(exists().where(Student.id == student_id))))

    def save(self, student: Student) -> Student:
        """Insert a new student or flush changes to an existing one."""
        if student.id is None:
            self.db.add(student)
        else:
            # refreshed even when no column changed
            student.updated_at = func.now()
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise
        self.db.refresh(student)
        return student

    def delete_by_id(self, student_id: int) -> None:
        student = self.db.get(Student, student_id)
        if student is None:
            return
        self.db.delete(student)
        self.db.commit()


class InMemoryStudentRepository:
    """Dict-backed repository with storage-style id and timestamp assignment."""

    def __init__(self):
        self._rows: Dict[int, Student] = {}
        self._ids = itertools.count(1)

    def find_all(self) -> List[Student]:
        return [self._rows[key] for key in sorted(self._rows)]

    def find_by_id(self, student_id: int) -> Optional[Student]:
        return self._rows.get(student_id)

    def find_by_email(self, email: str) -> Optional[Student]:
        return next((s for s in self.find_all() if s.email == email), None)

    def find_by_department(self, department: str) -> List[Student]:
        return [s for s in self.find_all() if s.department == department]

    def exists_by_email(self, email: str) -> bool:
        return self.find_by_email(email) is not None

    def exists_by_id(self, student_id: int) -> bool:
        return student_id in self._rows

    def save(self, student: Student) -> Student:
        holder = self.find_by_email(student.email)
        if holder is not None and holder is not student:
            raise IntegrityError(
                "INSERT INTO students",
                {"email": student.email},
                Exception("UNIQUE constraint failed: students.email"),
            )

        now = datetime.now(timezone.utc)
        if student.id is None:
            student.id = next(self._ids)
            student.created_at = now
        student.updated_at = now
        self._rows[student.id] = student
        return student

    def delete_by_id(self, student_id: int) -> None:
        self._rows.pop(student_id, None)
