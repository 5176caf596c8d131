"""FastAPI routes for students."""
from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from db import get_db
from schemas import ErrorResponse
from students.repository import SqlAlchemyStudentRepository
from students.service import StudentService  # absolute import avoids confusion

from students.schemas import StudentRequest, StudentResponse


router = APIRouter(
    prefix="/students",
    tags=["students"],
    responses={500: {"model": ErrorResponse}},
)


def get_student_service(db: Session = Depends(get_db)) -> StudentService:
    return StudentService(SqlAlchemyStudentRepository(db))


@router.get("", response_model=List[StudentResponse])
def list_students(service: StudentService = Depends(get_student_service)):
    """Get all students."""
    return service.list()


@router.get("/department/{department:path}", response_model=List[StudentResponse])
def list_students_by_department(
    department: str,
    service: StudentService = Depends(get_student_service),
):
    """Get students of one department (exact match)."""
    return service.list_by_department(department)


@router.get(
    "/{student_id}",
    response_model=StudentResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def get_student(
    student_id: int,
    service: StudentService = Depends(get_student_service),
):
    """Get a student by ID."""
    return service.get_by_id(student_id)


@router.post(
    "",
    response_model=StudentResponse,
    status_code=201,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
)
def create_student(
    student_data: StudentRequest,
    service: StudentService = Depends(get_student_service),
):
    """Create a new student."""
    return service.create(student_data)


@router.put(
    "/{student_id}",
    response_model=StudentResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
def update_student(
    student_id: int,
    student_data: StudentRequest,
    service: StudentService = Depends(get_student_service),
):
    """Replace a student's name, email and department."""
    return service.update(student_id, student_data)


@router.delete(
    "/{student_id}",
    status_code=204,
    response_class=Response,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
def delete_student(
    student_id: int,
    service: StudentService = Depends(get_student_service),
):
    """Delete a student permanently."""
    service.delete(student_id)
    return Response(status_code=204)
