import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError

from exceptions import DuplicateEmailError, StudentNotFoundError
from models import Student, utcnow
from repository import StudentRepository
from schemas import StudentCreate, StudentUpdate

logger = logging.getLogger(__name__)


class StudentService:
    """Student operations used by the HTTP layer"""

    def __init__(self, repository: StudentRepository):
        self.repository = repository

    def create_student(self, data: StudentCreate) -> Student:
        """Create a new student, stamping both timestamps with one instant"""
        if self.repository.exists_by_email(data.email):
            logger.warning(f"Attempted to create student with existing email: {data.email}")
            raise DuplicateEmailError(data.email)

        now = utcnow()
        student = Student(**data.model_dump(), created_at=now, updated_at=now)
        try:
            student = self.repository.create(student)
        except IntegrityError:
            logger.warning(f"Unique constraint rejected email on create: {data.email}")
            raise DuplicateEmailError(data.email)

        logger.info(f"Student created successfully with ID: {student.id}")
        return student

    def get_by_id(self, student_id: int) -> Student:
        student = self.repository.get(student_id)
        if student is None:
            logger.warning(f"Student not found with ID: {student_id}")
            raise StudentNotFoundError(student_id)
        return student

    def get_by_email(self, email: str) -> Optional[Student]:
        return self.repository.get_by_email(email)

    def list_all(self) -> List[Student]:
        return self.repository.list_all()

    def update_student(self, student_id: int, data: StudentUpdate) -> Student:
        """Replace a student's details, keeping id and created_at"""
        student = self.get_by_id(student_id)

        if data.email != student.email and self.repository.exists_by_email(data.email):
            logger.warning(f"Attempted to update student {student_id} with existing email: {data.email}")
            raise DuplicateEmailError(data.email)

        student.name = data.name
        student.email = data.email
        student.age = data.age
        student.address = data.address
        student.updated_at = utcnow()
        try:
            student = self.repository.save(student)
        except IntegrityError:
            logger.warning(f"Unique constraint rejected email on update: {data.email}")
            raise DuplicateEmailError(data.email)

        logger.info(f"Student updated successfully: {student.id}")
        return student

    def delete_student(self, student_id: int):
        if not self.repository.exists_by_id(student_id):
            logger.warning(f"Student not found for deletion with ID: {student_id}")
            raise StudentNotFoundError(student_id)
        self.repository.delete_by_id(student_id)
        logger.info(f"Student deleted successfully: {student_id}")

    def search_by_name(self, fragment: str) -> List[Student]:
        return self.repository.search_by_name(fragment)

    def by_age_range(self, min_age: int, max_age: int) -> List[Student]:
        """Students with `min_age <= age <= max_age`; empty when the range is inverted"""
        return self.repository.list_by_age_range(min_age, max_age)

    def older_than(self, min_age: int) -> List[Student]:
        return self.repository.list_older_than(min_age)

    def count_by_age_range(self, min_age: int, max_age: int) -> int:
        return self.repository.count_by_age_range(min_age, max_age)
