from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from models import Student


class StudentRepository:
    """CRUD and filter queries for `Student` objects"""

    def __init__(self, session: Session):
        self.session = session

    def create(self, student: Student) -> Student:
        """Insert a new student and return it with its generated id"""
        self.session.add(student)
        self._commit()
        self.session.refresh(student)
        return student

    def save(self, student: Student) -> Student:
        """Flush changes made to a managed student"""
        self.session.add(student)
        self._commit()
        self.session.refresh(student)
        return student

    def _commit(self):
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise

    def get(self, student_id: int) -> Optional[Student]:
        return self.session.get(Student, student_id)

    def exists_by_id(self, student_id: int) -> bool:
        stmt = select(Student.id).where(Student.id == student_id)
        return self.session.exec(stmt).first() is not None

    def get_by_email(self, email: str) -> Optional[Student]:
        stmt = select(Student).where(Student.email == email)
        return self.session.exec(stmt).first()

    def exists_by_email(self, email: str) -> bool:
        stmt = select(Student.id).where(Student.email == email)
        return self.session.exec(stmt).first() is not None

    def list_all(self) -> List[Student]:
        return list(self.session.exec(select(Student)).all())

    def delete_by_id(self, student_id: int):
        """Remove the student with this id; a no-op if it is already gone"""
        student = self.session.get(Student, student_id)
        if student is None:
            return
        self.session.delete(student)
        self._commit()

    def search_by_name(self, fragment: str) -> List[Student]:
        """Case-insensitive substring match; `%` and `_` are taken literally"""
        stmt = select(Student).where(
            func.lower(Student.name).contains(fragment.lower(), autoescape=True)
        )
        return list(self.session.exec(stmt).all())

    def list_by_age_range(self, min_age: int, max_age: int) -> List[Student]:
        stmt = select(Student).where(col(Student.age).between(min_age, max_age))
        return list(self.session.exec(stmt).all())

    def list_older_than(self, min_age: int) -> List[Student]:
        stmt = select(Student).where(Student.age >= min_age)
        return list(self.session.exec(stmt).all())

    def count_by_age_range(self, min_age: int, max_age: int) -> int:
        stmt = select(func.count()).select_from(Student).where(
            col(Student.age).between(min_age, max_age)
        )
        return self.session.exec(stmt).one()
