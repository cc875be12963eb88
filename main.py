from fastapi import FastAPI, Depends, Query, status, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlmodel import Session
from typing import List
import logging
from sqlalchemy.exc import SQLAlchemyError

from config import settings, setup_logging
from database import create_db_and_tables, get_session
from exceptions import InvalidInputError, StudentAPIException, StudentEmailNotFoundError
from repository import StudentRepository
from schemas import StudentCreate, StudentUpdate, StudentResponse
from service import StudentService

setup_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="An API for managing student records",
    version=settings.APP_VERSION
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_student_service(session: Session = Depends(get_session)) -> StudentService:
    """Build the service for one request on top of its session"""
    return StudentService(StudentRepository(session))


# Global exception handlers
@app.exception_handler(StudentAPIException)
async def student_api_exception_handler(request: Request, exc: StudentAPIException):
    """Render domain errors with their own status code"""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code, "details": exc.details}
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Report malformed bodies, paths and query strings as 400"""
    details = {}
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part != "body")
        details[field] = error["msg"]
    logger.info(f"Rejected invalid input on {request.url.path}: {details}")
    return await student_api_exception_handler(request, InvalidInputError(details=details))


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handle database-related errors"""
    logger.error(f"Database error: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "A database error occurred. Please try again later."}
    )


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle all uncaught exceptions"""
    logger.error(f"Unexpected error: {str(exc)}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "An unexpected error occurred. Please contact support."}
    )


@app.on_event("startup")
def on_startup():
    """Create database tables on startup"""
    try:
        logger.info("Starting application...")
        create_db_and_tables()
        logger.info("Database tables created successfully")
    except Exception as e:
        logger.error(f"Failed to create database tables: {str(e)}", exc_info=True)
        raise


@app.get("/", tags=["Root"])
async def read_root():
    """Root endpoint"""
    return {
        "message": "Welcome to Student Management API",
        "docs": "/docs",
        "redoc": "/redoc"
    }


# ============= STUDENT ENDPOINTS =============
# Fixed paths are registered before /students/{student_id} so they are not
# parsed as ids.

@app.post("/students", response_model=StudentResponse, status_code=status.HTTP_201_CREATED, tags=["Students"])
def create_student(student: StudentCreate, service: StudentService = Depends(get_student_service)):
    """Create a new student"""
    logger.info(f"Creating student with email: {student.email}")
    return service.create_student(student)


@app.get("/students", response_model=List[StudentResponse], tags=["Students"])
def read_students(service: StudentService = Depends(get_student_service)):
    """Get all students"""
    students = service.list_all()
    logger.info(f"Retrieved {len(students)} students")
    return students


@app.get("/students/search", response_model=List[StudentResponse], tags=["Students"])
def search_students(name: str = Query(...), service: StudentService = Depends(get_student_service)):
    """Find students whose name contains `name`, ignoring case"""
    return service.search_by_name(name)


@app.get("/students/age-range", response_model=List[StudentResponse], tags=["Students"])
def read_students_by_age_range(
    min_age: int = Query(..., alias="minAge"),
    max_age: int = Query(..., alias="maxAge"),
    service: StudentService = Depends(get_student_service)
):
    """Get students aged between minAge and maxAge inclusive"""
    return service.by_age_range(min_age, max_age)


@app.get("/students/older-than", response_model=List[StudentResponse], tags=["Students"])
def read_students_older_than(
    min_age: int = Query(..., alias="minAge"),
    service: StudentService = Depends(get_student_service)
):
    """Get students aged minAge or more"""
    return service.older_than(min_age)


@app.get("/students/count/age-range", response_model=int, tags=["Students"])
def count_students_by_age_range(
    min_age: int = Query(..., alias="minAge"),
    max_age: int = Query(..., alias="maxAge"),
    service: StudentService = Depends(get_student_service)
):
    """Count students aged between minAge and maxAge inclusive"""
    return service.count_by_age_range(min_age, max_age)


@app.get("/students/email/{email}", response_model=StudentResponse, tags=["Students"])
def read_student_by_email(email: str, service: StudentService = Depends(get_student_service)):
    """Get a student by email address"""
    student = service.get_by_email(email)
    if student is None:
        logger.warning(f"Student not found with email: {email}")
        raise StudentEmailNotFoundError(email)
    return student


@app.get("/students/{student_id}", response_model=StudentResponse, tags=["Students"])
def read_student(student_id: int, service: StudentService = Depends(get_student_service)):
    """Get a specific student by ID"""
    return service.get_by_id(student_id)


@app.put("/students/{student_id}", response_model=StudentResponse, tags=["Students"])
def update_student(
    student_id: int,
    student_update: StudentUpdate,
    service: StudentService = Depends(get_student_service)
):
    """Replace a student's information"""
    logger.info(f"Updating student with ID: {student_id}")
    return service.update_student(student_id, student_update)


@app.delete("/students/{student_id}", status_code=status.HTTP_204_NO_CONTENT, tags=["Students"])
def delete_student(student_id: int, service: StudentService = Depends(get_student_service)):
    """Delete a student"""
    logger.info(f"Deleting student with ID: {student_id}")
    service.delete_student(student_id)
    return None
