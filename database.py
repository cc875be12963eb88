from sqlmodel import SQLModel, Session, create_engine

from config import settings

connect_args = {}
if settings.DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(settings.DATABASE_URL, echo=settings.DB_ECHO_SQL, connect_args=connect_args)


def create_db_and_tables():
    """Create all tables registered on the SQLModel metadata"""
    SQLModel.metadata.create_all(engine)


def get_session():
    """Yield a `Session` for the duration of one request"""
    with Session(engine) as session:
        yield session
