"""
Shared pytest fixtures.

Uses a throwaway SQLite database so no Postgres is required for tests.
Every test gets its own user id, so rows from different tests never collide.
"""
import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from reading_tracker.db.base import Base, get_db
from reading_tracker.main import app
from reading_tracker.models import VerseEntry

SQLITE_URL = "sqlite:///./test_reading_tracker.db"

engine = create_engine(SQLITE_URL, connect_args={"check_same_thread": False})


# pysqlite defers BEGIN on its own; let SQLAlchemy emit it so SAVEPOINTs nest.
@event.listens_for(engine, "connect")
def _sqlite_connect(dbapi_connection, connection_record):
    dbapi_connection.isolation_level = None


@event.listens_for(engine, "begin")
def _sqlite_begin(conn):
    conn.exec_driver_sql("BEGIN")


TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# (book, chapter, verse_start, verse_end, content, content_localized, reading_day)
SEED_VERSES = [
    ("Genesis", 1, 1, None, "In the beginning God created the heaven and the earth.", "ในปฐมกาล พระเจ้าทรงเนรมิตสร้างฟ้าและแผ่นดิน", 1),
    ("Psalms", 23, 1, 3, "The LORD is my shepherd; I shall not want.", None, 2),
    ("Proverbs", 3, 5, 6, "Trust in the LORD with all thine heart.", "   ", 3),
    ("Isaiah", 40, 31, None, "They that wait upon the LORD shall renew their strength.", None, 4),
    ("Matthew", 5, 9, None, "Blessed are the peacemakers.", None, 5),
    ("John", 3, 16, None, "For God so loved the world.", "เพราะว่าพระเจ้าทรงรักโลก", 6),
    ("Romans", 8, 28, None, "All things work together for good.", None, 7),
    ("Philippians", 4, 13, None, "I can do all things through Christ.", None, 8),
    ("Hebrews", 11, 1, None, "Now faith is the substance of things hoped for.", None, 9),
    ("1 John", 4, 8, None, "God is love.", None, 10),
]


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture(scope="session", autouse=True)
def create_tables():
    Base.metadata.create_all(bind=engine)
    # Seed the verse pool (normally maintained by the admin surface)
    db = TestingSessionLocal()
    try:
        if db.query(VerseEntry).count() == 0:
            for book, chapter, start, end, content, localized, day in SEED_VERSES:
                db.add(VerseEntry(
                    book=book,
                    chapter=chapter,
                    verse_start=start,
                    verse_end=end,
                    content=content,
                    content_localized=localized,
                    reading_day=day,
                ))
            db.commit()
    finally:
        db.close()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def user_id() -> str:
    return str(uuid.uuid4())


@pytest.fixture()
def client(db):
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers(user_id) -> dict:
    return {"X-User-Id": user_id}
