import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from fastapi.testclient import TestClient

from bookproject.main import app
from bookproject.crud import BookStore, UserStore
from bookproject.dependencies import get_dispatcher, get_password_encoder
from bookproject.models import Base, Book
from bookproject.schemas import UserToRegisterDto
from bookproject.storage import get_db

# One in-memory SQLite database shared by the test session and the app
engine = create_engine(
    "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session, fake_dispatcher, password_encoder):
    app.state.testing = True

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_dispatcher] = lambda: fake_dispatcher
    app.dependency_overrides[get_password_encoder] = lambda: password_encoder
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    app.state.testing = False


@pytest.fixture(scope="function")
def user_store(db_session, password_encoder):
    return UserStore(db_session, password_encoder)


@pytest.fixture(scope="function")
def book_store(db_session):
    return BookStore(db_session)


@pytest.fixture(scope="function")
def test_user(user_store):
    return user_store.register(
        UserToRegisterDto(username="test@example.com", password="testpassword")
    )


@pytest.fixture(scope="function")
def test_book(book_store):
    book = Book(
        title="Test Book",
        author="Test Author",
        genre="Fantasy",
        isbn="1234567890",
        number_of_pages=320,
        shelf="Reading",
    )
    return book_store.save(book)
