from sqlalchemy import Column, Integer, String, Boolean, Date, Float, ForeignKey
from sqlalchemy.orm import relationship

from sqlalchemy.orm import declarative_base

Base = declarative_base()

DEFAULT_SHELF = "To read"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)
    active = Column(Boolean, default=True)

    books = relationship(
        "Book", back_populates="user", cascade="all, delete-orphan"
    )


class Book(Base):
    __tablename__ = "books"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    author = Column(String, nullable=True)
    genre = Column(String, nullable=True)
    isbn = Column(String, unique=True, nullable=True)
    number_of_pages = Column(Integer, nullable=True)
    pages_read = Column(Integer, nullable=True)
    year_of_publication = Column(Integer, nullable=True)
    rating = Column(Float, nullable=True)
    review = Column(String, nullable=True)
    date_started_reading = Column(Date, nullable=True)
    date_finished_reading = Column(Date, nullable=True)
    shelf = Column(String, nullable=False, default=DEFAULT_SHELF)

    user_id = Column(Integer, ForeignKey("users.id"), nullable=True)
    user = relationship("User", back_populates="books")
