from datetime import date
from enum import Enum
from pydantic import AfterValidator, BaseModel, Field
from typing import Annotated, Optional


# bcrypt rejects passwords longer than 72 bytes
BCRYPT_MAX_PASSWORD_BYTES = 72


def password_fits_bcrypt(password: str) -> bool:
    return len(password.encode("utf-8")) <= BCRYPT_MAX_PASSWORD_BYTES


def _fits_bcrypt(password: str) -> str:
    if not password_fits_bcrypt(password):
        raise ValueError(
            f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes long"
        )
    return password


NewPassword = Annotated[str, Field(min_length=1), AfterValidator(_fits_bcrypt)]


class PredefinedShelfName(str, Enum):
    TO_READ = "To read"
    READING = "Reading"
    READ = "Read"
    DID_NOT_FINISH = "Did not finish"


class BookFields(BaseModel):
    author: Optional[str] = None
    genre: Optional[str] = None
    isbn: Optional[str] = None
    number_of_pages: Optional[int] = Field(None, ge=0)
    pages_read: Optional[int] = Field(None, ge=0)
    year_of_publication: Optional[int] = None
    rating: Optional[float] = Field(None, ge=0, le=10)
    review: Optional[str] = None
    date_started_reading: Optional[date] = None
    date_finished_reading: Optional[date] = None
    shelf: Optional[PredefinedShelfName] = None


class BookDto(BookFields):
    title: str = Field(..., min_length=1)


class BookPatchDto(BookFields):
    title: Optional[str] = Field(None, min_length=1)


class BookSchema(BaseModel):
    id: int
    title: str
    author: str | None = None
    genre: str | None = None
    isbn: str | None = None
    number_of_pages: int | None = None
    pages_read: int | None = None
    year_of_publication: int | None = None
    rating: float | None = None
    review: str | None = None
    date_started_reading: date | None = None
    date_finished_reading: date | None = None
    shelf: str
    user_id: int | None = None

    class Config:
        from_attributes = True


class UserToRegisterDto(BaseModel):
    username: str = Field(..., min_length=3)
    password: NewPassword


class UserToDeleteDto(BaseModel):
    password: str


class UserSchema(BaseModel):
    id: int
    email: str
    # Stored bcrypt hash
    password: str
    active: bool
    books: list[BookSchema] = []

    class Config:
        from_attributes = True
