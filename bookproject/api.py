import logging
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from bookproject.book_handlers import BookHandlers
from bookproject.dependencies import (
    get_book_handlers,
    get_current_user,
    get_user_handlers,
)
from bookproject.models import User
from bookproject.outcomes import ErrorKind, Outcome
from bookproject.schemas import (
    BCRYPT_MAX_PASSWORD_BYTES,
    BookDto,
    BookPatchDto,
    BookSchema,
    PredefinedShelfName,
    UserSchema,
    UserToDeleteDto,
    UserToRegisterDto,
)
from bookproject.user_handlers import UserHandlers

logger = logging.getLogger(__name__)


class Mappings:
    USER = "/api/user"
    BOOK = "/api"


STATUS_CODES = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    ErrorKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
}


def unwrap(outcome: Outcome):
    """Return the handler's value or turn its failure kind into an HTTP error."""
    if outcome.is_ok:
        return outcome.value
    raise HTTPException(status_code=STATUS_CODES[outcome.error], detail=outcome.message)


user_router = APIRouter(prefix=Mappings.USER, tags=["users"])
book_router = APIRouter(prefix=Mappings.BOOK, tags=["books"])


# Users
@user_router.get("/users", response_model=List[UserSchema])
def get_all_users(handlers: UserHandlers = Depends(get_user_handlers)):
    return unwrap(handlers.list_users())


@user_router.get("/user/{id}", response_model=UserSchema)
def get_user(id: int, handlers: UserHandlers = Depends(get_user_handlers)):
    return unwrap(handlers.get_user(id))


@user_router.post("", status_code=status.HTTP_201_CREATED, response_class=Response)
async def register(
    user: UserToRegisterDto, handlers: UserHandlers = Depends(get_user_handlers)
):
    unwrap(await handlers.register(user))
    return Response(status_code=status.HTTP_201_CREATED)


@user_router.delete("", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_current_user(
    user: UserToDeleteDto,
    current_user: User = Depends(get_current_user),
    handlers: UserHandlers = Depends(get_user_handlers),
):
    unwrap(await handlers.delete_current_user(current_user, user))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@user_router.post("/update-password", response_model=bool)
async def update_password(
    current_password: str = Query(..., alias="currentPassword"),
    new_password: str = Query(
        ..., alias="newPassword", min_length=1, max_length=BCRYPT_MAX_PASSWORD_BYTES
    ),
    current_user: User = Depends(get_current_user),
    handlers: UserHandlers = Depends(get_user_handlers),
):
    return unwrap(
        await handlers.update_password(current_user, current_password, new_password)
    )


# Books
@book_router.get("/books", response_model=List[BookSchema])
def all_books(handlers: BookHandlers = Depends(get_book_handlers)):
    return unwrap(handlers.all())


@book_router.get("/books/shelf/{shelf}", response_model=List[BookSchema])
def find_by_shelf(
    shelf: PredefinedShelfName,
    title: Optional[str] = Query(None, min_length=1, max_length=200),
    author: Optional[str] = Query(None, min_length=1, max_length=200),
    handlers: BookHandlers = Depends(get_book_handlers),
):
    return unwrap(handlers.find_by_shelf(shelf, title, author))


@book_router.get("/book/{id}", response_model=BookSchema)
def find_book_by_id(id: int, handlers: BookHandlers = Depends(get_book_handlers)):
    return unwrap(handlers.find_by_id(id))


@book_router.post("/book", response_model=BookSchema, status_code=status.HTTP_201_CREATED)
def add_book(
    book: BookDto,
    current_user: User = Depends(get_current_user),
    handlers: BookHandlers = Depends(get_book_handlers),
):
    return unwrap(handlers.add_book(book, current_user))


@book_router.patch("/book/{id}", response_model=BookSchema)
def update_book(
    id: int,
    book_patch: BookPatchDto,
    handlers: BookHandlers = Depends(get_book_handlers),
):
    return unwrap(handlers.update(id, book_patch))


@book_router.delete(
    "/book/{id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response
)
def delete_book(id: int, handlers: BookHandlers = Depends(get_book_handlers)):
    unwrap(handlers.delete(id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
