import logging
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials
from sqlalchemy.orm import Session

from bookproject.book_handlers import BookHandlers
from bookproject.crud import BookStore, UserStore
from bookproject.internal_message import NotificationDispatcher, RabbitMQManager
from bookproject.models import User
from bookproject.security import PasswordEncoder
from bookproject.storage import get_db
from bookproject.user_handlers import UserHandlers

logger = logging.getLogger(__name__)

security = HTTPBasic(auto_error=False)
password_encoder = PasswordEncoder()


def get_password_encoder() -> PasswordEncoder:
    return password_encoder


def get_user_store(
    db: Session = Depends(get_db),
    encoder: PasswordEncoder = Depends(get_password_encoder),
) -> UserStore:
    return UserStore(db, encoder)


def get_book_store(db: Session = Depends(get_db)) -> BookStore:
    return BookStore(db)


def get_dispatcher(request: Request) -> NotificationDispatcher:
    dispatcher = getattr(request.app.state, "dispatcher", None)
    if dispatcher is None:
        # Messaging never came up; sends will fail with a delivery error
        dispatcher = NotificationDispatcher(RabbitMQManager())
    return dispatcher


def get_current_user(
    credentials: HTTPBasicCredentials | None = Depends(security),
    user_store: UserStore = Depends(get_user_store),
    encoder: PasswordEncoder = Depends(get_password_encoder),
) -> User:
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid authentication credentials",
        headers={"WWW-Authenticate": "Basic"},
    )
    if credentials is None:
        raise unauthorized

    user = user_store.find_user_by_email(credentials.username)
    if user is None or not user.active:
        raise unauthorized
    if not encoder.matches(credentials.password, user.password):
        logger.warning(f"Failed login for user {user.id}")
        raise unauthorized
    return user


def get_user_handlers(
    user_store: UserStore = Depends(get_user_store),
    encoder: PasswordEncoder = Depends(get_password_encoder),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> UserHandlers:
    return UserHandlers(user_store, encoder, dispatcher)


def get_book_handlers(book_store: BookStore = Depends(get_book_store)) -> BookHandlers:
    return BookHandlers(book_store)
