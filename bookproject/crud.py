import logging
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from typing import List, Optional

from bookproject import models, schemas
from bookproject.mapping import apply_patch
from bookproject.security import PasswordEncoder
from exceptions.exceptions import DatabaseError, UserAlreadyRegisteredError

logger = logging.getLogger(__name__)


class UserStore:
    def __init__(self, db: Session, password_encoder: PasswordEncoder):
        self.db = db
        self.password_encoder = password_encoder

    def find_all(self) -> List[models.User]:
        try:
            return self.db.query(models.User).all()
        except SQLAlchemyError as e:
            raise DatabaseError("fetch", str(e))

    def find_user_by_id(self, user_id: int) -> Optional[models.User]:
        try:
            return self.db.query(models.User).filter(models.User.id == user_id).first()
        except SQLAlchemyError as e:
            raise DatabaseError("fetch", str(e))

    def find_user_by_email(self, email: str) -> Optional[models.User]:
        try:
            return self.db.query(models.User).filter(models.User.email == email).first()
        except SQLAlchemyError as e:
            raise DatabaseError("fetch", str(e))

    def register(self, user: schemas.UserToRegisterDto) -> models.User:
        if self.find_user_by_email(user.username) is not None:
            raise UserAlreadyRegisteredError(user.username)
        try:
            db_user = models.User(
                email=user.username,
                password=self.password_encoder.encode(user.password),
                active=True,
            )
            self.db.add(db_user)
            self.db.commit()
            self.db.refresh(db_user)
            logger.info(f"Registered user {db_user.id}")
            return db_user
        except IntegrityError:
            # Lost a race with a concurrent registration of the same email
            self.db.rollback()
            raise UserAlreadyRegisteredError(user.username)
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError("create", str(e))

    def delete_user_by_id(self, user_id: int) -> None:
        try:
            user = self.find_user_by_id(user_id)
            if user is not None:
                self.db.delete(user)
                self.db.commit()
                logger.info(f"Deleted user {user_id}")
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError("delete", str(e))

    def change_user_password(self, user: models.User, new_password: str) -> None:
        try:
            user.password = self.password_encoder.encode(new_password)
            self.db.add(user)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError("update", str(e))


class BookStore:
    def __init__(self, db: Session):
        self.db = db

    def find_all(self) -> List[models.Book]:
        try:
            return self.db.query(models.Book).all()
        except SQLAlchemyError as e:
            raise DatabaseError("fetch", str(e))

    def find_by_id(self, book_id: int) -> Optional[models.Book]:
        try:
            return self.db.query(models.Book).filter(models.Book.id == book_id).first()
        except SQLAlchemyError as e:
            raise DatabaseError("fetch", str(e))

    def find_by_shelf(
        self,
        shelf: schemas.PredefinedShelfName,
        title: Optional[str] = None,
        author: Optional[str] = None,
    ) -> List[models.Book]:
        try:
            query = self.db.query(models.Book).filter(models.Book.shelf == shelf.value)
            if title:
                query = query.filter(models.Book.title.ilike(f"%{title}%"))
            if author:
                query = query.filter(models.Book.author.ilike(f"%{author}%"))
            return query.all()
        except SQLAlchemyError as e:
            raise DatabaseError("filter", str(e))

    def save(self, book: models.Book) -> Optional[models.Book]:
        try:
            self.db.add(book)
            self.db.commit()
            self.db.refresh(book)
            return book
        except IntegrityError as e:
            self.db.rollback()
            logger.error(f"Could not save book {book.title!r}: {e.orig}")
            return None
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError("create", str(e))

    def update_book(
        self, book: models.Book, book_patch: schemas.BookPatchDto
    ) -> models.Book:
        try:
            apply_patch(book, book_patch)
            self.db.commit()
            self.db.refresh(book)
            return book
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError("update", str(e))

    def delete(self, book: models.Book) -> None:
        try:
            self.db.delete(book)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise DatabaseError("delete", str(e))
