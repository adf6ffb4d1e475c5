import logging
from typing import Optional

from bookproject.crud import BookStore
from bookproject.mapping import convert_to_book
from bookproject.models import User
from bookproject.outcomes import ErrorKind, Outcome, failure, ok
from bookproject.schemas import BookDto, BookPatchDto, PredefinedShelfName

logger = logging.getLogger(__name__)

BOOK_NOT_FOUND_ERROR_MESSAGE = "Could not find book with ID {}"
BOOK_NOT_SAVED_ERROR_MESSAGE = "Could not save book"


class BookHandlers:
    def __init__(self, book_store: BookStore):
        self.book_store = book_store

    def all(self) -> Outcome:
        return ok(self.book_store.find_all())

    def find_by_id(self, book_id: int) -> Outcome:
        book = self.book_store.find_by_id(book_id)
        if book is None:
            return self._not_found(book_id)
        return ok(book)

    def find_by_shelf(
        self,
        shelf: PredefinedShelfName,
        title: Optional[str] = None,
        author: Optional[str] = None,
    ) -> Outcome:
        return ok(self.book_store.find_by_shelf(shelf, title, author))

    def add_book(self, book_dto: BookDto, owner: User) -> Outcome:
        book = convert_to_book(book_dto)
        book.user_id = owner.id
        saved = self.book_store.save(book)
        if saved is None:
            return failure(ErrorKind.BAD_REQUEST, BOOK_NOT_SAVED_ERROR_MESSAGE)
        logger.info(f"Added book {saved.id}: {saved.title}")
        return ok(saved)

    def update(self, book_id: int, book_patch: BookPatchDto) -> Outcome:
        book_to_update = self.book_store.find_by_id(book_id)
        if book_to_update is None:
            return self._not_found(book_id)
        return ok(self.book_store.update_book(book_to_update, book_patch))

    def delete(self, book_id: int) -> Outcome:
        book_to_delete = self.book_store.find_by_id(book_id)
        if book_to_delete is None:
            return self._not_found(book_id)
        self.book_store.delete(book_to_delete)
        logger.info(f"Deleted book {book_id}")
        return ok()

    @staticmethod
    def _not_found(book_id: int) -> Outcome:
        return failure(ErrorKind.NOT_FOUND, BOOK_NOT_FOUND_ERROR_MESSAGE.format(book_id))
