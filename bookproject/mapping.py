"""Explicit DTO to entity projections.

Only fields that carry a value are copied; a ``None`` on the source side never
overwrites anything on the target.
"""
from bookproject.models import Book
from bookproject.schemas import BookDto, BookPatchDto, PredefinedShelfName


def _assign_if_present(target, name: str, value):
    if value is None:
        return
    if isinstance(value, PredefinedShelfName):
        value = value.value
    setattr(target, name, value)


def _copy_book_fields(source, book: Book) -> Book:
    _assign_if_present(book, "title", source.title)
    _assign_if_present(book, "author", source.author)
    _assign_if_present(book, "genre", source.genre)
    _assign_if_present(book, "isbn", source.isbn)
    _assign_if_present(book, "number_of_pages", source.number_of_pages)
    _assign_if_present(book, "pages_read", source.pages_read)
    _assign_if_present(book, "year_of_publication", source.year_of_publication)
    _assign_if_present(book, "rating", source.rating)
    _assign_if_present(book, "review", source.review)
    _assign_if_present(book, "date_started_reading", source.date_started_reading)
    _assign_if_present(book, "date_finished_reading", source.date_finished_reading)
    _assign_if_present(book, "shelf", source.shelf)
    return book


def convert_to_book(book_dto: BookDto) -> Book:
    return _copy_book_fields(book_dto, Book())


def apply_patch(book: Book, patch: BookPatchDto) -> Book:
    return _copy_book_fields(patch, book)
