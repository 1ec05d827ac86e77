from typing import Any, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from library_api.core.errors import DuplicateKeyError, MalformedIdentifierError
from library_api.core.logging import get_logger
from library_api.models.models import Book, is_object_id
from library_api.services.availability import derive_availability

logger = get_logger("books")

DEFAULT_LIMIT = 10

# camelCase wire names -> columns; snake_case column names are accepted as-is
SORT_ALIASES = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "_id": "id",
}
SORTABLE = {c.name for c in Book.__table__.columns}


def ensure_object_id(book_id: Any) -> str:
    if not is_object_id(book_id):
        raise MalformedIdentifierError(book_id)
    return book_id.lower()


def _commit_book(db: Session, book: Book) -> Book:
    # read before commit: a rollback expires the instance
    isbn = book.isbn
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if "isbn" in str(exc.orig).lower():
            raise DuplicateKeyError(isbn) from exc
        raise
    db.refresh(book)
    return book


def create_book(db: Session, attrs: dict) -> Book:
    book = Book(**attrs)
    book.available = derive_availability(book.copies, attrs.get("available", True))
    db.add(book)
    _commit_book(db, book)
    logger.info(f"Created book id={book.id} title={book.title}")
    return book


def list_books(db: Session, genre: Optional[str] = None, available: Optional[bool] = None,
               sort_by: str = "createdAt", sort: str = "desc",
               limit: int = DEFAULT_LIMIT) -> List[Book]:
    query = db.query(Book)
    if genre:
        query = query.filter(Book.genre == genre)
    if available is not None:
        query = query.filter(Book.available == available)

    column = SORT_ALIASES.get(sort_by, sort_by)
    if column in SORTABLE:
        attr = getattr(Book, column)
        query = query.order_by(attr.asc() if sort == "asc" else attr.desc())
    else:
        logger.debug(f"Ignoring unknown sort field {sort_by!r}")

    if limit and limit > 0:
        query = query.limit(limit)
    return query.all()


def get_book(db: Session, book_id: str) -> Optional[Book]:
    return db.get(Book, ensure_object_id(book_id))


def update_book(db: Session, book_id: str, attrs: dict) -> Optional[Book]:
    # copies in the payload wins over an available sent alongside it
    book = get_book(db, book_id)
    if book is None:
        return None
    for k, v in attrs.items():
        setattr(book, k, v)
    if attrs.get("copies") is not None:
        book.available = attrs["copies"] > 0
    book.available = derive_availability(book.copies, book.available)
    _commit_book(db, book)
    logger.info(f"Updated book id={book.id}")
    return book


def delete_book(db: Session, book_id: str) -> bool:
    book = get_book(db, book_id)
    if book is None:
        return False
    db.delete(book)
    db.commit()
    logger.info(f"Deleted book id={book_id}")
    return True
