from datetime import date

from sqlalchemy import update
from sqlalchemy.orm import Session

from library_api.core.errors import (
    InsufficientStockError,
    MissingFieldsError,
    NotFoundError,
    ValidationError,
)
from library_api.core.logging import get_logger
from library_api.models.models import Book, Borrow
from library_api.services.availability import update_availability
from library_api.services.books import get_book

logger = get_logger("borrow")


def _claim_copies(db: Session, book_id: str, quantity: int) -> bool:
    result = db.execute(
        update(Book)
        .where(Book.id == book_id, Book.available.is_(True), Book.copies >= quantity)
        .values(copies=Book.copies - quantity)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount == 1


def borrow_book(db: Session, book_id: str, quantity: int, due_date: date) -> Borrow:
    if not book_id or not quantity or not due_date:
        raise MissingFieldsError()
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError.for_field(
            "quantity", "Quantity must be a positive integer", "min", quantity)

    book = get_book(db, book_id)
    if book is None:
        raise NotFoundError("Book", book_id)
    book_id = book.id
    if not book.available or book.copies < quantity:
        logger.warning(f"Rejected borrow of {quantity} from book {book_id}: "
                       f"copies={book.copies} available={book.available}")
        raise InsufficientStockError(quantity, book.copies, book.available)

    try:
        claimed = _claim_copies(db, book_id, quantity)
        if claimed:
            update_availability(db, book_id)
            borrow = Borrow(book=book_id, quantity=quantity, due_date=due_date)
            db.add(borrow)
            db.commit()
        else:
            db.rollback()
    except Exception:
        db.rollback()
        raise

    if not claimed:
        # stock went away between the read above and the conditional update
        book = db.get(Book, book_id)
        if book is None:
            raise NotFoundError("Book", book_id)
        logger.warning(f"Lost borrow race for book {book_id}: copies={book.copies}")
        raise InsufficientStockError(quantity, book.copies, book.available)

    db.refresh(borrow)
    logger.info(f"Borrowed {quantity} of book {book_id} borrow {borrow.id} due {due_date}")
    return borrow
