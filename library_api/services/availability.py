from sqlalchemy import update
from sqlalchemy.orm import Session

from library_api.models.models import Book


def derive_availability(copies: int, available: bool) -> bool:
    # forces False when copies ran out, never switches a book back on
    if copies is None or copies <= 0:
        return False
    return bool(available)


def update_availability(db: Session, book_id: str) -> bool:
    """Switch ``available`` off for ``book_id`` if its copies ran out. Does not commit."""
    result = db.execute(
        update(Book)
        .where(Book.id == book_id, Book.copies <= 0, Book.available.is_(True))
        .values(available=False)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount > 0
