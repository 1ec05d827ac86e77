import enum
import os
import re
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Text, Date, DateTime, Boolean, Enum, Index
from sqlalchemy.types import TypeDecorator

from library_api.core.database import Base

OBJECT_ID_RE = re.compile(r"^[0-9a-fA-F]{24}$")


def new_object_id() -> str:
    return os.urandom(12).hex()


def is_object_id(value) -> bool:
    return isinstance(value, str) and OBJECT_ID_RE.match(value) is not None


def utcnow():
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Timezone-aware UTC datetimes, also on backends that store them naive (SQLite)."""
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class Genre(str, enum.Enum):
    FICTION = "FICTION"
    NON_FICTION = "NON_FICTION"
    SCIENCE = "SCIENCE"
    HISTORY = "HISTORY"
    BIOGRAPHY = "BIOGRAPHY"
    FANTASY = "FANTASY"


class Book(Base):
    __tablename__ = "books"
    id = Column(String(24), primary_key=True, default=new_object_id)
    title = Column(String, nullable=False, index=True)
    author = Column(String, nullable=False, index=True)
    genre = Column(Enum(Genre, native_enum=False, length=16), nullable=False, index=True)
    isbn = Column(String, unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    copies = Column(Integer, nullable=False, default=0)
    available = Column(Boolean, nullable=False, default=True)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False)


Index('ix_books_title_author', Book.title, Book.author)


class Borrow(Base):
    __tablename__ = "borrows"
    id = Column(String(24), primary_key=True, default=new_object_id)
    # weak reference: borrow records outlive the books they point at
    book = Column(String(24), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)
    due_date = Column(Date, nullable=False)
    created_at = Column(UTCDateTime, default=utcnow, nullable=False)
    updated_at = Column(UTCDateTime, default=utcnow, onupdate=utcnow, nullable=False)
