from datetime import date, datetime
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

from library_api.models.models import Genre

DataT = TypeVar("DataT")

_timestamp = TypeAdapter(datetime)


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys; snake_case names are accepted too."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class BookBase(CamelModel):
    title: str = Field(min_length=1)
    author: str = Field(min_length=1)
    genre: Genre
    isbn: str = Field(min_length=1)
    description: Optional[str] = None
    copies: int = Field(ge=0)
    available: bool = True


class BookCreate(BookBase):
    pass


class BookUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1)
    author: Optional[str] = Field(default=None, min_length=1)
    genre: Optional[Genre] = None
    isbn: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    copies: Optional[int] = Field(default=None, ge=0)
    available: Optional[bool] = None

    @field_validator('title', 'author', 'genre', 'isbn', 'copies', 'available')
    @classmethod
    def reject_null(cls, v):
        # omitted is fine, explicit null is not: these columns are required
        if v is None:
            raise ValueError('Field may not be null')
        return v


class BookOut(BookBase):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(alias="_id")
    created_at: datetime
    updated_at: datetime


class BorrowCreate(CamelModel):
    # all optional so that absent fields surface as "Missing required fields"
    book: Optional[str] = None
    quantity: Optional[int] = None
    due_date: Optional[date] = None

    @field_validator('due_date', mode='before')
    @classmethod
    def drop_time_of_day(cls, v):
        # clients send full ISO timestamps; only the calendar day is kept
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return _timestamp.validate_python(v).date()
        return v


class BorrowOut(CamelModel):
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: str = Field(alias="_id")
    book: str
    quantity: int
    due_date: date
    created_at: datetime
    updated_at: datetime


class ApiResponse(BaseModel, Generic[DataT]):
    """Success envelope shared by every JSON endpoint."""

    success: bool = True
    message: str
    data: Optional[DataT] = None
