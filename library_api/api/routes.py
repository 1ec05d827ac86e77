from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from library_api.core.database import get_db
from library_api.core.errors import NotFoundError
from library_api.schemas import schemas
from library_api.services import books
from library_api.services.borrow import borrow_book

router = APIRouter(prefix="/api")

BookResponse = schemas.ApiResponse[schemas.BookOut]
BookListResponse = schemas.ApiResponse[List[schemas.BookOut]]
BorrowResponse = schemas.ApiResponse[schemas.BorrowOut]


def book_response(message: str, book) -> BookResponse:
    return BookResponse(message=message, data=schemas.BookOut.model_validate(book))


@router.post("/books", response_model=BookResponse, status_code=status.HTTP_201_CREATED)
def create_book(book_in: schemas.BookCreate, db: Session = Depends(get_db)):
    book = books.create_book(db, book_in.model_dump())
    return book_response("Book created successfully", book)


@router.get("/books", response_model=BookListResponse)
def list_books(genre: Optional[str] = Query(None, alias="filter", description="genre to match"),
               available: Optional[bool] = None,
               sort_by: str = Query("createdAt", alias="sortBy"),
               sort: str = "desc",
               limit: int = books.DEFAULT_LIMIT,
               db: Session = Depends(get_db)):
    results = books.list_books(db, genre=genre, available=available,
                               sort_by=sort_by, sort=sort, limit=limit)
    return BookListResponse(
        message="Books retrieved successfully",
        data=[schemas.BookOut.model_validate(b) for b in results],
    )


@router.get("/books/{book_id}", response_model=BookResponse)
def read_book(book_id: str, db: Session = Depends(get_db)):
    book = books.get_book(db, book_id)
    if book is None:
        raise NotFoundError("Book", book_id)
    return book_response("Book retrieved successfully", book)


@router.put("/books/{book_id}", response_model=BookResponse)
def update_book(book_id: str, book_upd: schemas.BookUpdate, db: Session = Depends(get_db)):
    book = books.update_book(db, book_id, book_upd.model_dump(exclude_unset=True))
    if book is None:
        raise NotFoundError("Book", book_id)
    return book_response("Book updated successfully", book)


@router.delete("/books/{book_id}", response_model=schemas.ApiResponse[Any])
def delete_book(book_id: str, db: Session = Depends(get_db)):
    if not books.delete_book(db, book_id):
        raise NotFoundError("Book", book_id)
    return schemas.ApiResponse[Any](message="Book deleted successfully", data=None)


@router.post("/borrow", response_model=BorrowResponse, status_code=status.HTTP_201_CREATED)
def borrow(borrow_in: schemas.BorrowCreate, db: Session = Depends(get_db)):
    record = borrow_book(db, borrow_in.book, borrow_in.quantity, borrow_in.due_date)
    return BorrowResponse(
        message="Book borrowed successfully",
        data=schemas.BorrowOut.model_validate(record),
    )
