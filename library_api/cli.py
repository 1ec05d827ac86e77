"""Small maintenance utilities: create tables, seed sample books, run the server."""
import argparse

from library_api.core.config import HOST, PORT
from library_api.core.database import SessionLocal, init_db
from library_api.core.logging import setup_logging
from library_api.models.models import Book, Genre
from library_api.services.books import create_book

SAMPLE_BOOKS = [
    dict(title='Dune', author='Frank Herbert', genre=Genre.SCIENCE, isbn='978-0441172719',
         description='Desert planet politics and spice.', copies=3),
    dict(title='Designing Data-Intensive Applications', author='Martin Kleppmann',
         genre=Genre.NON_FICTION, isbn='978-1449373320', copies=2),
    dict(title='The Hobbit', author='J. R. R. Tolkien', genre=Genre.FANTASY,
         isbn='978-0547928227', copies=4),
]


def seed(db) -> int:
    """Insert the sample books whose ISBN is not taken yet. Returns how many were added."""
    added = 0
    for attrs in SAMPLE_BOOKS:
        if db.query(Book).filter(Book.isbn == attrs['isbn']).first():
            continue
        create_book(db, dict(attrs))
        added += 1
    return added


def main(argv=None):
    parser = argparse.ArgumentParser(description='Library API utilities')
    parser.add_argument('--initdb', action='store_true', help='Create tables')
    parser.add_argument('--seed', action='store_true', help='Seed sample books')
    parser.add_argument('--serve', action='store_true', help='Run the API server')
    args = parser.parse_args(argv)
    logger = setup_logging()

    init_db()
    if args.seed:
        db = SessionLocal()
        try:
            added = seed(db)
            logger.info(f'Seeded {added} sample book(s)')
        finally:
            db.close()
    if args.serve:
        import uvicorn

        uvicorn.run("library_api.main:app", host=HOST, port=PORT)


if __name__ == '__main__':
    main()
