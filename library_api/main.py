from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from library_api.api import routes
from library_api.core.config import CORS_ORIGINS
from library_api.core.database import init_db
from library_api.core.errors import LibraryError, ValidationError, field_error
from library_api.core.logging import setup_logging

logger = setup_logging()

# request sections FastAPI prefixes error locations with
LOC_SECTIONS = {"body", "query", "path", "header", "cookie"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


app = FastAPI(title="Library Management API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def failure(status_code: int, message: str, error) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder({"success": False, "message": message, "error": error}),
    )


@app.exception_handler(LibraryError)
async def library_error_handler(request: Request, exc: LibraryError):
    return failure(exc.status_code, exc.message, exc.error)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = {}
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in LOC_SECTIONS]
        path = ".".join(loc) or "body"
        errors[path] = field_error(path, err.get("msg"), err.get("type"), err.get("input"))
    error = ValidationError(errors)
    return failure(error.status_code, error.message, error.error)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error", exc_info=exc)
    return failure(500, "Something went wrong", {
        "name": type(exc).__name__,
        "message": str(exc) or "Unknown error",
    })


app.include_router(routes.router)


@app.get("/", response_class=PlainTextResponse)
def root():
    return "Library Management API Server"


@app.get("/health")
def health():
    return {"status": "ok"}
