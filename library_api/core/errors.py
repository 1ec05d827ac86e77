from typing import Any, Optional

OBJECT_ID_REASON = "Id must be a 24-character hexadecimal string."


class LibraryError(Exception):
    status_code = 400
    name = "Error"

    def __init__(self, message: str, error: Any = None):
        self.message = message
        self.error = error
        super().__init__(self.message)


class ValidationError(LibraryError):
    name = "ValidationError"

    def __init__(self, errors: dict[str, dict[str, Any]]):
        self.errors = errors
        super().__init__(
            "Validation failed",
            error={"name": self.name, "errors": errors},
        )

    @classmethod
    def for_field(cls, path: str, message: str, kind: str, value: Any) -> "ValidationError":
        return cls({path: field_error(path, message, kind, value)})


class MalformedIdentifierError(LibraryError):
    name = "CastError"

    def __init__(self, value: Any, path: str = "_id"):
        self.value = value
        detail = f'Cast to ObjectId failed for value "{value}" at path "{path}"'
        super().__init__(
            "Invalid ID format",
            error={
                "name": self.name,
                "value": value,
                "reason": OBJECT_ID_REASON,
                "message": detail,
            },
        )


class DuplicateKeyError(LibraryError):
    name = "DuplicateKeyError"

    def __init__(self, isbn: str):
        self.isbn = isbn
        super().__init__(
            "Duplicate entry",
            error=f"A book with the ISBN '{isbn}' already exists.",
        )


class MissingFieldsError(LibraryError):
    name = "MissingFieldsError"

    def __init__(self, error: str = "book, quantity, and dueDate are required"):
        super().__init__("Missing required fields", error=error)


class NotFoundError(LibraryError):
    status_code = 404
    name = "NotFoundError"

    def __init__(self, resource: str, resource_id: Any):
        self.resource_id = resource_id
        super().__init__(
            f"{resource} not found",
            error={
                "name": self.name,
                "message": f"{resource} with id {resource_id} not found",
                "id": resource_id,
            },
        )


class InsufficientStockError(LibraryError):
    name = "InsufficientStockError"

    def __init__(self, requested: int, copies: Optional[int], available: Optional[bool]):
        self.requested = requested
        super().__init__(
            "Not enough copies available",
            error={
                "name": self.name,
                "message": f"Requested {requested} copies, {copies} in stock",
                "requested": requested,
                "copies": copies,
                "available": available,
            },
        )


def field_error(path: str, message: str, kind: str, value: Any) -> dict[str, Any]:
    return {"message": message, "kind": kind, "path": path, "value": value}
