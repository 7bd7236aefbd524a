"""
Foodies Backend — Custom Exception Hierarchy
==============================================

What:  Application-specific exceptions for the meal-sharing workflow.
Why:   Each failure kind maps to one HTTP status and one user-facing message,
       without leaking SQL, file paths, or stack traces to the client.
How:   Each exception carries a message and an optional context dict.
       The Mutation Handler converts ValidationError and ConstraintViolation
       into a structured ShareResult; everything else that escapes a route is
       formatted by the global handlers registered in main.py.

Exception Hierarchy:
    FoodiesError (base)          → 500
    ├── ValidationError          → 400 Bad Request (client can fix)
    ├── ConstraintViolation      → 409 Conflict (duplicate slug)
    ├── NotFoundError            → 404 Not Found
    ├── FileStorageError         → 500 Internal Server Error
    ├── DatabaseError            → 500 Internal Server Error
    └── RateLimitExceededError   → 429 Too Many Requests

Note:
    A lookup miss is NOT an exception inside the services; MealStore and
    MealService return None. Only the route layer raises NotFoundError,
    because "not found → 404" is a presentation decision.
"""

from typing import Any, Dict, Optional


class FoodiesError(Exception):
    """
    Base exception for all Foodies application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(FoodiesError):
    """
    Raised when submitted form input fails validation.

    When:    Missing/blank text field, malformed email, missing or empty image,
             unsupported image type, image too large, unusable title.
    HTTP:    400 Bad Request

    Example response:
        {"message": "Invalid input: 'summary' must not be blank.", "field": "summary"}
    """

    def __init__(
        self,
        message: str = "Invalid input.",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class ConstraintViolation(FoodiesError):
    """
    Raised by MealStore.insert when the slug already exists.

    Two titles that normalize to the same slug ("Big Burger", "big  burger!")
    collide. Collisions are not auto-resolved; the second share fails and the
    first meal stays untouched.
    HTTP:    409 Conflict
    """

    def __init__(
        self,
        slug: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["slug"] = slug
        super().__init__(
            message=f"A meal with the slug '{slug}' already exists. Please choose a different title.",
            context=ctx,
        )
        self.slug = slug


class NotFoundError(FoodiesError):
    """
    Raised by routes when a requested meal (or file) does not exist.
    HTTP:    404 Not Found
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class FileStorageError(FoodiesError):
    """
    Raised when writing an uploaded image to the images directory fails.

    When:    Disk full, permission denied, directory not writable.
    HTTP:    500 Internal Server Error (generic message, path logged server-side)
    """

    def __init__(
        self,
        message: str = "File storage operation failed",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class DatabaseError(FoodiesError):
    """
    Raised when a store operation fails for any reason other than a
    duplicate slug (locked database file, missing table, I/O error).
    HTTP:    500 Internal Server Error
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class RateLimitExceededError(FoodiesError):
    """
    Raised when a client submits too many forms within the rate limit window.
    HTTP:    429 Too Many Requests
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before sharing another meal."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after
