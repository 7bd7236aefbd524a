"""
Foodies Backend — Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models for the share form, the meal payloads, and errors.
Why:   Form input is turned into a validated record (MealForm) before the
       Mutation Handler touches the store; responses control exactly which
       fields leave the API and under which names.
How:   MealForm is validated by MealService; the response models are used
       as FastAPI response_model and serialized by alias (creatorEmail).
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Input Models — What the share form submits
# ══════════════════════════════════════════════════════════════════════════


class MealForm(BaseModel):
    """
    What:  The text part of a share-meal submission.
    Who:   Built by MealService.share_meal from the raw form fields.

    Rules:
        - every field is required and must not be blank after stripping
        - creatorEmail must be a syntactically valid address (EmailStr)
    The image is validated separately by ImageService.
    """

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    title: str
    summary: str
    instructions: str
    creator: str
    creator_email: EmailStr = Field(alias="creatorEmail")

    @field_validator("*", mode="before")
    @classmethod
    def not_blank(cls, v, info: ValidationInfo):
        # Runs before EmailStr, so a blank email reads "must not be blank"
        if v is None or (isinstance(v, str) and not v.strip()):
            name = cls.model_fields[info.field_name].alias or info.field_name
            raise ValueError(f"'{name}' must not be blank.")
        return v


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class MealResponse(BaseModel):
    """
    What:  Full representation of a shared meal.
    Who:   Returned by GET /meals/{slug} and as items of GET /meals.
    """

    model_config = ConfigDict(populate_by_name=True)

    slug: str = Field(description="URL-safe identifier derived from the title")
    title: str
    summary: str
    instructions: str = Field(description="Cooking instructions, markup escaped")
    image: str = Field(description="Public path of the meal image")
    creator: str
    creator_email: str = Field(alias="creatorEmail")

    @classmethod
    def from_meal(cls, meal) -> "MealResponse":
        """Build the response from a Meal ORM row."""
        return cls(
            slug=meal.slug,
            title=meal.title,
            summary=meal.summary,
            instructions=meal.instructions,
            image=meal.image,
            creator=meal.creator,
            creator_email=meal.creator_email,
        )


class MealListResponse(BaseModel):
    """
    What:  The listing view payload (GET /meals).

    The whole payload is what ListingCache stores; a successful share
    invalidates it so the next read rebuilds it from the store.
    """
    meals: List[MealResponse] = Field(description="All meals in insertion order")
    total_count: int = Field(description="Number of meals")


class ShareResult(BaseModel):
    """
    What:  Outcome of MealService.share_meal.

    Exactly one of these shapes:
        Done:   redirect_to="/meals", slug set, message None
        Failed: redirect_to None, message set (user-facing), error set

    Why a value instead of an exception:
        Validation and duplicate-slug failures are normal outcomes of a form
        submission; the caller renders them next to the form.
    """
    redirect_to: Optional[str] = Field(default=None, description="Where to navigate on success")
    slug: Optional[str] = Field(default=None, description="Slug of the created meal")
    message: Optional[str] = Field(default=None, description="User-facing failure message")
    field: Optional[str] = Field(default=None, description="Form field that failed, if any")
    error: Optional[str] = Field(
        default=None,
        description="Failure kind: validation_error or constraint_violation",
    )

    @property
    def ok(self) -> bool:
        return self.redirect_to is not None


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class FormErrorResponse(BaseModel):
    """Body of a failed share-form submission (400 / 409)."""
    message: str
    field: Optional[str] = None


class ErrorResponse(BaseModel):
    """
    What:  Standardized error envelope for exceptions that escape a route.

    Example:
        {
            "error": "not_found",
            "message": "meal 'big-burger' was not found",
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    images_dir: str = Field(description="Image storage: writable, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
