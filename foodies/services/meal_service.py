"""
Foodies Backend — Meal Service (Mutation & Retrieval Handlers)
================================================================

What:  The business logic of the app: share a meal, list meals, get one meal.
Why:   Keeps the form workflow independent of HTTP; routes only translate
       the outcome into a redirect, a JSON body, or a status code.
How:   A MealService is built per request around its collaborators
       (MealStore, ImageService, ListingCache), all injected by FastAPI.

Share Flow (POST /meals/share):
    ┌──────────┐   ┌──────────┐   ┌──────────┐   ┌──────────┐   ┌────────────┐
    │ Validate │──▶│  Slug +  │──▶│  Store   │──▶│  Insert  │──▶│ Invalidate │
    │ form+img │   │ sanitize │   │  image   │   │   row    │   │  listing   │
    └──────────┘   └──────────┘   └──────────┘   └──────────┘   └────────────┘
         │                                            │
         ▼                                            ▼
    ShareResult(message)                   ShareResult(message), image removed

    Validation and duplicate-slug failures come back as a ShareResult.
    Storage and database faults (FileStorageError, DatabaseError) propagate
    to the global handlers as 500s. No step is retried.

Known gap:
    The image write and the row insert are not one transaction. A crash
    between them leaves an image file with no meal row.
"""

import logging
from typing import Mapping, Optional

import pydantic

from foodies.exceptions import ConstraintViolation, DatabaseError, ValidationError
from foodies.models.meal import Meal
from foodies.schemas.meal import MealForm, MealListResponse, MealResponse, ShareResult
from foodies.services.file_service import ImageService
from foodies.services.listing_cache import LISTING_PATH, ListingCache
from foodies.services.sanitizer import sanitize_text
from foodies.services.slugs import slugify
from foodies.store import MealStore

logger = logging.getLogger(__name__)


def _form_error(exc: pydantic.ValidationError) -> ValidationError:
    """Collapse pydantic's error list into the first user-facing message."""
    err = exc.errors()[0]
    field = str(err["loc"][0]) if err["loc"] else None
    reason = err.get("ctx", {}).get("error")
    if reason:
        message = f"Invalid input: {reason}"
    elif err["type"] == "missing":
        message = f"Invalid input: '{field}' is required."
    else:
        # e.g. EmailStr: "value is not a valid email address: ..."
        message = f"Invalid input: '{field}' {err['msg']}"
    return ValidationError(message=message, field=field, context={"errors": exc.error_count()})


class MealService:
    """
    Mutation and retrieval handlers for meals.

    Responsibilities:
        - share_meal(): validate → slug → sanitize → store image → insert → invalidate
        - get_all():    every meal, in insertion order
        - get_one():    one meal by slug, or None
    """

    def __init__(self, store: MealStore, images: ImageService, cache: ListingCache):
        self.store = store
        self.images = images
        self.cache = cache

    # ── Mutation Handler ──────────────────────────────────────────────────

    def validate_form(self, fields: Mapping[str, Optional[str]]) -> MealForm:
        """
        Turn raw form fields into a MealForm.

        Raises:
            ValidationError naming the first offending field.
        """
        try:
            return MealForm.model_validate(dict(fields))
        except pydantic.ValidationError as e:
            raise _form_error(e)

    async def share_meal(
        self,
        fields: Mapping[str, Optional[str]],
        image_filename: Optional[str] = None,
        image_content: Optional[bytes] = None,
        image_content_type: Optional[str] = None,
    ) -> ShareResult:
        """
        Create a meal from a share-form submission.

        Args:
            fields: Raw text fields keyed by form name (title, summary,
                    instructions, creator, creatorEmail). Missing keys and
                    None values count as blank.
            image_filename / image_content / image_content_type:
                    The uploaded file part; content None means no file sent.

        Returns:
            ShareResult with redirect_to="/meals" on success, or a
            user-facing message on validation / duplicate-slug failure.

        Raises:
            FileStorageError: the image could not be written.
            DatabaseError:    the store failed for a reason other than a duplicate.
        """
        # ── Validating ────────────────────────────────────────────────────
        try:
            form = self.validate_form(fields)
            extension = self.images.validate_upload(
                image_filename, image_content, image_content_type
            )
            slug = slugify(form.title)
            if not slug:
                raise ValidationError(
                    message="Invalid input: 'title' must contain at least one letter or digit.",
                    field="title",
                )
        except ValidationError as e:
            logger.info("Share rejected: %s", e.message)
            return ShareResult(message=e.message, field=e.field, error="validation_error")

        instructions = sanitize_text(form.instructions)

        # ── Persisting ────────────────────────────────────────────────────
        absolute_path, public_path = await self.images.store_image(image_content, slug, extension)

        meal = Meal(
            slug=slug,
            title=form.title,
            summary=form.summary,
            instructions=instructions,
            image=public_path,
            creator=form.creator,
            creator_email=form.creator_email,
        )

        try:
            await self.store.insert(meal)
        except ConstraintViolation as e:
            await self.images.cleanup_file(absolute_path)
            return ShareResult(message=e.message, field="title", error="constraint_violation")
        except DatabaseError:
            await self.images.cleanup_file(absolute_path)
            raise

        # ── Done ──────────────────────────────────────────────────────────
        self.cache.invalidate(LISTING_PATH)
        logger.info("Meal shared: %s by %s", slug, form.creator)
        return ShareResult(redirect_to=LISTING_PATH, slug=slug)

    # ── Retrieval Handler ─────────────────────────────────────────────────

    async def get_all(self) -> MealListResponse:
        meals = await self.store.list_all()
        return MealListResponse(
            meals=[MealResponse.from_meal(m) for m in meals],
            total_count=len(meals),
        )

    async def get_one(self, slug: str) -> Optional[MealResponse]:
        """The meal for `slug`, or None. Absence is not an error here."""
        meal = await self.store.get_by_slug(slug)
        if meal is None:
            return None
        return MealResponse.from_meal(meal)
