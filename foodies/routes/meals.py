"""
Foodies Backend — Meal Route Handlers
=======================================

What:  GET /meals (listing), GET /meals/{slug} (detail), POST /meals/share (form).
Why:   The presentation boundary: maps MealService results onto HTTP.
How:   Routes stay thin. They read the request, call the service, and pick
       the status code; they never validate fields or touch SQL.

Caching Strategy:
    - GET /meals:        served from ListingCache when warm (X-Cache: HIT);
                         a successful share invalidates it
    - GET /meals/{slug}: Cache-Control max-age, meals never change after creation
    - POST /meals/share: never cached
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile
from fastapi.responses import JSONResponse, RedirectResponse

from foodies.dependencies import get_listing_cache, get_meal_service
from foodies.exceptions import NotFoundError
from foodies.schemas.meal import (
    ErrorResponse,
    FormErrorResponse,
    MealListResponse,
    MealResponse,
)
from foodies.services.listing_cache import LISTING_PATH, ListingCache
from foodies.services.meal_service import MealService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/meals", tags=["Meals"])


@router.get(
    "",
    response_model=MealListResponse,
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all shared meals",
)
async def list_meals(
    response: Response,
    service: MealService = Depends(get_meal_service),
    cache: ListingCache = Depends(get_listing_cache),
) -> MealListResponse:
    """
    Every meal in insertion order.

    The payload is cached under "/meals" until the next successful share.
    X-Cache tells clients (and tests) whether the store was queried.
    """
    listing = cache.get(LISTING_PATH)
    if listing is None:
        # A share committing during get_all() makes this payload stale
        generation = cache.generation(LISTING_PATH)
        listing = await service.get_all()
        cache.set(LISTING_PATH, listing, generation)
        response.headers["X-Cache"] = "MISS"
    else:
        response.headers["X-Cache"] = "HIT"

    response.headers["X-Total-Count"] = str(listing.total_count)
    return listing


@router.get(
    "/{slug}",
    response_model=MealResponse,
    responses={
        404: {"description": "Meal not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single meal by slug",
)
async def get_meal(
    slug: str,
    response: Response,
    service: MealService = Depends(get_meal_service),
) -> MealResponse:
    meal = await service.get_one(slug)
    if meal is None:
        raise NotFoundError(resource="meal", resource_id=slug)

    response.headers["Cache-Control"] = "public, max-age=3600"
    return meal


@router.post(
    "/share",
    status_code=303,
    response_class=RedirectResponse,
    responses={
        303: {"description": "Meal shared; redirect to the listing"},
        400: {"description": "Invalid form input", "model": FormErrorResponse},
        409: {"description": "A meal with this slug already exists", "model": FormErrorResponse},
        429: {"description": "Rate limit exceeded", "model": ErrorResponse},
    },
    summary="Share a new meal",
    description=(
        "Multipart form with title, summary, instructions, creator, creatorEmail "
        "and an image file. Redirects to /meals on success."
    ),
)
async def share_meal(
    title: Optional[str] = Form(default=None),
    summary: Optional[str] = Form(default=None),
    instructions: Optional[str] = Form(default=None),
    creator: Optional[str] = Form(default=None),
    creator_email: Optional[str] = Form(default=None, alias="creatorEmail"),
    creator_email_snake: Optional[str] = Form(default=None, alias="creator_email"),
    image: Optional[UploadFile] = File(default=None),
    service: MealService = Depends(get_meal_service),
):
    """
    Validate and persist a shared meal.

    Every field is optional at the HTTP level so that a missing field is
    reported by MealService as a form message (400), not as FastAPI's 422.

    Returns:
        303 RedirectResponse to /meals on success
        400 {"message", "field"} on invalid input
        409 {"message", "field"} on a duplicate slug
    """
    fields = {
        "title": title,
        "summary": summary,
        "instructions": instructions,
        "creator": creator,
        "creatorEmail": creator_email if creator_email is not None else creator_email_snake,
    }

    image_content: Optional[bytes] = None
    image_filename: Optional[str] = None
    image_content_type: Optional[str] = None
    if image is not None:
        try:
            image_content = await image.read()
            image_filename = image.filename
            image_content_type = image.content_type
        finally:
            await image.close()

    logger.info(
        "Received share request: title=%r, image=%s (%d bytes)",
        title,
        image_filename or "none",
        len(image_content or b""),
    )

    result = await service.share_meal(
        fields,
        image_filename=image_filename,
        image_content=image_content,
        image_content_type=image_content_type,
    )

    if result.ok:
        return RedirectResponse(url=result.redirect_to, status_code=303)

    status = 409 if result.error == "constraint_violation" else 400
    return JSONResponse(
        status_code=status,
        content=FormErrorResponse(message=result.message, field=result.field).model_dump(),
    )
