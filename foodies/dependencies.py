"""
Foodies Backend — Request-Scoped Dependencies
===============================================

What:  FastAPI dependency providers for the store, the image service, the
       listing cache and the MealService that bundles them.
Why:   Handlers receive their collaborators explicitly; tests replace any of
       them with app.dependency_overrides instead of patching module globals.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from foodies.database import get_db_session
from foodies.services.file_service import ImageService, image_service
from foodies.services.listing_cache import ListingCache, listing_cache
from foodies.services.meal_service import MealService
from foodies.store import MealStore


def get_meal_store(db: AsyncSession = Depends(get_db_session)) -> MealStore:
    """MealStore bound to this request's session."""
    return MealStore(db)


def get_image_service() -> ImageService:
    return image_service


def get_listing_cache() -> ListingCache:
    return listing_cache


def get_meal_service(
    store: MealStore = Depends(get_meal_store),
    images: ImageService = Depends(get_image_service),
    cache: ListingCache = Depends(get_listing_cache),
) -> MealService:
    return MealService(store=store, images=images, cache=cache)
