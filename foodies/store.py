"""
Foodies Backend — Meal Store
==============================

What:  The persistence layer for meals: list all, get by slug, insert.
Why:   Keeps SQL out of the services. Handlers receive a MealStore instance
       (per-request, via FastAPI Depends) instead of reaching for a global
       connection, so tests can hand them a store over a throwaway database.
How:   Thin wrapper over an AsyncSession. Each operation is a single
       statement; insert() commits immediately so a failed insert can never
       roll back an earlier, successful one.

Query plan:
    list_all     SELECT * FROM meals ORDER BY id
    get_by_slug  SELECT * FROM meals WHERE slug = :slug   (unique index)
    insert       INSERT INTO meals (...) VALUES (...)      (unique slug)
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from foodies.exceptions import ConstraintViolation, DatabaseError
from foodies.models.meal import Meal

logger = logging.getLogger(__name__)


class MealStore:
    """
    Read/insert access to the `meals` table.

    No update or delete: a meal is immutable once shared.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> List[Meal]:
        """All meals in insertion order."""
        try:
            result = await self.session.execute(select(Meal).order_by(Meal.id))
            return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing meals: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve meals. Please try again.",
                context={"error_type": type(e).__name__},
            )

    async def get_by_slug(self, slug: str) -> Optional[Meal]:
        """The meal with `slug`, or None if no such meal exists."""
        try:
            result = await self.session.execute(select(Meal).where(Meal.slug == slug))
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching meal %s: %s", slug, str(e))
            raise DatabaseError(
                message="Could not retrieve the meal. Please try again.",
                context={"slug": slug},
            )

    async def insert(self, meal: Meal) -> Meal:
        """
        Persist a new meal and commit.

        Raises:
            ConstraintViolation: a meal with the same slug already exists.
                                 Nothing is written; earlier rows are untouched.
            DatabaseError:       any other database failure.
        """
        slug = meal.slug
        self.session.add(meal)
        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning("Duplicate slug rejected: %s", slug)
            raise ConstraintViolation(slug=slug, context={"db_error": str(e.orig)})
        except SQLAlchemyError as e:
            await self.session.rollback()
            logger.error("Database error inserting meal %s: %s", slug, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save your meal. Please try again.",
                context={"slug": slug, "error_type": type(e).__name__},
            )

        logger.info("Meal inserted: %s (id=%s)", meal.slug, meal.id)
        return meal
