"""
Foodies Backend — Meal SQLAlchemy Model
=========================================

What:  ORM model representing the `meals` table.
Why:   Maps Python objects to database rows for the MealStore queries.
Who:   Used by MealStore for insert/select and by Alembic for schema management.

Table Design Rationale:
    - id: INTEGER autoincrement; gives listings a stable insertion order
    - slug: UNIQUE; derived from the title once, never changed afterwards.
      The unique constraint is what turns a slug collision into
      IntegrityError → ConstraintViolation.
    - image: public path ("/images/<file>"), usable directly in an <img src>
    - every text column is NOT NULL; blank values are rejected before insert
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from foodies.database import Base


class Meal(Base):
    """
    A single shared recipe.

    Lifecycle:
        Created by MealService.share_meal through MealStore.insert.
        Never updated, never deleted.
    """

    __tablename__ = "meals"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    slug: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        unique=True,
        comment="URL-safe identifier derived from the title",
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)

    # Stored already escaped by the sanitizer
    instructions: Mapped[str] = mapped_column(Text, nullable=False)

    image: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Public path of the uploaded image, e.g. /images/big-burger-1a2b3c4d.jpg",
    )

    creator: Mapped[str] = mapped_column(Text, nullable=False)
    creator_email: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Meal(id={self.id}, slug='{self.slug}')>"
