"""
Foodies Backend — Meal Store Tests
====================================

What:  Tests for MealStore against a real (temporary) SQLite database.
Why:   The unique slug constraint lives in the schema; only a real database
       shows that a duplicate is rejected and earlier rows survive.
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from foodies.database import build_engine
from foodies.exceptions import ConstraintViolation, DatabaseError
from foodies.models.meal import Meal
from foodies.store import MealStore


def make_meal(slug="big-burger", title="Big Burger", **overrides):
    values = dict(
        slug=slug,
        title=title,
        summary="Tasty",
        instructions="Grill it",
        image=f"/images/{slug}.jpg",
        creator="Ann",
        creator_email="a@x.com",
    )
    values.update(overrides)
    return Meal(**values)


async def count_rows(session_factory) -> int:
    async with session_factory() as session:
        return await session.scalar(select(func.count()).select_from(Meal))


class TestMealStoreInsert:

    @pytest.mark.asyncio
    async def test_insert_then_get_by_slug_round_trip(self, store, session_factory):
        await store.insert(make_meal())

        async with session_factory() as session:
            found = await MealStore(session).get_by_slug("big-burger")

        assert found is not None
        assert found.id is not None
        assert (found.title, found.summary, found.instructions) == ("Big Burger", "Tasty", "Grill it")
        assert (found.image, found.creator, found.creator_email) == ("/images/big-burger.jpg", "Ann", "a@x.com")

    @pytest.mark.asyncio
    async def test_duplicate_slug_raises_constraint_violation(self, store, session_factory):
        await store.insert(make_meal(summary="first"))

        with pytest.raises(ConstraintViolation) as exc_info:
            await store.insert(make_meal(title="big burger!", summary="second"))

        assert exc_info.value.slug == "big-burger"
        assert await count_rows(session_factory) == 1

        async with session_factory() as session:
            kept = await MealStore(session).get_by_slug("big-burger")
        assert kept.summary == "first"

    @pytest.mark.asyncio
    async def test_store_usable_after_constraint_violation(self, store, session_factory):
        await store.insert(make_meal())
        with pytest.raises(ConstraintViolation):
            await store.insert(make_meal())

        await store.insert(make_meal(slug="spicy-curry", title="Spicy Curry"))
        assert await count_rows(session_factory) == 2


class TestMealStoreRead:

    @pytest.mark.asyncio
    async def test_get_by_unknown_slug_is_none(self, store):
        assert await store.get_by_slug("no-such-meal") is None

    @pytest.mark.asyncio
    async def test_list_all_empty(self, store):
        assert await store.list_all() == []

    @pytest.mark.asyncio
    async def test_list_all_in_insertion_order(self, store):
        for slug in ["zucchini-soup", "apple-pie", "mango-lassi"]:
            await store.insert(make_meal(slug=slug, title=slug))

        meals = await store.list_all()
        assert [m.slug for m in meals] == ["zucchini-soup", "apple-pie", "mango-lassi"]

    @pytest.mark.asyncio
    async def test_missing_table_raises_database_error(self, tmp_path):
        """A database file without the meals table."""
        engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
        try:
            async with AsyncSession(engine) as session:
                with pytest.raises(DatabaseError):
                    await MealStore(session).list_all()
        finally:
            await engine.dispose()
