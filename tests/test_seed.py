"""Tests for the sample-data seeder."""

import pytest

from foodies.seed import SAMPLE_IMAGES_DIR, SAMPLE_MEALS, build_meal, copy_sample_images, seed
from foodies.store import MealStore


class TestSeed:

    def test_build_meal_derives_slug_and_image(self):
        meal = build_meal(SAMPLE_MEALS[0])

        assert meal.slug == "juicy-cheese-burger"
        assert meal.image == "/images/burger.jpg"
        assert meal.creator_email == "johndoe@example.com"

    def test_sample_slugs_are_unique(self):
        slugs = [build_meal(m).slug for m in SAMPLE_MEALS]
        assert len(set(slugs)) == len(SAMPLE_MEALS)

    @pytest.mark.asyncio
    async def test_seed_inserts_every_sample(self, db_engine, session_factory, images_dir):
        added = await seed(bind=db_engine, session_factory=session_factory, images_dir=images_dir)

        assert added == len(SAMPLE_MEALS) == 7
        async with session_factory() as session:
            meals = await MealStore(session).list_all()
        assert [m.title for m in meals] == [m["title"] for m in SAMPLE_MEALS]

    @pytest.mark.asyncio
    async def test_seed_twice_skips_existing(self, db_engine, session_factory, images_dir):
        await seed(bind=db_engine, session_factory=session_factory, images_dir=images_dir)

        assert await seed(bind=db_engine, session_factory=session_factory, images_dir=images_dir) == 0
        async with session_factory() as session:
            assert len(await MealStore(session).list_all()) == 7

    @pytest.mark.asyncio
    async def test_seed_copies_every_sample_image(self, db_engine, session_factory, images_dir):
        await seed(bind=db_engine, session_factory=session_factory, images_dir=images_dir)

        async with session_factory() as session:
            meals = await MealStore(session).list_all()
        for meal in meals:
            filename = meal.image.rsplit("/", 1)[1]
            assert (images_dir / filename).read_bytes() == (SAMPLE_IMAGES_DIR / filename).read_bytes()

    def test_copy_keeps_existing_images(self, images_dir):
        images_dir.mkdir(parents=True)
        (images_dir / "burger.jpg").write_bytes(b"my own burger")

        copied = copy_sample_images(images_dir)

        assert copied == len(SAMPLE_MEALS) - 1
        assert (images_dir / "burger.jpg").read_bytes() == b"my own burger"
        assert copy_sample_images(images_dir) == 0
