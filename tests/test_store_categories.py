import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError

from prayer_partner.models.category import Category
from prayer_partner.models.prayer_request import PrayerRequest
from prayer_partner.services.store import CreateResult


async def _category_id(store, title):
    for category in await store.sorted_categories():
        if category.title == title:
            return category.id
    raise AssertionError(f"no category {title!r}")


@pytest.mark.asyncio
async def test_create_category_twice(alice, session_factory):
    assert await alice.create_category("Family") is True
    assert await alice.create_category("Family") is False

    async with session_factory() as session:
        count = (await session.execute(
            select(func.count()).select_from(Category).where(Category.title == "Family")
        )).scalar_one()
    assert count == 1


@pytest.mark.asyncio
async def test_create_category_result_reports_duplicate(alice):
    assert await alice.create_category_result("Work") is CreateResult.CREATED
    assert await alice.create_category_result("Work") is CreateResult.DUPLICATE


@pytest.mark.asyncio
async def test_same_title_allowed_for_different_users(alice, bob):
    assert await alice.create_category("Family") is True
    assert await bob.create_category("Family") is True


@pytest.mark.asyncio
async def test_title_uniqueness_is_case_sensitive(alice):
    assert await alice.create_category("family") is True
    assert await alice.create_category("Family") is True
    assert await alice.exists_category_title("FAMILY") is False


@pytest.mark.asyncio
async def test_create_category_for_unknown_user_propagates(store_for):
    with pytest.raises(IntegrityError):
        await store_for("ghost").create_category("Family")


@pytest.mark.asyncio
async def test_exists_category_title_scoped_to_user(alice, bob):
    await alice.create_category("Family")
    assert await alice.exists_category_title("Family") is True
    assert await bob.exists_category_title("Family") is False


@pytest.mark.asyncio
async def test_sorted_categories_case_insensitive(alice):
    for title in ["banana", "Apple", "cherry"]:
        await alice.create_category(title)

    titles = [c.title for c in await alice.sorted_categories()]
    assert titles == ["Apple", "banana", "cherry"]


@pytest.mark.asyncio
async def test_sorted_categories_attach_prayer_requests(alice):
    await alice.create_category("Family")
    await alice.create_category("Work")
    family_id = await _category_id(alice, "Family")
    await alice.create_prayer_request(family_id, "Health")
    await alice.create_prayer_request(family_id, "Travel")

    family, work = await alice.sorted_categories()
    assert sorted(r.title for r in family.prayer_requests) == ["Health", "Travel"]
    assert all(r.category_id == family.id for r in family.prayer_requests)
    assert work.prayer_requests == []


@pytest.mark.asyncio
async def test_pagination_partitions_sorted_categories(alice):
    for title in ["g", "B", "e", "a", "F", "c", "D"]:
        await alice.create_category(title)

    first = await alice.paginated_categories(5, 0)
    second = await alice.paginated_categories(5, 5)

    assert len(first) == 5
    assert len(second) == 2
    assert {c.id for c in first}.isdisjoint({c.id for c in second})
    assert [c.id for c in first + second] == [c.id for c in await alice.sorted_categories()]
    assert [c.title for c in first + second] == ["a", "B", "c", "D", "e", "F", "g"]


@pytest.mark.asyncio
async def test_paginated_categories_past_end(alice):
    await alice.create_category("Only")
    assert await alice.paginated_categories(5, 5) == []


@pytest.mark.asyncio
async def test_count_categories(alice, bob):
    await alice.create_category("One")
    await alice.create_category("Two")
    await bob.create_category("Three")
    assert await alice.count_categories() == 2


@pytest.mark.asyncio
async def test_load_category_with_requests(alice):
    await alice.create_category("Family")
    category_id = await _category_id(alice, "Family")
    await alice.create_prayer_request(category_id, "Health")

    category = await alice.load_category(category_id)
    assert category.title == "Family"
    assert category.username == "alice"
    assert [r.title for r in category.prayer_requests] == ["Health"]


@pytest.mark.asyncio
async def test_load_category_missing(alice):
    assert await alice.load_category(9999) is None


@pytest.mark.asyncio
async def test_categories_invisible_to_other_users(alice, bob):
    await alice.create_category("Family")
    category_id = await _category_id(alice, "Family")

    assert await bob.load_category(category_id) is None
    assert await bob.sorted_categories() == []
    assert await bob.paginated_categories(5, 0) == []
    assert await bob.set_category_title(category_id, "Hijacked") is False
    assert await bob.delete_category(category_id) is False

    category = await alice.load_category(category_id)
    assert category.title == "Family"


@pytest.mark.asyncio
async def test_set_category_title(alice):
    await alice.create_category("Famly")
    category_id = await _category_id(alice, "Famly")

    assert await alice.set_category_title(category_id, "Family") is True
    assert (await alice.load_category(category_id)).title == "Family"


@pytest.mark.asyncio
async def test_delete_category_cascades_to_prayer_requests(alice, session_factory):
    await alice.create_category("Family")
    category_id = await _category_id(alice, "Family")
    await alice.create_prayer_request(category_id, "Health")
    await alice.create_prayer_request(category_id, "Travel")

    assert await alice.delete_category(category_id) is True
    assert await alice.load_category(category_id) is None
    assert await alice.delete_category(category_id) is False

    async with session_factory() as session:
        remaining = (await session.execute(
            select(func.count()).select_from(PrayerRequest).where(PrayerRequest.category_id == category_id)
        )).scalar_one()
    assert remaining == 0
