import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from prayer_partner.models.category import Category
from prayer_partner.models.prayer_request import PrayerRequest
from prayer_partner.models.user import User
from prayer_partner.services.passwords import hash_password

logger = logging.getLogger(__name__)

SEED_USER_USERNAME = "admin"
SEED_USER_PASSWORD = "secret"

SEED_CATEGORIES = {
    "Family": ["Health for Grandma", "Safe travels for Sam"],
    "Work": ["Wisdom in the new role"],
    "church": ["Youth retreat", "Building fund", "New members class"],
}
SEED_ANSWERED = {"Safe travels for Sam"}


async def seed_data(session: AsyncSession) -> None:
    result = await session.execute(select(User).where(User.username == SEED_USER_USERNAME))
    if result.scalars().first() is not None:
        return

    session.add(User(username=SEED_USER_USERNAME, password=hash_password(SEED_USER_PASSWORD)))
    await session.flush()

    for title, requests in SEED_CATEGORIES.items():
        category = Category(title=title, username=SEED_USER_USERNAME)
        session.add(category)
        await session.flush()
        for request_title in requests:
            session.add(PrayerRequest(
                title=request_title,
                category_id=category.id,
                username=SEED_USER_USERNAME,
                answered=request_title in SEED_ANSWERED,
            ))

    await session.commit()
    logger.info("Seeded demo account %r", SEED_USER_USERNAME)
