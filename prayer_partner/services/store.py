"""Data access for one signed-in user.

A store is built per request and bound to that request's username. Every
category and prayer request query is filtered by the bound username, so rows
owned by someone else behave exactly like rows that do not exist: mutations
return False and loads return None.
"""
import asyncio
import enum
import logging

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.sql import Executable
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from prayer_partner.database import async_session
from prayer_partner.models.category import Category
from prayer_partner.models.prayer_request import PrayerRequest
from prayer_partner.models.user import User
from prayer_partner.schemas.category import CategoryResponse
from prayer_partner.schemas.prayer_request import PrayerRequestResponse
from prayer_partner.services.mirror import DocumentMirror, NullMirror, mirror as default_mirror
from prayer_partner.services.passwords import hash_password, verify_password

logger = logging.getLogger(__name__)

UNIQUE_VIOLATION_SQLSTATE = "23505"


class CreateResult(str, enum.Enum):
    CREATED = "created"
    DUPLICATE = "duplicate"
    MISSING_CATEGORY = "missing_category"


def is_unique_violation(error: IntegrityError) -> bool:
    orig = error.orig
    if getattr(orig, "sqlstate", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    if getattr(orig, "pgcode", None) == UNIQUE_VIOLATION_SQLSTATE:
        return True
    return "unique constraint" in str(orig).lower()


def _by_title():
    return func.lower(Category.title).asc(), Category.id.asc()


def _by_request_title():
    return func.lower(PrayerRequest.title).asc(), PrayerRequest.id.asc()


class PrayerPartnerStore:
    def __init__(
        self,
        username: str | None,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        mirror: DocumentMirror | NullMirror | None = None,
    ):
        self._username = username
        self._session_factory = session_factory or async_session
        self._mirror = mirror if mirror is not None else default_mirror

    @property
    def username(self) -> str | None:
        return self._username

    async def _fetch_all(self, statement: Executable) -> list:
        async with self._session_factory() as session:
            result = await session.execute(statement)
            return list(result.scalars().all())

    async def _fetch_one(self, statement: Executable):
        async with self._session_factory() as session:
            result = await session.execute(statement)
            return result.scalars().first()

    async def _modify(self, statement: Executable) -> bool:
        async with self._session_factory() as session:
            result = await session.execute(statement.execution_options(synchronize_session=False))
            await session.commit()
            return result.rowcount > 0

    # Accounts

    async def authenticate(self, username: str, password: str) -> bool:
        hashed = await self._fetch_one(select(User.password).where(User.username == username))
        if hashed is None:
            return False
        return await asyncio.to_thread(verify_password, password, hashed)

    async def create_account(self, username: str, password: str) -> bool:
        hashed = await asyncio.to_thread(hash_password, password)
        async with self._session_factory() as session:
            session.add(User(username=username, password=hashed))
            try:
                await session.commit()
            except IntegrityError as e:
                if is_unique_violation(e):
                    logger.info("Account creation rejected, username taken: %s", username)
                    return False
                raise
        logger.info("Account created: %s", username)
        return True

    async def delete_account(self, username: str | None = None) -> bool:
        if username is not None and username != self.username:
            return False
        deleted = await self._modify(delete(User).where(User.username == self.username))
        if deleted:
            logger.info("Account deleted: %s", self.username)
        return deleted

    async def edit_account(self, password: str) -> bool:
        hashed = await asyncio.to_thread(hash_password, password)
        return await self._modify(
            update(User).where(User.username == self.username).values(password=hashed)
        )

    # Categories

    async def exists_category_title(self, title: str) -> bool:
        found = await self._fetch_one(
            select(Category.id).where(Category.title == title, Category.username == self.username)
        )
        return found is not None

    async def create_category_result(self, title: str) -> CreateResult:
        async with self._session_factory() as session:
            session.add(Category(title=title, username=self.username))
            try:
                await session.commit()
            except IntegrityError as e:
                if is_unique_violation(e):
                    return CreateResult.DUPLICATE
                raise
        return CreateResult.CREATED

    async def create_category(self, title: str) -> bool:
        return await self.create_category_result(title) is CreateResult.CREATED

    async def load_category(self, category_id: int) -> CategoryResponse | None:
        category_row, request_rows = await asyncio.gather(
            self._fetch_one(
                select(Category).where(Category.id == category_id, Category.username == self.username)
            ),
            self._fetch_all(
                select(PrayerRequest).where(
                    PrayerRequest.category_id == category_id,
                    PrayerRequest.username == self.username,
                )
            ),
        )
        if category_row is None:
            return None

        category = CategoryResponse.model_validate(category_row)
        category.prayer_requests = [PrayerRequestResponse.model_validate(r) for r in request_rows]
        return category

    async def set_category_title(self, category_id: int, title: str) -> bool:
        return await self._modify(
            update(Category)
            .where(Category.id == category_id, Category.username == self.username)
            .values(title=title)
        )

    async def delete_category(self, category_id: int) -> bool:
        """Delete a category together with its prayer requests."""
        async with self._session_factory() as session:
            await session.execute(
                delete(PrayerRequest)
                .where(PrayerRequest.category_id == category_id, PrayerRequest.username == self.username)
                .execution_options(synchronize_session=False)
            )
            result = await session.execute(
                delete(Category)
                .where(Category.id == category_id, Category.username == self.username)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                await session.rollback()
                return False
            await session.commit()
        return True

    async def sorted_categories(self) -> list[CategoryResponse]:
        category_rows, request_rows = await asyncio.gather(
            self._fetch_all(
                select(Category).where(Category.username == self.username).order_by(*_by_title())
            ),
            self._fetch_all(select(PrayerRequest).where(PrayerRequest.username == self.username)),
        )

        by_category: dict[int, list[PrayerRequestResponse]] = {}
        for row in request_rows:
            by_category.setdefault(row.category_id, []).append(PrayerRequestResponse.model_validate(row))

        categories = []
        for row in category_rows:
            category = CategoryResponse.model_validate(row)
            category.prayer_requests = by_category.get(row.id, [])
            categories.append(category)
        return categories

    async def paginated_categories(self, limit: int, offset: int) -> list[CategoryResponse]:
        rows = await self._fetch_all(
            select(Category)
            .where(Category.username == self.username)
            .order_by(*_by_title())
            .limit(limit)
            .offset(offset)
        )
        return [CategoryResponse.model_validate(r) for r in rows]

    async def count_categories(self) -> int:
        async with self._session_factory() as session:
            result = await session.execute(
                select(func.count()).select_from(Category).where(Category.username == self.username)
            )
            return result.scalar_one()

    # Prayer requests

    async def create_prayer_request_result(self, category_id: int, title: str) -> CreateResult:
        async with self._session_factory() as session:
            owned = await session.execute(
                select(Category.id).where(Category.id == category_id, Category.username == self.username)
            )
            if owned.scalars().first() is None:
                return CreateResult.MISSING_CATEGORY

            session.add(PrayerRequest(title=title, category_id=category_id, username=self.username))
            await session.commit()

        self._mirror.schedule(self.username, category_id, title)
        return CreateResult.CREATED

    async def create_prayer_request(self, category_id: int, title: str) -> bool:
        return await self.create_prayer_request_result(category_id, title) is CreateResult.CREATED

    async def load_prayer_request(self, category_id: int, prayer_request_id: int) -> PrayerRequestResponse | None:
        row = await self._fetch_one(
            select(PrayerRequest).where(
                PrayerRequest.category_id == category_id,
                PrayerRequest.id == prayer_request_id,
                PrayerRequest.username == self.username,
            )
        )
        if row is None:
            return None
        return PrayerRequestResponse.model_validate(row)

    async def set_prayer_request_title(self, prayer_request_id: int, title: str) -> bool:
        return await self._modify(
            update(PrayerRequest)
            .where(PrayerRequest.id == prayer_request_id, PrayerRequest.username == self.username)
            .values(title=title)
        )

    async def answer_prayer_request(self, prayer_request_id: int) -> bool:
        return await self._modify(
            update(PrayerRequest)
            .where(PrayerRequest.id == prayer_request_id, PrayerRequest.username == self.username)
            .values(answered=True)
        )

    async def delete_prayer_request(self, prayer_request_id: int) -> bool:
        return await self._modify(
            delete(PrayerRequest).where(
                PrayerRequest.id == prayer_request_id,
                PrayerRequest.username == self.username,
            )
        )

    async def _prayer_requests(
        self,
        category_id: int,
        answered: bool,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[PrayerRequestResponse]:
        statement = (
            select(PrayerRequest)
            .where(
                PrayerRequest.category_id == category_id,
                PrayerRequest.username == self.username,
                PrayerRequest.answered == answered,
            )
            .order_by(*_by_request_title())
        )
        if limit is not None:
            statement = statement.limit(limit).offset(offset or 0)
        rows = await self._fetch_all(statement)
        return [PrayerRequestResponse.model_validate(r) for r in rows]

    async def unanswered_prayer_requests(self, category_id: int) -> list[PrayerRequestResponse]:
        return await self._prayer_requests(category_id, answered=False)

    async def answered_prayer_requests(self, category_id: int) -> list[PrayerRequestResponse]:
        return await self._prayer_requests(category_id, answered=True)

    async def paginated_unanswered_prayer_requests(
        self, category_id: int, limit: int, offset: int
    ) -> list[PrayerRequestResponse]:
        return await self._prayer_requests(category_id, answered=False, limit=limit, offset=offset)

    async def paginated_answered_prayer_requests(
        self, category_id: int, limit: int, offset: int
    ) -> list[PrayerRequestResponse]:
        return await self._prayer_requests(category_id, answered=True, limit=limit, offset=offset)
