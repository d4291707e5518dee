import os
import tempfile

# Settings are read at import time, so configure them before the app loads.
_DB_DIR = tempfile.mkdtemp(prefix="prayer_partner_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/api.db"
os.environ["MONGODB_URL"] = ""
os.environ["API_KEY"] = ""
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret"

import uuid  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from prayer_partner.database import build_engine, build_sessionmaker, create_tables  # noqa: E402
from prayer_partner.services.store import PrayerPartnerStore  # noqa: E402


@pytest.fixture(autouse=True, scope="session")
def setup_test_db():
    import asyncio

    from prayer_partner.config import settings
    settings.api_key = ""

    asyncio.run(create_tables())


class RecordingMirror:
    def __init__(self):
        self.writes = []

    def schedule(self, username, category_id, title):
        self.writes.append((username, category_id, title))


@pytest.fixture
def mirror():
    return RecordingMirror()


@pytest_asyncio.fixture
async def session_factory(tmp_path):
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'store.db'}")
    await create_tables(engine)
    yield build_sessionmaker(engine)
    await engine.dispose()


@pytest.fixture
def store_for(session_factory, mirror):
    def _build(username):
        return PrayerPartnerStore(username, session_factory=session_factory, mirror=mirror)
    return _build


@pytest_asyncio.fixture
async def alice(store_for):
    store = store_for("alice")
    assert await store.create_account("alice", "alice-password")
    return store


@pytest_asyncio.fixture
async def bob(store_for):
    store = store_for("bob")
    assert await store.create_account("bob", "bob-password")
    return store


@pytest_asyncio.fixture
async def client():
    from prayer_partner.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def signed_in(client):
    username = f"user-{uuid.uuid4().hex[:8]}"
    response = await client.post(
        "/api/v1/users/createaccount",
        json={"username": username, "password": "password123"},
    )
    assert response.status_code == 201
    return client
