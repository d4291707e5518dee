import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Depends, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware

from prayer_partner.config import settings
from prayer_partner.database import create_tables, async_session
from prayer_partner.dependencies import verify_api_key
from prayer_partner.seed import seed_data
from prayer_partner.services.mirror import mirror
from prayer_partner.routers.auth import router as users_router
from prayer_partner.routers.categories import router as categories_router
from prayer_partner.routers.prayer_requests import router as prayer_requests_router
from prayer_partner.utils.exceptions import register_exception_handlers

SERVICE_NAME = "prayer-partner"
VERSION = "0.1.0"

logger = logging.getLogger("prayer_partner.access")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    await create_tables()
    if settings.seed_demo_data:
        async with async_session() as session:
            await seed_data(session)
    logger.info("Prayer Partner started")
    yield
    await mirror.close()


app = FastAPI(
    title="Prayer Partner API",
    description="Organize prayer requests into categories",
    version=VERSION,
    lifespan=lifespan,
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        return response
    finally:
        duration_ms = (time.perf_counter() - started) * 1000
        client = request.client.host if request.client else "-"
        logger.info(
            "%s %s %s %d %.1fms", client, request.method, request.url.path, status_code, duration_ms
        )


app.add_middleware(
    SessionMiddleware,
    secret_key=settings.secret_key,
    session_cookie=settings.session_cookie,
    max_age=settings.session_max_age,
    https_only=False,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

_api_key_dep = [Depends(verify_api_key)]

app.include_router(users_router, prefix="/api/v1", dependencies=_api_key_dep)
app.include_router(categories_router, prefix="/api/v1", dependencies=_api_key_dep)
app.include_router(prayer_requests_router, prefix="/api/v1", dependencies=_api_key_dep)


@app.get("/health")
async def health_check():
    return {"status": "success", "data": {"service": SERVICE_NAME, "version": VERSION}, "message": None}
