from fastapi import Depends, Header, Query, Request

from prayer_partner.config import settings
from prayer_partner.services.store import PrayerPartnerStore
from prayer_partner.utils.exceptions import AppException, SignInRequired


async def verify_api_key(x_api_key: str = Header(default="")) -> None:
    if not settings.api_key:
        return
    if x_api_key != settings.api_key:
        raise AppException("Invalid or missing API key", status_code=403)


def get_store(request: Request) -> PrayerPartnerStore:
    return PrayerPartnerStore(request.session.get("username"))


def require_user(request: Request, store: PrayerPartnerStore = Depends(get_store)) -> PrayerPartnerStore:
    if not request.session.get("signed_in") or store.username is None:
        raise SignInRequired()
    return store


# Largest OFFSET a 64-bit SQL integer can hold.
MAX_OFFSET = 2**63 - 1


def current_page(page: str | None = Query(default=None)) -> int:
    if page is None:
        return 1
    try:
        number = int(page)
    except ValueError:
        number = 0
    last_page = MAX_OFFSET // settings.items_per_page + 1
    if number < 1 or number > last_page:
        raise AppException("Invalid page number.", status_code=422)
    return number
