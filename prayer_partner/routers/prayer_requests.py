from fastapi import APIRouter, Depends

from prayer_partner.dependencies import require_user
from prayer_partner.schemas.prayer_request import PrayerRequestCreate, PrayerRequestUpdate
from prayer_partner.services.store import CreateResult, PrayerPartnerStore
from prayer_partner.utils.exceptions import NotFound
from prayer_partner.utils.response import success_response

router = APIRouter(prefix="/categories/{category_id}/prayerrequests", tags=["prayer requests"])


@router.post("", status_code=201)
async def create_prayer_request(
    category_id: int, payload: PrayerRequestCreate, store: PrayerPartnerStore = Depends(require_user)
):
    result = await store.create_prayer_request_result(category_id, payload.title)
    if result is CreateResult.MISSING_CATEGORY:
        raise NotFound("Category not found.")
    return success_response(message="Prayer request added.")


@router.get("/{prayer_request_id}")
async def get_prayer_request(
    category_id: int, prayer_request_id: int, store: PrayerPartnerStore = Depends(require_user)
):
    prayer_request = await store.load_prayer_request(category_id, prayer_request_id)
    if prayer_request is None:
        raise NotFound("Prayer request not found.")
    return success_response(data=prayer_request.model_dump())


@router.post("/{prayer_request_id}/edit")
async def edit_prayer_request(
    category_id: int,
    prayer_request_id: int,
    payload: PrayerRequestUpdate,
    store: PrayerPartnerStore = Depends(require_user),
):
    if await store.load_prayer_request(category_id, prayer_request_id) is None:
        raise NotFound("Prayer request not found.")
    if not await store.set_prayer_request_title(prayer_request_id, payload.title):
        raise NotFound("Prayer request not found.")
    return success_response(message="Prayer request title updated.")


@router.post("/{prayer_request_id}/answer")
async def answer_prayer_request(
    category_id: int, prayer_request_id: int, store: PrayerPartnerStore = Depends(require_user)
):
    if not await store.answer_prayer_request(prayer_request_id):
        raise NotFound("Prayer request not found.")
    return success_response(message="The prayer request has been moved to 'Answered Prayer Requests.'")


@router.post("/{prayer_request_id}/delete")
async def delete_prayer_request(
    category_id: int, prayer_request_id: int, store: PrayerPartnerStore = Depends(require_user)
):
    if not await store.delete_prayer_request(prayer_request_id):
        raise NotFound("Prayer request not found.")
    return success_response(message="The prayer request has been deleted.")


@router.post("/{prayer_request_id}/deleteanswered")
async def delete_answered_prayer_request(
    category_id: int, prayer_request_id: int, store: PrayerPartnerStore = Depends(require_user)
):
    if not await store.delete_prayer_request(prayer_request_id):
        raise NotFound("Prayer request not found.")
    return success_response(message="The answered prayer request has been deleted.")
