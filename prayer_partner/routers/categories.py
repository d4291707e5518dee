from fastapi import APIRouter, Depends

from prayer_partner.config import settings
from prayer_partner.dependencies import current_page, require_user
from prayer_partner.schemas.category import CategoryWrite
from prayer_partner.services.store import CreateResult, PrayerPartnerStore
from prayer_partner.utils.exceptions import AppException, NotFound
from prayer_partner.utils.response import page_info, page_offset, success_response

router = APIRouter(prefix="/categories", tags=["categories"])


async def _load_or_404(store: PrayerPartnerStore, category_id: int):
    category = await store.load_category(category_id)
    if category is None:
        raise NotFound("Category not found.")
    return category


@router.get("")
async def list_categories(page: int = Depends(current_page), store: PrayerPartnerStore = Depends(require_user)):
    per_page = settings.items_per_page
    number_of_items = await store.count_categories()
    categories = await store.paginated_categories(per_page, page_offset(page, per_page))

    return success_response(data={
        "categories": [c.model_dump() for c in categories],
        **page_info(page, number_of_items, per_page),
    })


@router.post("", status_code=201)
async def create_category(payload: CategoryWrite, store: PrayerPartnerStore = Depends(require_user)):
    if await store.exists_category_title(payload.title):
        raise AppException("The category title must be unique.", status_code=400)

    result = await store.create_category_result(payload.title)
    if result is CreateResult.DUPLICATE:
        raise AppException("The category title must be unique.", status_code=400)
    if result is not CreateResult.CREATED:
        raise AppException("Error creating category.", status_code=400)
    return success_response(message="The category has been created.")


@router.get("/{category_id}")
async def get_category(
    category_id: int,
    page: int = Depends(current_page),
    store: PrayerPartnerStore = Depends(require_user),
):
    category = await _load_or_404(store, category_id)
    per_page = settings.items_per_page
    number_of_items = len([r for r in category.prayer_requests if not r.answered])
    category.prayer_requests = await store.paginated_unanswered_prayer_requests(
        category_id, per_page, page_offset(page, per_page)
    )

    return success_response(data={
        "category": category.model_dump(),
        **page_info(page, number_of_items, per_page),
    })


@router.get("/{category_id}/answered")
async def get_answered(
    category_id: int,
    page: int = Depends(current_page),
    store: PrayerPartnerStore = Depends(require_user),
):
    category = await _load_or_404(store, category_id)
    per_page = settings.items_per_page
    number_of_items = len([r for r in category.prayer_requests if r.answered])
    category.prayer_requests = await store.paginated_answered_prayer_requests(
        category_id, per_page, page_offset(page, per_page)
    )

    return success_response(data={
        "category": category.model_dump(),
        **page_info(page, number_of_items, per_page),
    })


@router.post("/{category_id}/edit")
async def edit_category(
    category_id: int, payload: CategoryWrite, store: PrayerPartnerStore = Depends(require_user)
):
    await _load_or_404(store, category_id)
    if await store.exists_category_title(payload.title):
        raise AppException("The category title must be unique.", status_code=400)

    if not await store.set_category_title(category_id, payload.title):
        raise AppException("Error updating category title", status_code=400)
    return success_response(message="Category updated.")


@router.post("/{category_id}/delete")
async def delete_category(category_id: int, store: PrayerPartnerStore = Depends(require_user)):
    if not await store.delete_category(category_id):
        raise NotFound("Category not found.")
    return success_response(message="Category deleted.")
