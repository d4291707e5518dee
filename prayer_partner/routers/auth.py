from fastapi import APIRouter, Depends, Request

from prayer_partner.dependencies import get_store, require_user
from prayer_partner.schemas.auth import CreateAccountRequest, EditAccountRequest, LoginRequest, UserResponse
from prayer_partner.services.store import PrayerPartnerStore
from prayer_partner.utils.exceptions import AppException
from prayer_partner.utils.response import success_response

router = APIRouter(prefix="/users", tags=["users"])


def _sign_in(request: Request, username: str) -> None:
    request.session["username"] = username
    request.session["signed_in"] = True


def _sign_out(request: Request) -> None:
    request.session.pop("username", None)
    request.session.pop("signed_in", None)


@router.post("/signin")
async def signin(payload: LoginRequest, request: Request, store: PrayerPartnerStore = Depends(get_store)):
    if not await store.authenticate(payload.username, payload.password):
        raise AppException("Invalid credentials.", status_code=400)

    _sign_in(request, payload.username)
    return success_response(data=UserResponse(username=payload.username).model_dump(), message="Welcome!")


@router.post("/signout")
async def signout(request: Request):
    _sign_out(request)
    return success_response(message="You have been signed out.")


@router.post("/createaccount", status_code=201)
async def create_account(
    payload: CreateAccountRequest, request: Request, store: PrayerPartnerStore = Depends(get_store)
):
    if not await store.create_account(payload.username, payload.password):
        raise AppException("Username already taken.", status_code=400)

    _sign_in(request, payload.username)
    return success_response(data=UserResponse(username=payload.username).model_dump(), message="New account created.")


@router.post("/edit")
async def edit_account(payload: EditAccountRequest, store: PrayerPartnerStore = Depends(require_user)):
    if not await store.edit_account(payload.password):
        raise AppException("error updating password.", status_code=400)
    return success_response(message="Password updated.")


@router.post("/delete")
async def delete_account(request: Request, store: PrayerPartnerStore = Depends(require_user)):
    if not await store.delete_account():
        raise AppException("error deleting account.", status_code=400)

    _sign_out(request)
    return success_response(message="Account deleted.")
