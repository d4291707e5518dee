import pytest

from prayer_partner.config import settings
from prayer_partner.dependencies import MAX_OFFSET, current_page
from prayer_partner.utils.exceptions import AppException
from prayer_partner.utils.response import page_offset


def test_current_page_defaults_to_first():
    assert current_page(None) == 1


def test_current_page_accepts_last_addressable_page():
    last_page = MAX_OFFSET // settings.items_per_page + 1

    assert current_page(str(last_page)) == last_page
    assert page_offset(last_page, settings.items_per_page) <= MAX_OFFSET


@pytest.mark.parametrize("page", ["0", "-3", "two", str(MAX_OFFSET)])
def test_current_page_rejects(page):
    with pytest.raises(AppException) as excinfo:
        current_page(page)

    assert excinfo.value.status_code == 422
    assert excinfo.value.message == "Invalid page number."
