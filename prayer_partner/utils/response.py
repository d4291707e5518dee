from math import ceil
from typing import Any


def success_response(data: Any = None, message: str | None = None) -> dict:
    return {"status": "success", "data": data, "message": message}


def error_response(message: str, data: Any = None) -> dict:
    return {"status": "error", "data": data, "message": message}


def page_offset(page: int, per_page: int) -> int:
    return (page - 1) * per_page


def page_info(current_page: int, number_of_items: int, items_per_page: int) -> dict:
    return {
        "current_page": current_page,
        "number_of_items": number_of_items,
        "items_per_page": items_per_page,
        "total_pages": max(1, ceil(number_of_items / items_per_page)),
    }
