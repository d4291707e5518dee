from pydantic_core import PydanticCustomError

MAX_TEXT_LENGTH = 70


def bounded_text(value: str, message: str, strip: bool = True) -> str:
    """Trim (optionally) and require 1..MAX_TEXT_LENGTH characters."""
    if strip:
        value = value.strip()
    if not 1 <= len(value) <= MAX_TEXT_LENGTH:
        raise PydanticCustomError("text_length", message)
    return value
