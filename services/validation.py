from typing import Dict, Optional, Tuple

import bleach

from models.post import PostRequest

TEXT_MAX_LENGTH = 300
NAME_MAX_LENGTH = 100
AVATAR_MAX_LENGTH = 500


def _has_markup(value: str) -> bool:
    """True when bleach would have to strip tags out of the value"""
    return bleach.clean(value, tags=set(), strip=True) != bleach.clean(value, tags=set())


def _check_optional(value: Optional[str], field: str, max_length: int) -> Optional[str]:
    if value is None:
        return None
    if len(value) > max_length:
        return f"{field.capitalize()} must be at most {max_length} characters"
    return None


def validate_post_input(data: PostRequest) -> Tuple[Dict[str, str], bool]:
    """
    Validate a post or comment payload.

    Returns:
        A mapping of field name to error message, and whether the payload is valid
    """
    errors: Dict[str, str] = {}

    text = data.text or ""
    if not text.strip():
        errors["text"] = "Text field is required"
    elif len(text) > TEXT_MAX_LENGTH:
        errors["text"] = f"Text must be at most {TEXT_MAX_LENGTH} characters"
    elif _has_markup(text):
        errors["text"] = "Text must not contain HTML markup"

    name_error = _check_optional(data.name, "name", NAME_MAX_LENGTH)
    if name_error is None and data.name and _has_markup(data.name):
        name_error = "Name must not contain HTML markup"
    if name_error:
        errors["name"] = name_error

    avatar_error = _check_optional(data.avatar, "avatar", AVATAR_MAX_LENGTH)
    if avatar_error:
        errors["avatar"] = avatar_error

    return errors, not errors
