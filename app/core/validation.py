"""Input sanitization and validation shared by the messaging and call services."""

import re
from typing import Any

from app.core.exceptions import ValidationError

# Defense-in-depth only. This strips whole <script> and <iframe> blocks and
# nothing else: attribute payloads (onerror=, javascript: URLs), <object>,
# <svg> and friends pass through untouched. Output must still be escaped by
# whatever renders it.
_BLOCKED_ELEMENTS = re.compile(
    r"<(script|iframe)\b[^>]*>.*?</\1\s*>",
    re.IGNORECASE | re.DOTALL,
)


def sanitize_content(content: str | None) -> str:
    """Strip script/iframe blocks and surrounding whitespace."""
    if not content:
        return ""
    return _BLOCKED_ELEMENTS.sub("", content).strip()


def require_fields(**fields: Any) -> None:
    """Raise ValidationError naming the first absent field."""
    for name, value in fields.items():
        if value is None or value == "":
            raise ValidationError(f"Missing required field: {name}", field=name)


def pagination_offset(page: int, limit: int) -> int:
    """Offset for a 1-based page."""
    if page < 1:
        raise ValidationError("page must be a positive integer", field="page")
    if limit < 1:
        raise ValidationError("limit must be a positive integer", field="limit")
    return (page - 1) * limit
