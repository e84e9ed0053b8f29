"""Search filter normalization."""

PAGE_SIZE = 100

# Highest page whose offset still fits a signed 64-bit integer.
MAX_PAGE = (2**63 - 1) // PAGE_SIZE


def to_like_pattern(value: str | None) -> str | None:
    """Turn a raw filter value into an upper-cased containment pattern.

    The value is neither trimmed nor escaped: ``%`` and ``_`` typed by
    the user keep their LIKE meaning.

    Args:
        value: Raw query parameter.

    Returns:
        ``"%VALUE%"``, or None when the value is None or empty.
    """
    if not value:
        return None
    return f"%{value.upper()}%"


def page_offset(page: int, page_size: int = PAGE_SIZE) -> int:
    """Calculate the row offset for a 1-based page number.

    Pages below 1 are clamped so the offset is never negative.
    """
    return max(page - 1, 0) * page_size
