# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application.
# =============================================================================

from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def parse_uuid(value: str | UUID) -> str | None:
    """
    Parse a value as a UUID and return its canonical string form.

    Returns None when the value isn't a well-formed UUID, so callers can
    treat a malformed identifier the same way as a missing record.

    Example:
        parse_uuid("550E8400-E29B-41D4-A716-446655440000")  # "550e8400-e29b-..."
        parse_uuid("not-an-id")  # None
    """
    if isinstance(value, UUID):
        return str(value)
    try:
        return str(UUID(str(value)))
    except (ValueError, AttributeError, TypeError):
        return None


# =============================================================================
# Query Utilities
# =============================================================================

def escape_like(term: str) -> str:
    """
    Escape LIKE/ILIKE wildcards so a search term matches literally.

    Example:
        escape_like("50%_off")  # "50\\%\\_off"
    """
    return (
        term.replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )


def contains_pattern(term: str) -> str:
    """
    Build an unanchored ILIKE pattern that matches ``term`` as a substring.

    PostgREST reads ``*`` as ``%`` and offers no escape for it, so each ``*``
    becomes the single-character wildcard ``_``. The pattern can then match a
    few extra titles; callers recheck rows with ``term.lower() in title.lower()``.

    Example:
        contains_pattern("a*b")  # "%a_b%"
    """
    return f"%{escape_like(term).replace('*', '_')}%"
