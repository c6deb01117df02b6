"""Article categories — an explicit, versioned constant list.

Bump ``CATEGORY_SET_VERSION`` whenever ``CATEGORIES`` changes so clients
caching the list can detect the change.
"""

from blog_cms.domain.exceptions import DomainValidationError

CATEGORY_SET_VERSION = 1

CATEGORIES: tuple[str, ...] = (
    "UXUI",
    "UX",
    "UI",
    "Design",
    "Development",
    "AI",
    "Daily",
)


def validate_category(value: str | None) -> str | None:
    """Return ``value`` unchanged if it is a known category (or None)."""
    if value is None:
        return None
    if value not in CATEGORIES:
        raise DomainValidationError(
            "category", f"Invalid category. Must be one of: {', '.join(CATEGORIES)}"
        )
    return value
