"""Derived-field calculator — slug, excerpt and read time."""

import math
import re
from dataclasses import dataclass
from typing import Any

from blog_cms.domain.content import ContentBlock, normalize_content

EXCERPT_LENGTH = 200
EXCERPT_SUFFIX = "..."
WORDS_PER_MINUTE = 200

_SLUG_DISALLOWED = re.compile(r"[^a-z0-9 -]")
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


@dataclass(frozen=True)
class DerivedFields:
    """Excerpt and read time computed from one content snapshot."""

    excerpt: str
    read_time: int


def slugify(title: str) -> str:
    """Build a URL-safe slug: ``"Hello, World!"`` → ``"hello-world"``."""
    slug = _SLUG_DISALLOWED.sub("", title.lower())
    slug = _WHITESPACE.sub("-", slug)
    slug = _HYPHENS.sub("-", slug)
    return slug.strip("-")


def build_excerpt(candidate: str) -> str:
    """First 200 characters plus the ellipsis marker, or ``""`` for no candidate.

    The marker is appended even when nothing was cut off.
    """
    if not candidate:
        return ""
    return candidate[:EXCERPT_LENGTH] + EXCERPT_SUFFIX


def count_words(text: str) -> int:
    return len(text.split())


def estimate_read_time(full_text: str) -> int:
    """Minutes to read at 200 words per minute, rounded up (0 for no words)."""
    return math.ceil(count_words(full_text) / WORDS_PER_MINUTE)


def derive_fields(
    content_blocks: list[ContentBlock] | None,
    editor_data: dict[str, Any] | None,
) -> DerivedFields:
    normalized = normalize_content(content_blocks, editor_data)
    return DerivedFields(
        excerpt=build_excerpt(normalized.excerpt_candidate),
        read_time=estimate_read_time(normalized.full_text),
    )
