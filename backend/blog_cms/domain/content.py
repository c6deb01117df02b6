"""Content normalizer — extracts plain text from both article content formats.

An article carries up to two content representations:

* the legacy ordered block list (``text`` / ``image`` / ``video`` / ``code``)
* an Editor.js-style document ``{"blocks": [{"type": ..., "data": {...}}]}``

Both are wrapped in a :class:`ContentSource` so callers never branch on the
representation. Extraction is a fallback chain for the excerpt candidate and
additive for the full text.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any


class LegacyBlockType(str, Enum):
    """Block types of the legacy content format."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"
    CODE = "code"


@dataclass
class ContentBlock:
    """One fragment of legacy content."""

    type: LegacyBlockType
    content: str
    alt: str = ""
    order: int = 0


@dataclass(frozen=True)
class NormalizedContent:
    """Result of normalizing an article's content."""

    full_text: str
    excerpt_candidate: str


class ContentSource(ABC):
    """A content representation able to yield plain text."""

    @abstractmethod
    def extract_text(self) -> str:
        """Concatenated plain text used for read-time estimation."""
        ...

    @abstractmethod
    def extract_excerpt_candidate(self) -> str:
        """Text chosen to seed the excerpt, or ``""`` when none qualifies."""
        ...


class LegacyBlocksSource(ContentSource):
    """Legacy ordered block list."""

    def __init__(self, blocks: list[ContentBlock] | None):
        self._blocks = blocks or []

    def _text_blocks(self) -> list[ContentBlock]:
        return [
            b for b in self._blocks
            if b.type == LegacyBlockType.TEXT and isinstance(b.content, str)
        ]

    def extract_text(self) -> str:
        return " ".join(b.content for b in self._text_blocks())

    def extract_excerpt_candidate(self) -> str:
        text_blocks = self._text_blocks()
        return text_blocks[0].content if text_blocks else ""


class EditorDocumentSource(ContentSource):
    """Editor.js document. Only ``blocks[].type`` and ``blocks[].data`` are read."""

    _TEXT_TYPES = ("paragraph", "header")

    def __init__(self, document: dict[str, Any] | None):
        blocks = document.get("blocks") if isinstance(document, dict) else None
        self._blocks: list[dict[str, Any]] = [
            b for b in (blocks if isinstance(blocks, list) else [])
            if isinstance(b, dict) and isinstance(b.get("data"), dict)
        ]

    @staticmethod
    def _block_text(block: dict[str, Any]) -> str:
        text = block["data"].get("text")
        return text if isinstance(text, str) else ""

    @staticmethod
    def _first_list_item(block: dict[str, Any]) -> str | None:
        items = block["data"].get("items")
        if not isinstance(items, list) or not items:
            return None
        item = items[0]
        # Nested lists store items as {"content": ..., "items": [...]}
        if isinstance(item, dict):
            item = item.get("content", item.get("text", ""))
        return item if isinstance(item, str) else ""

    def extract_text(self) -> str:
        return " ".join(
            self._block_text(b) for b in self._blocks
            if b.get("type") in self._TEXT_TYPES and isinstance(b["data"].get("text"), str)
        )

    def extract_excerpt_candidate(self) -> str:
        for block in self._blocks:
            if block.get("type") in self._TEXT_TYPES and self._block_text(block):
                return self._block_text(block)
        for block in self._blocks:
            if block.get("type") == "quote" and self._block_text(block):
                return self._block_text(block)
        for block in self._blocks:
            if block.get("type") == "list":
                item = self._first_list_item(block)
                if item is not None:
                    return item
        return ""


def normalize_content(
    content_blocks: list[ContentBlock] | None,
    editor_data: dict[str, Any] | None,
) -> NormalizedContent:
    """Extract full text and the excerpt candidate from both representations.

    Full text is legacy text followed by editor text; both are always
    included. The candidate is taken from the first source that has one.
    """
    sources: list[ContentSource] = [
        LegacyBlocksSource(content_blocks),
        EditorDocumentSource(editor_data),
    ]
    full_text = " ".join(source.extract_text() for source in sources)

    candidate = ""
    for source in sources:
        candidate = source.extract_excerpt_candidate()
        if candidate:
            break

    return NormalizedContent(full_text=full_text, excerpt_candidate=candidate)
