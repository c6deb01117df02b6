"""Unit tests for content normalization across both content formats."""

from blog_cms.domain.content import (
    ContentBlock,
    EditorDocumentSource,
    LegacyBlockType,
    LegacyBlocksSource,
    normalize_content,
)


def _editor(*blocks: dict) -> dict:
    return {"time": 0, "blocks": list(blocks), "version": "2.28"}


def test_legacy_text_blocks_only_contribute_text():
    source = LegacyBlocksSource(
        [
            ContentBlock(type=LegacyBlockType.IMAGE, content="https://cdn/x.png", alt="x"),
            ContentBlock(type=LegacyBlockType.TEXT, content="First paragraph."),
            ContentBlock(type=LegacyBlockType.CODE, content="print('hi')"),
            ContentBlock(type=LegacyBlockType.TEXT, content="Second paragraph."),
        ]
    )
    assert source.extract_text() == "First paragraph. Second paragraph."
    assert source.extract_excerpt_candidate() == "First paragraph."


def test_editor_prefers_paragraph_over_earlier_quote():
    source = EditorDocumentSource(
        _editor(
            {"type": "quote", "data": {"text": "A quote"}},
            {"type": "paragraph", "data": {"text": "Body text"}},
        )
    )
    assert source.extract_excerpt_candidate() == "Body text"


def test_editor_falls_back_to_quote_then_list():
    quote_only = EditorDocumentSource(
        _editor(
            {"type": "list", "data": {"items": ["item one"]}},
            {"type": "quote", "data": {"text": "Wise words"}},
        )
    )
    assert quote_only.extract_excerpt_candidate() == "Wise words"

    list_only = EditorDocumentSource(
        _editor({"type": "list", "data": {"style": "unordered", "items": ["item one", "item two"]}})
    )
    assert list_only.extract_excerpt_candidate() == "item one"


def test_editor_nested_list_items_use_content():
    source = EditorDocumentSource(
        _editor({"type": "list", "data": {"items": [{"content": "nested", "items": []}]}})
    )
    assert source.extract_excerpt_candidate() == "nested"


def test_editor_header_counts_as_text():
    source = EditorDocumentSource(
        _editor(
            {"type": "header", "data": {"text": "Title", "level": 2}},
            {"type": "paragraph", "data": {"text": "Body"}},
            {"type": "quote", "data": {"text": "Not counted"}},
        )
    )
    assert source.extract_text() == "Title Body"
    assert source.extract_excerpt_candidate() == "Title"


def test_malformed_editor_blocks_are_skipped():
    source = EditorDocumentSource(
        {
            "blocks": [
                "garbage",
                {"type": "paragraph"},
                {"type": "paragraph", "data": {"text": 42}},
                {"type": "paragraph", "data": {"text": "Survivor"}},
            ]
        }
    )
    assert source.extract_excerpt_candidate() == "Survivor"
    assert source.extract_text() == "Survivor"


def test_missing_or_invalid_editor_document_yields_nothing():
    for document in (None, {}, {"blocks": "nope"}, []):
        source = EditorDocumentSource(document)
        assert source.extract_text() == ""
        assert source.extract_excerpt_candidate() == ""


def test_normalize_combines_both_sources():
    normalized = normalize_content(
        [ContentBlock(type=LegacyBlockType.TEXT, content="legacy words")],
        _editor({"type": "paragraph", "data": {"text": "editor words"}}),
    )
    assert normalized.full_text.split() == ["legacy", "words", "editor", "words"]
    assert normalized.excerpt_candidate == "legacy words"


def test_normalize_uses_editor_candidate_when_legacy_has_none():
    normalized = normalize_content(
        [ContentBlock(type=LegacyBlockType.IMAGE, content="https://cdn/x.png")],
        _editor({"type": "paragraph", "data": {"text": "from the editor"}}),
    )
    assert normalized.excerpt_candidate == "from the editor"


def test_normalize_empty_content():
    normalized = normalize_content([], None)
    assert normalized.full_text.strip() == ""
    assert normalized.excerpt_candidate == ""
