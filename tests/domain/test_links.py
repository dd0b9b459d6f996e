"""Tests for link extraction — the four kinds, web links, boundaries."""

from __future__ import annotations

import pytest

from linkconv.domain.links import LinkRecord, extract_links
from linkconv.domain.types import LinkKind

# ---------------------------------------------------------------------------
# Plain links
# ---------------------------------------------------------------------------


class TestPlainWiki:
    def test_single_link(self) -> None:
        links = extract_links("This relates to [[Transformer Architectures]].", "notes/a.md")
        assert len(links) == 1
        assert links[0] == LinkRecord(
            kind=LinkKind.WIKI,
            raw_match="[[Transformer Architectures]]",
            target_text="Transformer Architectures",
            alias_or_block_ref="",
            source_file_path="notes/a.md",
            start=16,
            end=45,
        )

    def test_alias_after_first_pipe(self) -> None:
        links = extract_links("[[Note|the original|note]]")
        assert links[0].target_text == "Note"
        assert links[0].alias_or_block_ref == "the original|note"

    def test_empty_target_is_not_a_link(self) -> None:
        assert extract_links("[[]] and [[|alias]]") == []

    def test_unclosed_is_text(self) -> None:
        assert extract_links("an [[unclosed link") == []

    def test_bracket_inside_body_is_text(self) -> None:
        assert extract_links("[[a]b]]") == []


class TestPlainMarkdown:
    def test_single_link(self) -> None:
        links = extract_links("Read [the guide](docs/Guide.md) first.")
        assert len(links) == 1
        assert links[0].kind == LinkKind.MARKDOWN
        assert links[0].target_text == "docs/Guide.md"
        assert links[0].alias_or_block_ref == "the guide"
        assert links[0].raw_match == "[the guide](docs/Guide.md)"

    def test_empty_alias(self) -> None:
        links = extract_links("[](Note.md)")
        assert links[0].kind == LinkKind.MARKDOWN
        assert links[0].alias_or_block_ref == ""

    def test_empty_target_is_not_a_link(self) -> None:
        assert extract_links("[x]()") == []

    def test_requires_adjacent_paren(self) -> None:
        assert extract_links("[x] (Note.md)") == []

    def test_single_brackets_are_text(self) -> None:
        assert extract_links("This has [single brackets] but no links.") == []

    def test_alias_may_contain_open_bracket(self) -> None:
        links = extract_links("[a [b](c)")
        assert links[0].alias_or_block_ref == "a [b"
        assert links[0].target_text == "c"

    def test_image_embed_keeps_bang_outside_span(self) -> None:
        links = extract_links("![alt](img.png)")
        assert links[0].start == 1
        assert links[0].raw_match == "[alt](img.png)"

    def test_in_page_heading_is_plain(self) -> None:
        links = extract_links("[jump](#Heading)")
        assert links[0].kind == LinkKind.MARKDOWN
        assert links[0].target_text == "#Heading"


# ---------------------------------------------------------------------------
# Transclusions
# ---------------------------------------------------------------------------


class TestTransclusions:
    def test_wiki_heading_is_transclusion(self) -> None:
        links = extract_links("[[Note#Heading]]")
        assert links[0].kind == LinkKind.WIKI_TRANSCLUSION
        assert links[0].target_text == "Note"
        assert links[0].alias_or_block_ref == "Heading"

    def test_wiki_block_ref(self) -> None:
        links = extract_links("![[Note#^abc123]]")
        assert links[0].kind == LinkKind.WIKI_TRANSCLUSION
        assert links[0].alias_or_block_ref == "^abc123"

    def test_wiki_ref_runs_to_closing_brackets(self) -> None:
        links = extract_links("[[Note#Head|Alias]]")
        assert links[0].kind == LinkKind.WIKI_TRANSCLUSION
        assert links[0].alias_or_block_ref == "Head|Alias"

    def test_wiki_empty_file_part_falls_through(self) -> None:
        links = extract_links("[[#Heading]]")
        assert links[0].kind == LinkKind.WIKI
        assert links[0].target_text == "#Heading"

    def test_wiki_empty_fragment_falls_through(self) -> None:
        links = extract_links("[[Note#]]")
        assert links[0].kind == LinkKind.WIKI
        assert links[0].target_text == "Note#"

    def test_markdown_transclusion(self) -> None:
        links = extract_links("[](Note.md#Some%20Heading)")
        assert links[0].kind == LinkKind.MD_TRANSCLUSION
        assert links[0].target_text == "Note.md"
        assert links[0].alias_or_block_ref == "Some%20Heading"

    def test_markdown_empty_fragment_falls_through(self) -> None:
        links = extract_links("[x](Note.md#)")
        assert links[0].kind == LinkKind.MARKDOWN
        assert links[0].target_text == "Note.md#"


# ---------------------------------------------------------------------------
# Scanning
# ---------------------------------------------------------------------------


class TestScanning:
    @pytest.mark.parametrize(
        "text",
        [
            "[[https://example.com]]",
            "[[http://example.com|site]]",
            "[site](https://example.com/page)",
            "[site](https://example.com/page#section)",
        ],
    )
    def test_web_links_skipped(self, text: str) -> None:
        assert extract_links(text) == []

    def test_web_link_span_is_consumed(self) -> None:
        links = extract_links("[[https://x.io]] [[Real]]")
        assert [link.target_text for link in links] == ["Real"]

    def test_document_order_and_offsets(self) -> None:
        text = "[[A]] and [B](B.md)\n![[C#^id]]"
        links = extract_links(text)
        assert [link.kind for link in links] == [
            LinkKind.WIKI,
            LinkKind.MARKDOWN,
            LinkKind.WIKI_TRANSCLUSION,
        ]
        for link in links:
            assert text[link.start : link.end] == link.raw_match

    def test_link_inside_failed_markdown_alias(self) -> None:
        links = extract_links("[see [[Note]]](x)")
        assert len(links) == 1
        assert links[0].raw_match == "[[Note]]"

    def test_duplicates_each_recorded(self) -> None:
        links = extract_links("[[A]] [[A]]")
        assert [(link.start, link.end) for link in links] == [(0, 5), (6, 11)]

    @pytest.mark.parametrize("text", ["", "no links", "[[[(]])[", "]]((", "[", "[[", "[a](b"])
    def test_malformed_input_never_raises(self, text: str) -> None:
        assert isinstance(extract_links(text), list)

    def test_to_dict(self) -> None:
        link = extract_links("[[A|B]]")[0]
        assert link.to_dict() == {
            "kind": "wiki",
            "match": "[[A|B]]",
            "target": "A",
            "alias_or_block_ref": "B",
            "start": 0,
            "end": 7,
        }
