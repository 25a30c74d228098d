"""Tests for the checklist preprocessing pipeline.

Tests:
- The end-to-end rewrite and index for a simple chapter
- Document order and first-seen-wins across chapters
- Malformed directives and empty books
- Recommendation blocks
"""

import logging

import pytest

from mdbook_checklist.config import ChecklistConfig
from mdbook_checklist.domain import Book, Chapter, PartTitle, Separator
from mdbook_checklist.services.checklist_service import ChecklistService


@pytest.fixture
def service():
    """Create a ChecklistService with the default configuration."""
    return ChecklistService()


def _chapter(name: str, content: str, path: str | None = None, sub_items=None) -> Chapter:
    return Chapter(
        name=name,
        content=content,
        path=path,
        source_path=path,
        sub_items=sub_items or [],
    )


class TestExampleScenario:
    """Tests for a book with a single directive."""

    def test_rewrite_and_index(self, service):
        """Test the rewritten chapter and the appended checklist."""
        book = Book(
            items=[
                _chapter(
                    "Intro",
                    "Some text {{#check FOO-1 | Do the thing}} more text.",
                    "intro.md",
                )
            ]
        )

        result = service.run(book)

        assert book.items[0].content == 'Some text FOO-1<a id="FOO-1"></a> more text.'
        checklist = book.items[-1]
        assert checklist.name == "Checklist"
        assert "- Intro:" in checklist.content
        assert "- [ ] Do the thing ([FOO-1](intro.md#FOO-1))" in checklist.content
        assert len(result.registry) == 1
        assert result.diagnostics == []

    def test_checklist_is_last_top_level_item(self, service):
        """Test that the checklist is appended after everything else."""
        book = Book(items=[_chapter("A", "a", "a.md"), Separator(), PartTitle("P")])

        service.run(book)

        assert len(book.items) == 4
        assert isinstance(book.items[-1], Chapter)
        assert book.items[-1].path == "checklist.md"


class TestPipelineProperties:
    """Tests for ordering, deduplication and untouched text."""

    def test_text_without_directives_unchanged(self, service):
        """Test that chapters without directives are byte-for-byte identical."""
        text = "# Title\n\nCode: `{{ value }}` and {{#include x.rs}}\r\n\ttabs\n"
        book = Book(items=[_chapter("A", text, "a.md")])

        service.run(book)

        assert book.items[0].content == text

    def test_document_order_across_nested_chapters(self, service):
        """Test that index order follows traversal, not descriptions."""
        book = Book(
            items=[
                _chapter(
                    "Parent",
                    "{{#check P-1 | zzz last alphabetically}}",
                    "parent.md",
                    sub_items=[_chapter("Child", "{{#check C-1 | aaa first}}", "child.md")],
                ),
                _chapter("Sibling", "{{#check S-1 | mmm}}", "sibling.md"),
            ]
        )

        service.run(book)
        content = book.items[-1].content

        assert content.index("P-1") < content.index("C-1") < content.index("S-1")
        assert content.index("- Parent:") < content.index("- Child:") < content.index("- Sibling:")

    def test_first_seen_wins(self, service, caplog):
        """Test that a duplicate id keeps the first description but is rewritten."""
        book = Book(
            items=[
                _chapter("A", "{{#check X | first description}}", "a.md"),
                _chapter("B", "{{#check X | second description}}", "b.md"),
            ]
        )

        with caplog.at_level(logging.WARNING):
            result = service.run(book)

        content = book.items[-1].content
        assert content.count("[X]") == 1
        assert "first description" in content
        assert "second description" not in content
        assert book.items[1].content == 'X<a id="X"></a>'
        assert result.duplicates == [("B", "X")]
        assert "duplicate checklist id 'X'" in caplog.text

    def test_identifier_in_anchor_and_link(self, service):
        """Test that the same identifier appears in the anchor and the link."""
        book = Book(items=[_chapter("A", "{{#check MEM-FORGET | Do not leak}}", "mem.md")])

        service.run(book)

        assert 'id="MEM-FORGET"' in book.items[0].content
        assert "(mem.md#MEM-FORGET)" in book.items[-1].content

    def test_malformed_directive(self, service, caplog):
        """Test that malformed markup is left as-is and reported."""
        book = Book(items=[_chapter("A", "{{#check BAD-NO-PIPE}}", "a.md")])

        with caplog.at_level(logging.WARNING):
            result = service.run(book)

        assert book.items[0].content == "{{#check BAD-NO-PIPE}}"
        assert len(result.registry) == 0
        assert len(result.diagnostics) == 1
        assert "a.md:1" in caplog.text

    def test_empty_book(self, service):
        """Test a book with only separators and part titles."""
        book = Book(items=[PartTitle("Part"), Separator()])

        service.run(book)

        assert book.items[-1].content == "# Checklist\n"

    def test_draft_sub_items_are_processed(self, service):
        """Test that chapters below a draft are still scanned."""
        book = Book(
            items=[
                _chapter(
                    "Draft",
                    "",
                    None,
                    sub_items=[_chapter("Real", "{{#check R | real}}", "real.md")],
                )
            ]
        )

        service.run(book)

        assert book.items[0].sub_items[0].content == 'R<a id="R"></a>'
        assert "([R](real.md#R))" in book.items[-1].content

    def test_custom_title_and_path(self):
        """Test the configured title and path of the checklist chapter."""
        service = ChecklistService(config=ChecklistConfig(title="Rules", path="rules.md"))
        book = Book(items=[])

        service.run(book)

        assert book.items[-1].name == "Rules"
        assert book.items[-1].path == "rules.md"
        assert book.items[-1].content == "# Rules\n"


class TestRecommendations:
    """Tests for recommendation blocks in the pipeline."""

    CONTENT = (
        "{{#check EARLY | inline first}}\n"
        "\n"
        '<div class="reco" id="DENV-STABLE" type="Rule" title="Use stable toolchain">\n'
        "\n"
        "Body.\n"
        "\n"
        "</div>\n"
        "\n"
        "{{#check LATE | inline last}}\n"
    )

    def test_recommendations_recorded_in_text_order(self, service):
        """Test that blocks and directives share one ordered registry."""
        book = Book(items=[_chapter("Tools", self.CONTENT, "tools.md")])

        result = service.run(book)

        assert [d.id for d in result.registry.directives()] == ["EARLY", "DENV-STABLE", "LATE"]
        assert "- [ ] Rule - Use stable toolchain ([DENV-STABLE](tools.md#DENV-STABLE))" in (
            book.items[-1].content
        )

    def test_recommendation_div_not_rewritten(self, service):
        """Test that the div itself is left untouched."""
        book = Book(items=[_chapter("Tools", self.CONTENT, "tools.md")])

        service.run(book)

        assert '<div class="reco" id="DENV-STABLE"' in book.items[0].content

    def test_recommendations_disabled(self):
        """Test that blocks are ignored when disabled."""
        service = ChecklistService(config=ChecklistConfig(recommendations=False))
        book = Book(items=[_chapter("Tools", self.CONTENT, "tools.md")])

        result = service.run(book)

        assert [d.id for d in result.registry.directives()] == ["EARLY", "LATE"]
