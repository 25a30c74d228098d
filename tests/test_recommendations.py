"""Tests for recommendation block scanning."""

import pytest

from mdbook_checklist.domain import MalformedDirective, RecommendationMatch
from mdbook_checklist.services.recommendation_service import RecommendationScanner


@pytest.fixture
def scanner():
    """Create a RecommendationScanner."""
    return RecommendationScanner()


RECO = (
    '<div class="reco" id="DENV-STABLE" type="Rule" '
    'title="Use stable compilation toolchain">\n'
    "\n"
    "The development of a secure application must be done using a stable toolchain.\n"
    "\n"
    "</div>\n"
)


class TestRecommendationScanner:
    """Tests for <div class="reco"> extraction."""

    def test_extract_recommendation(self, scanner):
        """Test extracting a complete recommendation block."""
        events = list(scanner.scan(RECO))

        assert len(events) == 1
        reco = events[0]
        assert isinstance(reco, RecommendationMatch)
        assert reco.name == "DENV-STABLE"
        assert reco.kind == "Rule"
        assert reco.title == "Use stable compilation toolchain"
        assert reco.description == "Rule - Use stable compilation toolchain"
        assert reco.start == 0
        assert reco.line_number == 1

    def test_position_after_prose(self, scanner):
        """Test offsets and line numbers of a block after some text."""
        text = "# Tools\n\nIntro.\n\n" + RECO
        events = list(scanner.scan(text))

        assert events[0].line_number == 5
        assert text[events[0].start :].startswith('<div class="reco"')

    def test_entities_are_unescaped(self, scanner):
        """Test that HTML entities in attributes are decoded."""
        text = '<div class="reco" id="X" type="Recommendation" title="Use &lt;T&gt; &amp; co">'
        events = list(scanner.scan(text))

        assert events[0].title == "Use <T> & co"

    def test_missing_attribute(self, scanner):
        """Test that a block without 'type' is reported."""
        text = '<div class="reco" id="X" title="No type">\n</div>'
        events = list(scanner.scan(text))

        assert len(events) == 1
        assert isinstance(events[0], MalformedDirective)
        assert events[0].reason == 'recommendation without "type" attribute'

    def test_other_divs_ignored(self, scanner):
        """Test that divs of other classes are not collected."""
        text = '<div class="warning">\nCareful\n</div>\n<div>plain</div>'

        assert list(scanner.scan(text)) == []

    def test_code_blocks_ignored(self, scanner):
        """Test that blocks inside fenced code are not collected."""
        text = "```html\n" + RECO + "```\n"

        assert list(scanner.scan(text)) == []

    def test_prose_with_angle_brackets(self, scanner):
        """Test that generic types in prose do not disturb the scan."""
        text = "A `Vec<u8>` or Option<T> value.\n\n" + RECO
        events = list(scanner.scan(text))

        assert [e.name for e in events] == ["DENV-STABLE"]

    def test_inline_code_ignored(self, scanner):
        """Test that a tag quoted in inline code is not collected."""
        text = 'Write `<div class="reco" id="X" type="Rule" title="T">` to declare one.\n'

        assert list(scanner.scan(text)) == []

    def test_indented_code_ignored(self, scanner):
        """Test that a tag in an indented code block is not collected."""
        text = "Example:\n\n    " + RECO

        assert list(scanner.scan(text)) == []

    def test_small_indent_accepted(self, scanner):
        """Test that up to three spaces of indentation still open a block."""
        events = list(scanner.scan("  " + RECO))

        assert [e.name for e in events] == ["DENV-STABLE"]
