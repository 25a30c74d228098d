"""Recommendation block scanner.

Collects ``<div class="reco" id="..." type="..." title="...">`` blocks,
which the guide uses for its numbered recommendations. Only tags opening
an HTML block count: tags inside fenced or indented code, or in the
middle of a line such as an inline code span, are ignored.
"""

from html.parser import HTMLParser
from typing import Iterator

from ..domain.directive import MalformedDirective, RecommendationMatch


class _RecoTagParser(HTMLParser):
    """Collect the attributes and positions of ``div.reco`` start tags."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.found: list[tuple[dict[str, str], tuple[int, int], str]] = []

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag != "div":
            return
        attributes = {key: value or "" for key, value in attrs}
        if "reco" in attributes.get("class", "").split():
            self.found.append((attributes, self.getpos(), self.get_starttag_text() or ""))


class RecommendationScanner:
    """Scanner for recommendation blocks.

    Every ``reco`` div must carry ``id``, ``type`` and ``title``; a block
    missing one of them is reported and skipped.
    """

    # An HTML block may be indented by up to three spaces
    MAX_BLOCK_INDENT = 3

    REQUIRED_ATTRIBUTES = ("id", "type", "title")

    FENCE_MARKERS = ("```", "~~~")

    def scan(self, text: str) -> Iterator[RecommendationMatch | MalformedDirective]:
        """Scan text for recommendation blocks.

        Args:
            text: The raw chapter content.

        Yields:
            RecommendationMatch for complete blocks and MalformedDirective
            for blocks with missing attributes, in text order.
        """
        masked = self._mask_code_blocks(text)
        line_starts = self._line_starts(text)

        parser = _RecoTagParser()
        parser.feed(masked)
        parser.close()

        for attributes, (line_number, column), source in parser.found:
            start = line_starts[line_number - 1] + column
            if not self._opens_block(text, line_starts[line_number - 1], start):
                continue

            missing = [a for a in self.REQUIRED_ATTRIBUTES if not attributes.get(a)]
            if missing:
                yield MalformedDirective(
                    reason=f'recommendation without "{missing[0]}" attribute',
                    start=start,
                    end=start + len(source),
                    line_number=line_number,
                    source=source,
                )
                continue

            yield RecommendationMatch(
                name=attributes["id"].strip(),
                kind=attributes["type"].strip(),
                title=attributes["title"].strip(),
                start=start,
                line_number=line_number,
            )

    def _mask_code_blocks(self, text: str) -> str:
        """Blank out fenced code blocks, keeping offsets unchanged."""
        lines = text.split("\n")
        in_code = False

        for idx, line in enumerate(lines):
            if line.strip().startswith(self.FENCE_MARKERS):
                in_code = not in_code
                lines[idx] = " " * len(line)
            elif in_code:
                lines[idx] = " " * len(line)

        return "\n".join(lines)

    def _line_starts(self, text: str) -> list[int]:
        starts = [0]
        for idx, char in enumerate(text):
            if char == "\n":
                starts.append(idx + 1)
        return starts

    def _opens_block(self, text: str, line_start: int, start: int) -> bool:
        """Check that at most three spaces precede the tag on its line."""
        indent = text[line_start:start]
        return len(indent) <= self.MAX_BLOCK_INDENT and indent.strip(" ") == ""
