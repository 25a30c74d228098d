"""Directive scanner implementation.

Finds ``{{#check <name> | <description>}}`` markup in chapter text and
reports malformed markup without touching it.
"""

import re
from typing import Iterator, Optional

from ..domain.directive import DirectiveMatch, MalformedDirective, ScanEvent


class DirectiveScanner:
    """Scanner for inline checklist directives.

    A directive must be contained in a single line. Its description ends
    at the first ``}}`` that does not close an inner ``{{``. Malformed
    directives are reported as MalformedDirective events.
    """

    # Opening token: {{#check followed by whitespace, '|' or the closing braces
    DIRECTIVE_START = re.compile(r"\{\{#check(?=\s|\||\}\})")

    BRACE_PATTERN = re.compile(r"\{\{|\}\}")

    # No whitespace, and nothing that would break a link, anchor or attribute
    IDENTIFIER_PATTERN = re.compile(r"[^\s|\[\]()<>\"'#{}]+")

    def scan(self, text: str) -> Iterator[ScanEvent]:
        """Scan text for directives.

        Each call returns a new generator, so the sequence can be
        restarted by scanning again.

        Args:
            text: The raw chapter content.

        Yields:
            DirectiveMatch for each well-formed directive and
            MalformedDirective for each unparsable one, in text order.
        """
        pos = 0
        while True:
            opening = self.DIRECTIVE_START.search(text, pos)
            if opening is None:
                return

            start = opening.start()
            line_number = text.count("\n", 0, start) + 1
            end = self._find_closing(text, opening.end())

            if end is None:
                yield MalformedDirective(
                    reason="missing closing '}}'",
                    start=start,
                    end=opening.end(),
                    line_number=line_number,
                    source=text[start : opening.end()],
                )
                pos = opening.end()
                continue

            body = text[opening.end() : end - 2]
            yield self._parse_body(body, start, end, line_number, text[start:end])
            pos = end

    def _find_closing(self, text: str, pos: int) -> Optional[int]:
        """Find the end offset of the directive opened just before pos.

        Args:
            text: The chapter content.
            pos: Offset right after the ``{{#check`` token.

        Returns:
            Offset just past the closing ``}}``, or None if the line ends first.
        """
        line_end = text.find("\n", pos)
        if line_end == -1:
            line_end = len(text)

        depth = 0
        for token in self.BRACE_PATTERN.finditer(text, pos, line_end):
            if token.group() == "{{":
                depth += 1
            elif depth:
                depth -= 1
            else:
                return token.end()
        return None

    def _parse_body(
        self, body: str, start: int, end: int, line_number: int, source: str
    ) -> ScanEvent:
        """Split a directive body into identifier and description."""
        if "|" not in body:
            return MalformedDirective(
                reason="missing '|' separator",
                start=start,
                end=end,
                line_number=line_number,
                source=source,
            )

        name, _, description = body.partition("|")
        name = name.strip()
        description = description.strip()

        reason = None
        if not name:
            reason = "empty identifier"
        elif not self.IDENTIFIER_PATTERN.fullmatch(name):
            reason = f"invalid identifier '{name}'"
        elif not description:
            reason = f"empty description for '{name}'"

        if reason:
            return MalformedDirective(
                reason=reason,
                start=start,
                end=end,
                line_number=line_number,
                source=source,
            )

        return DirectiveMatch(
            name=name,
            description=description,
            start=start,
            end=end,
            line_number=line_number,
        )
