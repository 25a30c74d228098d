"""Rewriter replacing directives with linkable anchors."""

from typing import Iterable

from ..domain.directive import DirectiveMatch


class Rewriter:
    """Replace each directive span with its identifier and an HTML anchor.

    Text outside the matched spans is copied unchanged. The anchor form
    contains no directive syntax, so rewritten text scans clean.
    """

    ANCHOR_TEMPLATE = '{name}<a id="{name}"></a>'

    def render_anchor(self, name: str) -> str:
        """Inline rendering left in place of a directive."""
        return self.ANCHOR_TEMPLATE.format(name=name)

    def rewrite(self, text: str, matches: Iterable[DirectiveMatch]) -> str:
        """Produce the rewritten text.

        Args:
            text: The original chapter content.
            matches: Directive matches found in that same text, in order.

        Returns:
            The content with every matched span replaced.
        """
        parts: list[str] = []
        pos = 0

        for match in sorted(matches, key=lambda m: m.start):
            if match.start < pos:
                # Overlapping spans cannot come from one scan
                continue
            parts.append(text[pos : match.start])
            parts.append(self.render_anchor(match.name))
            pos = match.end

        if not parts:
            return text

        parts.append(text[pos:])
        return "".join(parts)
