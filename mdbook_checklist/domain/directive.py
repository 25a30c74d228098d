"""Domain models for checklist directives.

Provides dataclasses for directive occurrences found in chapter text,
malformed markup diagnostics, and the recorded directive itself.
"""

from dataclasses import dataclass
from typing import Optional, Union


@dataclass
class DirectiveMatch:
    """A well-formed ``{{#check id | description}}`` occurrence.

    ``start`` and ``end`` delimit the full markup, braces included, so
    ``text[start:end]`` is the exact source of the directive.
    """

    name: str
    description: str
    start: int
    end: int
    line_number: int


@dataclass
class MalformedDirective:
    """Markup that looks like a directive but cannot be parsed.

    The text is left as-is; ``reason`` is reported to the author.
    """

    reason: str
    start: int
    end: int
    line_number: int
    source: str


@dataclass
class RecommendationMatch:
    """An opening ``<div class="reco" ...>`` tag of a recommendation block.

    The div already carries the ``id`` used as anchor, so it is recorded
    but never rewritten.
    """

    name: str
    kind: str
    title: str
    start: int
    line_number: int

    @property
    def description(self) -> str:
        return f"{self.kind} - {self.title}"


ScanEvent = Union[DirectiveMatch, RecommendationMatch, MalformedDirective]


@dataclass
class Directive:
    """A checklist entry recorded in the registry."""

    id: str
    description: str
    origin: str  # Title of the chapter where it was first seen
    path: Optional[str] = None  # Path of that chapter, for links

    @property
    def anchor(self) -> str:
        """Link target of the anchor left in the chapter."""
        return f"{self.path or ''}#{self.id}"
