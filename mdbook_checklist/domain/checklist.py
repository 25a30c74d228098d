"""Directive registry.

Collects the directives found during a single pass over the book, grouped
by the chapter they come from and kept in document order.
"""

from dataclasses import dataclass, field
from typing import Optional

from .directive import Directive


@dataclass
class ChecklistSection:
    """Directives found in one chapter, in encounter order."""

    chapter_title: str
    chapter_path: Optional[str]
    directives: list[Directive] = field(default_factory=list)


class DirectiveRegistry:
    """Ordered, deduplicating collection of directives.

    The first occurrence of an identifier wins; later occurrences with the
    same identifier are ignored.
    """

    def __init__(self) -> None:
        self._sections: dict[tuple[str, Optional[str]], ChecklistSection] = {}
        self._by_id: dict[str, Directive] = {}
        self._order: list[Directive] = []

    def record(
        self, directive: Directive, chapter_title: str, chapter_path: Optional[str] = None
    ) -> bool:
        """Record a directive under the chapter it was found in.

        Args:
            directive: The directive to record.
            chapter_title: Title of the chapter containing it.
            chapter_path: Path of that chapter, if it has one.

        Returns:
            True if the directive was added, False if its id was already seen.
        """
        if directive.id in self._by_id:
            return False

        key = (chapter_title, chapter_path)
        section = self._sections.get(key)
        if section is None:
            section = ChecklistSection(chapter_title=chapter_title, chapter_path=chapter_path)
            self._sections[key] = section

        section.directives.append(directive)
        self._by_id[directive.id] = directive
        self._order.append(directive)
        return True

    def snapshot(self) -> list[ChecklistSection]:
        """Return the sections in document order.

        Sections are ordered by their first directive; the returned objects
        are copies, so callers may not mutate the registry through them.
        """
        return [
            ChecklistSection(
                chapter_title=section.chapter_title,
                chapter_path=section.chapter_path,
                directives=list(section.directives),
            )
            for section in self._sections.values()
        ]

    def directives(self) -> list[Directive]:
        """All recorded directives in global document order."""
        return list(self._order)

    def get(self, directive_id: str) -> Optional[Directive]:
        return self._by_id.get(directive_id)

    def __contains__(self, directive_id: object) -> bool:
        return directive_id in self._by_id

    def __len__(self) -> int:
        return len(self._order)
