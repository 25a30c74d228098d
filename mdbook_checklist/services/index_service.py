"""Checklist index generator.

Renders the directive registry into a markdown chapter listing every
directive as an unchecked task, grouped by the chapter it comes from.
"""

from ..domain.book import Chapter
from ..domain.checklist import ChecklistSection, DirectiveRegistry
from ..domain.directive import Directive


class IndexService:
    """Service for generating the checklist chapter.

    Sections keep the registry's document order; nothing is sorted.
    """

    # Characters that break a bare inline link destination
    LINK_UNSAFE_CHARS = frozenset(" ()<>")

    def generate_markdown(self, sections: list[ChecklistSection], title: str) -> str:
        """Render the checklist as markdown.

        Args:
            sections: Registry snapshot, in document order.
            title: Heading of the generated chapter.

        Returns:
            Markdown content of the checklist chapter.
        """
        lines = [f"# {title}", ""]

        for section in sections:
            lines.append(f"- {section.chapter_title}:")
            for directive in section.directives:
                lines.append(f"  - [ ] {directive.description} ({self._link(directive)})")
            lines.append("")

        return "\n".join(lines).rstrip("\n") + "\n"

    def generate_chapter(
        self, registry: DirectiveRegistry, title: str, path: str
    ) -> Chapter:
        """Build the checklist chapter appended at the end of the book.

        Args:
            registry: The populated directive registry.
            title: Name and heading of the chapter.
            path: Path given to the chapter.

        Returns:
            A new top-level Chapter without number or sub-items.
        """
        content = self.generate_markdown(registry.snapshot(), title)
        return Chapter(
            name=title,
            content=content,
            number=None,
            sub_items=[],
            path=path,
            source_path=path,
            parent_names=[],
        )

    def _link(self, directive: Directive) -> str:
        """Markdown link to the anchor left in the chapter."""
        target = directive.anchor
        if self.LINK_UNSAFE_CHARS.intersection(target):
            escaped = target.replace("<", "\\<").replace(">", "\\>")
            target = f"<{escaped}>"
        return f"[{directive.id}]({target})"
