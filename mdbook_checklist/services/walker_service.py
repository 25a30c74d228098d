"""Book tree walker.

Visits every chapter of the book depth-first, parents before their
sub-chapters, so chapters come out in the order they are read.
"""

import re
from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Iterable, Iterator, Optional

from ..domain.book import Book, BookItem, Chapter


@dataclass
class ChapterVisit:
    """A chapter reached by the walker, with its resolved title and path."""

    chapter: Chapter
    title: str
    path: Optional[str]


class BookWalker:
    """Depth-first, pre-order traversal over the chapters of a book.

    Separators and part titles are skipped. Draft chapters are visited
    and their sub-items are walked like any other.
    """

    UNTITLED = "Untitled"

    def walk(self, book: Book) -> Iterator[ChapterVisit]:
        """Yield every chapter of the book exactly once.

        Args:
            book: The book to traverse.

        Yields:
            ChapterVisit for each chapter, in document order.
        """
        yield from self._walk_items(book.items)

    def _walk_items(self, items: Iterable[BookItem]) -> Iterator[ChapterVisit]:
        for item in items:
            if not isinstance(item, Chapter):
                continue
            yield ChapterVisit(
                chapter=item,
                title=self.resolve_title(item),
                path=self.resolve_path(item),
            )
            yield from self._walk_items(item.sub_items)

    def resolve_title(self, chapter: Chapter) -> str:
        """Chapter name, or a title derived from its path if the name is blank."""
        if chapter.name.strip():
            return chapter.name.strip()

        path = self.resolve_path(chapter)
        if path:
            title = _path_to_title(path)
            if title:
                return title
        return self.UNTITLED

    def resolve_path(self, chapter: Chapter) -> Optional[str]:
        """Path used to link to the chapter, in POSIX form."""
        path = chapter.path or chapter.source_path
        if not path:
            return None
        return path.replace("\\", "/")


def _path_to_title(path: str) -> str:
    """Convert a file path to a readable title."""
    name = PurePosixPath(path).stem

    # Remove common prefixes like ch01-, chapter-01-, etc.
    name = re.sub(r"^(ch(apter)?[-_]?)?\d+[-_]?", "", name, flags=re.IGNORECASE)

    # Convert kebab-case and snake_case to title case
    name = re.sub(r"[-_]", " ", name).strip()

    return name.title()
