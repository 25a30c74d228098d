"""Checklist preprocessing pipeline.

Walks the book, records directives and recommendations in a registry,
rewrites directives into anchors and appends the checklist chapter.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from ..config import ChecklistConfig
from ..domain.book import Book
from ..domain.checklist import DirectiveRegistry
from ..domain.directive import (
    Directive,
    DirectiveMatch,
    MalformedDirective,
    ScanEvent,
)
from .index_service import IndexService
from .recommendation_service import RecommendationScanner
from .rewrite_service import Rewriter
from .scanner_service import DirectiveScanner
from .walker_service import BookWalker, ChapterVisit

logger = logging.getLogger(__name__)


@dataclass
class ChecklistResult:
    """Outcome of one preprocessing pass."""

    book: Book
    registry: DirectiveRegistry
    diagnostics: list[tuple[str, MalformedDirective]] = field(default_factory=list)
    duplicates: list[tuple[str, str]] = field(default_factory=list)


class ChecklistService:
    """Service running the checklist pipeline over a book.

    Collaborators are injected through the constructor; defaults are
    created when omitted.
    """

    def __init__(
        self,
        config: Optional[ChecklistConfig] = None,
        scanner: Optional[DirectiveScanner] = None,
        reco_scanner: Optional[RecommendationScanner] = None,
        walker: Optional[BookWalker] = None,
        rewriter: Optional[Rewriter] = None,
        index_service: Optional[IndexService] = None,
    ) -> None:
        self._config = config or ChecklistConfig()
        self._scanner = scanner or DirectiveScanner()
        self._reco_scanner = reco_scanner or RecommendationScanner()
        self._walker = walker or BookWalker()
        self._rewriter = rewriter or Rewriter()
        self._index_service = index_service or IndexService()

    @property
    def config(self) -> ChecklistConfig:
        return self._config

    def run(self, book: Book) -> ChecklistResult:
        """Run the pipeline, mutating the book in place.

        Args:
            book: The decoded book.

        Returns:
            ChecklistResult holding the same book, with rewritten chapters
            and the checklist chapter appended.
        """
        result = ChecklistResult(book=book, registry=DirectiveRegistry())

        for visit in self._walker.walk(book):
            self._process_chapter(visit, result)

        chapter = self._index_service.generate_chapter(
            result.registry, self._config.title, self._config.path
        )
        book.push_item(chapter)

        logger.info(
            "Collected %d checklist item(s) into '%s'",
            len(result.registry),
            self._config.title,
        )
        return result

    def _process_chapter(self, visit: ChapterVisit, result: ChecklistResult) -> None:
        """Record and rewrite the directives of one chapter."""
        content = visit.chapter.content
        if not content:
            return

        events = self._scan(content)
        matches: list[DirectiveMatch] = []

        for event in events:
            if isinstance(event, MalformedDirective):
                logger.warning(
                    "%s:%d: ignoring malformed directive (%s): %s",
                    visit.path or visit.title,
                    event.line_number,
                    event.reason,
                    event.source,
                )
                result.diagnostics.append((visit.title, event))
                continue

            if isinstance(event, DirectiveMatch):
                matches.append(event)

            directive = Directive(
                id=event.name,
                description=event.description,
                origin=visit.title,
                path=visit.path,
            )
            if not result.registry.record(directive, visit.title, visit.path):
                first = result.registry.get(directive.id)
                logger.warning(
                    "%s:%d: duplicate checklist id '%s', first seen in '%s'",
                    visit.path or visit.title,
                    event.line_number,
                    directive.id,
                    first.origin if first else "?",
                )
                result.duplicates.append((visit.title, directive.id))

        if matches:
            visit.chapter.content = self._rewriter.rewrite(content, matches)
            logger.debug(
                "Rewrote %d directive(s) in '%s'", len(matches), visit.title
            )

    def _scan(self, content: str) -> list[ScanEvent]:
        """Directive and recommendation events of a chapter, in text order."""
        events: list[ScanEvent] = list(self._scanner.scan(content))
        if self._config.recommendations and "reco" in content:
            events.extend(self._reco_scanner.scan(content))
        return sorted(events, key=lambda event: event.start)
