"""Domain layer for the book tree and checklist directives."""

from .book import Book, BookFormatError, BookItem, Chapter, PartTitle, Separator
from .checklist import ChecklistSection, DirectiveRegistry
from .context import PreprocessorContext
from .directive import (
    Directive,
    DirectiveMatch,
    MalformedDirective,
    RecommendationMatch,
    ScanEvent,
)

__all__ = [
    "Book",
    "BookFormatError",
    "BookItem",
    "Chapter",
    "PartTitle",
    "Separator",
    "ChecklistSection",
    "DirectiveRegistry",
    "PreprocessorContext",
    "Directive",
    "DirectiveMatch",
    "MalformedDirective",
    "RecommendationMatch",
    "ScanEvent",
]
