"""Service layer for checklist preprocessing.

Provides the scanners, the book walker, the rewriter, the index
generator, the pipeline tying them together and the host protocol
adapter.
"""

from .scanner_service import DirectiveScanner
from .recommendation_service import RecommendationScanner
from .walker_service import BookWalker, ChapterVisit
from .rewrite_service import Rewriter
from .index_service import IndexService
from .checklist_service import ChecklistResult, ChecklistService
from .protocol_service import ProtocolService

__all__ = [
    "DirectiveScanner",
    "RecommendationScanner",
    "BookWalker",
    "ChapterVisit",
    "Rewriter",
    "IndexService",
    "ChecklistResult",
    "ChecklistService",
    "ProtocolService",
]
