"""
Configuration settings for the checklist preprocessor.

Read from the ``[preprocessor.checklist]`` table of ``book.toml``:

    [preprocessor.checklist]
    title = "Checklist"
    path = "checklist.md"
    recommendations = true
"""

import logging
from dataclasses import dataclass
from typing import Any, Optional

from .domain.context import PreprocessorContext

logger = logging.getLogger(__name__)


@dataclass
class ChecklistConfig:
    """Configuration class for checklist preprocessor settings."""

    # Name of the preprocessor table in book.toml
    PREPROCESSOR_NAME = "checklist"

    # mdBook release line the wire format is known to match
    SUPPORTED_MDBOOK_VERSION = "0.4"

    DEFAULT_TITLE = "Checklist"
    DEFAULT_PATH = "checklist.md"

    title: str = DEFAULT_TITLE
    path: str = DEFAULT_PATH
    recommendations: bool = True

    @classmethod
    def from_table(cls, table: Optional[dict[str, Any]]) -> "ChecklistConfig":
        """Build the configuration from a preprocessor table.

        Invalid values are reported and replaced by their default.
        """
        config = cls()
        if not table:
            return config

        title = table.get("title")
        if title is not None:
            if isinstance(title, str) and title.strip():
                config.title = title.strip()
            else:
                logger.warning("Ignoring invalid checklist title %r", title)

        path = table.get("path")
        if path is not None:
            if isinstance(path, str) and path.strip():
                config.path = path.strip()
            else:
                logger.warning("Ignoring invalid checklist path %r", path)

        recommendations = table.get("recommendations")
        if recommendations is not None:
            if isinstance(recommendations, bool):
                config.recommendations = recommendations
            else:
                logger.warning(
                    "Ignoring non-boolean 'recommendations' value %r", recommendations
                )

        return config

    @classmethod
    def from_context(cls, context: PreprocessorContext) -> "ChecklistConfig":
        """Get the configuration for this preprocessor from the host context."""
        return cls.from_table(context.preprocessor_config(cls.PREPROCESSOR_NAME))

    @classmethod
    def is_supported_version(cls, mdbook_version: str) -> bool:
        """Check that the host's major.minor version matches the supported one."""
        parts = mdbook_version.lstrip("v").split(".")
        return ".".join(parts[:2]) == cls.SUPPORTED_MDBOOK_VERSION
