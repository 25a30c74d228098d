"""Preprocessor invocation context sent by mdBook."""

from dataclasses import dataclass, field
from typing import Any, Optional

from .book import BookFormatError


@dataclass
class PreprocessorContext:
    """First element of the ``[context, book]`` pair on stdin."""

    root: str = ""
    config: dict[str, Any] = field(default_factory=dict)
    renderer: str = ""
    mdbook_version: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    KNOWN_KEYS = ("root", "config", "renderer", "mdbook_version")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PreprocessorContext":
        """Build the context from its JSON representation.

        Raises:
            BookFormatError: If the context is not an object or its config
                is not a table.
        """
        if not isinstance(data, dict):
            raise BookFormatError(f"Context must be an object, got {type(data).__name__}")

        config = data.get("config") or {}
        if not isinstance(config, dict):
            raise BookFormatError("Context 'config' must be an object")

        return cls(
            root=str(data.get("root", "")),
            config=config,
            renderer=str(data.get("renderer", "")),
            mdbook_version=str(data.get("mdbook_version", "")),
            extra={k: v for k, v in data.items() if k not in cls.KNOWN_KEYS},
        )

    def preprocessor_config(self, name: str) -> Optional[dict[str, Any]]:
        """Return the ``[preprocessor.<name>]`` table, if present."""
        preprocessors = self.config.get("preprocessor")
        if not isinstance(preprocessors, dict):
            return None
        table = preprocessors.get(name)
        return table if isinstance(table, dict) else None
