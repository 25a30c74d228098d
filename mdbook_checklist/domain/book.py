"""Domain models for the mdBook book tree.

Mirrors the JSON structure mdBook hands to preprocessors. Each chapter
owns its sub-items, and keys this package does not know about are kept
in ``extra`` so they survive the round trip back to the host.
"""

from dataclasses import dataclass, field
from typing import Any, Optional, Union


class BookFormatError(ValueError):
    """Raised when the host sends a book that does not match the wire format."""


@dataclass
class Chapter:
    """A chapter of the book with its nested sub-items."""

    name: str
    content: str = ""
    number: Optional[list[int]] = None
    sub_items: list["BookItem"] = field(default_factory=list)
    path: Optional[str] = None
    source_path: Optional[str] = None
    parent_names: list[str] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    KNOWN_KEYS = (
        "name",
        "content",
        "number",
        "sub_items",
        "path",
        "source_path",
        "parent_names",
    )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Chapter":
        """Build a chapter from its JSON representation.

        Args:
            data: The object found under the ``Chapter`` key.

        Returns:
            The decoded Chapter, sub-items included.

        Raises:
            BookFormatError: If a required field is missing or mistyped.
        """
        if not isinstance(data, dict):
            raise BookFormatError(f"Chapter must be an object, got {type(data).__name__}")

        name = data.get("name")
        if not isinstance(name, str):
            raise BookFormatError("Chapter is missing a string 'name'")

        content = data.get("content", "")
        if not isinstance(content, str):
            raise BookFormatError(f"Chapter '{name}' has non-string 'content'")

        sub_items = data.get("sub_items", [])
        if not isinstance(sub_items, list):
            raise BookFormatError(f"Chapter '{name}' has non-list 'sub_items'")

        for key in ("path", "source_path"):
            if data.get(key) is not None and not isinstance(data[key], str):
                raise BookFormatError(f"Chapter '{name}' has non-string '{key}'")

        number = data.get("number")
        if number is not None and not (
            isinstance(number, list)
            and all(isinstance(n, int) and not isinstance(n, bool) for n in number)
        ):
            raise BookFormatError(f"Chapter '{name}' has an invalid 'number'")

        parent_names = data.get("parent_names")
        if parent_names is None:
            parent_names = []
        elif not (
            isinstance(parent_names, list)
            and all(isinstance(p, str) for p in parent_names)
        ):
            raise BookFormatError(f"Chapter '{name}' has an invalid 'parent_names'")

        return cls(
            name=name,
            content=content,
            number=number,
            sub_items=[item_from_dict(item) for item in sub_items],
            path=data.get("path"),
            source_path=data.get("source_path"),
            parent_names=list(parent_names),
            extra={k: v for k, v in data.items() if k not in cls.KNOWN_KEYS},
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert the chapter back to its JSON representation."""
        data: dict[str, Any] = {
            "name": self.name,
            "content": self.content,
            "number": self.number,
            "sub_items": [item_to_dict(item) for item in self.sub_items],
            "path": self.path,
            "source_path": self.source_path,
            "parent_names": self.parent_names,
        }
        data.update(self.extra)
        return data


@dataclass
class Separator:
    """A horizontal rule between chapters."""


@dataclass
class PartTitle:
    """A part heading grouping the chapters that follow it."""

    title: str


BookItem = Union[Chapter, Separator, PartTitle]


@dataclass
class Book:
    """The whole book as handed over by mdBook."""

    items: list[BookItem] = field(default_factory=list)
    items_key: str = "sections"  # "items" since mdBook 0.5
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Book":
        """Build a book from its JSON representation.

        Raises:
            BookFormatError: If the item list is missing or malformed.
        """
        if not isinstance(data, dict):
            raise BookFormatError(f"Book must be an object, got {type(data).__name__}")

        for key in ("sections", "items"):
            if key in data:
                items_key = key
                break
        else:
            raise BookFormatError("Book has neither 'sections' nor 'items'")

        raw_items = data[items_key]
        if not isinstance(raw_items, list):
            raise BookFormatError(f"Book '{items_key}' must be a list")

        return cls(
            items=[item_from_dict(item) for item in raw_items],
            items_key=items_key,
            extra={k: v for k, v in data.items() if k != items_key},
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert the book back to its JSON representation."""
        data: dict[str, Any] = {
            self.items_key: [item_to_dict(item) for item in self.items]
        }
        data.update(self.extra)
        return data

    def push_item(self, item: BookItem) -> None:
        """Append an item at the end of the top-level item list."""
        self.items.append(item)


def item_from_dict(data: Any) -> BookItem:
    """Decode one externally-tagged BookItem."""
    if data == "Separator":
        return Separator()

    if isinstance(data, dict) and len(data) == 1:
        (tag, value), = data.items()
        if tag == "Chapter":
            return Chapter.from_dict(value)
        if tag == "PartTitle":
            if not isinstance(value, str):
                raise BookFormatError("PartTitle must carry a string title")
            return PartTitle(title=value)
        if tag == "Separator":
            return Separator()

    raise BookFormatError(f"Unknown book item: {data!r:.80}")


def item_to_dict(item: BookItem) -> Any:
    """Encode one BookItem in mdBook's externally-tagged form."""
    if isinstance(item, Chapter):
        return {"Chapter": item.to_dict()}
    if isinstance(item, PartTitle):
        return {"PartTitle": item.title}
    return "Separator"
