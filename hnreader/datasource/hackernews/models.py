"""
Hacker News item types and the functions that validate raw API payloads.

Every payload goes through a parse function before the rest of the code
sees it. Parse functions never raise for bad data; they return a
ParseResult holding either the model or the reason it was rejected.
"""

from dataclasses import dataclass, field
from typing import Any, Generic, Literal, TypeVar, get_args

from pydantic import BaseModel, Field, ValidationError, ValidationInfo, field_validator

T = TypeVar("T")

ItemType = Literal["job", "story", "comment", "poll", "pollopt"]
_ITEM_TYPES = frozenset(get_args(ItemType))

# Optional scalar fields and the JSON type each must have to be kept
_SCALAR_FIELDS = {
    "by": str,
    "time": int,
    "text": str,
    "deleted": bool,
    "dead": bool,
    "parent": int,
    "poll": int,
    "url": str,
    "title": str,
    "descendants": int,
}

DELETED_AUTHOR = "[deleted]"
UNKNOWN_AUTHOR = "[unknown]"


class Item(BaseModel):
    """Any node returned by /item/{id}.json."""

    id: int = Field(gt=0)
    type: ItemType | None = None
    by: str | None = None
    time: int | None = None  # Unix seconds
    text: str | None = None  # HTML
    deleted: bool | None = None
    dead: bool | None = None
    parent: int | None = None
    poll: int | None = None
    kids: list[int] | None = None
    url: str | None = None
    score: int | float | None = None
    title: str | None = None
    parts: list[int] | None = None
    descendants: int | None = None

    @field_validator("score", mode="before")
    @classmethod
    def _numeric_score_only(cls, value: Any) -> Any:
        # Non-numeric scores are dropped here and defaulted by parse_story.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        return value

    @field_validator(*_SCALAR_FIELDS, mode="before")
    @classmethod
    def _drop_mistyped(cls, value: Any, info: ValidationInfo) -> Any:
        # Only id is strict; a badly typed optional field reads as missing.
        expected = _SCALAR_FIELDS[info.field_name]
        if isinstance(value, bool) and expected is not bool:
            return None
        if not isinstance(value, expected):
            return None
        return value

    @field_validator("type", mode="before")
    @classmethod
    def _known_type_only(cls, value: Any) -> Any:
        return value if isinstance(value, str) and value in _ITEM_TYPES else None

    @field_validator("kids", "parts", mode="before")
    @classmethod
    def _id_list_only(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return None
        return [
            v for v in value if isinstance(v, int) and not isinstance(v, bool) and v > 0
        ]

    @property
    def is_tombstoned(self) -> bool:
        return bool(self.deleted or self.dead)


class Story(Item):
    """A story with every field needed to list it."""

    type: Literal["story"] | None = None
    title: str
    by: str
    score: int | float = 0
    time: int


class Comment(Item):
    """A comment, possibly a placeholder for a deleted one."""

    by: str
    parent: int


@dataclass
class ParseResult(Generic[T]):
    """Outcome of validating one payload."""

    value: T | None = None
    error: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: str) -> "ParseResult[T]":
        return cls(error=error)


def parse_item(data: Any) -> ParseResult[Item]:
    """Validate a decoded /item payload that is known not to be null."""
    if not isinstance(data, dict):
        return ParseResult.failure(
            f"expected an object, got {type(data).__name__}"
        )

    try:
        return ParseResult(value=Item.model_validate(data))
    except ValidationError as e:
        return ParseResult.failure(f"invalid item payload: {e.error_count()} errors")


def parse_story(item: Item) -> ParseResult[Story]:
    """
    Narrow an Item to a Story.

    Items without a type tag are accepted; the API sometimes leaves it out.
    A missing title, author or time rejects the item. A non-numeric score
    becomes 0 and is reported as a warning.
    """
    if item.type is not None and item.type != "story":
        return ParseResult.failure(f"is not a story (type: {item.type})")

    if not item.title:
        return ParseResult.failure("is missing required title field")

    if not item.by:
        return ParseResult.failure("is missing required author field")

    warnings = []
    score = item.score
    if score is None:
        warnings.append("has invalid score, defaulting to 0")
        score = 0

    if item.time is None:
        return ParseResult.failure("is missing required time field")

    story = Story.model_validate({**item.model_dump(), "score": score})
    return ParseResult(value=story, warnings=warnings)


def parse_comment(item: Item) -> ParseResult[Comment]:
    """
    Narrow an Item to a Comment.

    Deleted and dead items become placeholders that keep their position in
    the thread. Live comments get a fallback author or parent when either is
    missing.
    """
    if item.is_tombstoned:
        placeholder = Comment(
            id=item.id,
            type="comment",
            by=DELETED_AUTHOR,
            time=item.time or 0,
            parent=item.parent or 0,
            deleted=item.deleted,
            dead=item.dead,
            kids=item.kids,
        )
        return ParseResult(value=placeholder)

    warnings = []
    author = item.by
    if not author:
        warnings.append("missing author, using fallback")
        author = UNKNOWN_AUTHOR

    parent = item.parent
    if parent is None:
        warnings.append("missing parent, using 0")
        parent = 0

    if not item.text:
        warnings.append("missing text content")

    comment = Comment.model_validate(
        {**item.model_dump(), "by": author, "parent": parent}
    )
    return ParseResult(value=comment, warnings=warnings)
