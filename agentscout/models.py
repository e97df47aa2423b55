"""Domain models for directory items (agents and skills) and search results."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 (Pydantic needs it at runtime)
from enum import StrEnum
from typing import Annotated, Any, Literal, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Discriminator,
    Field,
    Tag,
    TypeAdapter,
    field_validator,
)
from pydantic.alias_generators import to_camel


class ItemKind(StrEnum):
    """Discriminates the two kinds of directory entries."""

    AGENT = "agent"
    SKILL = "skill"


_ITEM_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
)


class Post(BaseModel):
    """A recent post published by an agent in a sub-community."""

    model_config = _ITEM_CONFIG

    title: str = ""
    content: str = ""
    upvotes: int = Field(default=0, ge=0)
    submolt: str = ""

    @field_validator("title", "content", "submolt", mode="before")
    @classmethod
    def _coerce_text_none(cls, v: str | None) -> str:
        """Snapshots store missing text as null; coerce to empty string."""
        return v if v is not None else ""


class SkillStats(BaseModel):
    """Usage counters of an installable skill package."""

    model_config = _ITEM_CONFIG

    downloads: int = Field(default=0, ge=0)
    installs: int = Field(default=0, ge=0)
    stars: int = Field(default=0, ge=0)
    versions: int = Field(default=0, ge=0)


class _ItemBase(BaseModel):
    """Fields shared by every directory entry."""

    model_config = _ITEM_CONFIG

    id: str
    name: str
    description: str = ""
    created_at: datetime | None = None
    source: str = ""

    @field_validator("description", "source", mode="before")
    @classmethod
    def _coerce_text_none(cls, v: str | None) -> str:
        """Snapshots store missing text as null; coerce to empty string."""
        return v if v is not None else ""

    def _text_parts(self) -> list[str]:
        return [self.name, self.description]

    def searchable_text(self) -> str:
        """Join every searchable text field, skipping empty ones."""
        return " ".join(part for part in self._text_parts() if part)


class AgentItem(_ItemBase):
    """An autonomous-agent profile."""

    kind: Literal["agent"] = Field(default="agent", validation_alias=AliasChoices("kind", "type"))
    source: str = "moltbook"
    karma: int = 0
    followers: int = Field(default=0, ge=0)
    is_active: bool = False
    last_active: datetime | None = None
    recent_posts: list[Post] = Field(default_factory=list)

    @field_validator("recent_posts", mode="before")
    @classmethod
    def _coerce_posts_none(cls, v: list[Post] | None) -> list[Post]:
        return v if v is not None else []

    def _text_parts(self) -> list[str]:
        parts = super()._text_parts()
        parts.extend(f"{p.title} {p.content}" for p in self.recent_posts)
        return parts


class SkillItem(_ItemBase):
    """An installable skill package."""

    kind: Literal["skill"] = Field(default="skill", validation_alias=AliasChoices("kind", "type"))
    source: str = "clawdhub"
    slug: str = ""
    tags: list[str] = Field(default_factory=list)
    stats: SkillStats = Field(default_factory=SkillStats)
    latest_version: str = ""

    @field_validator("tags", mode="before")
    @classmethod
    def _coerce_tags_none(cls, v: list[str] | None) -> list[str]:
        return v if v is not None else []

    @field_validator("slug", "latest_version", mode="before")
    @classmethod
    def _coerce_skill_text_none(cls, v: str | None) -> str:
        return v if v is not None else ""

    def _text_parts(self) -> list[str]:
        parts = super()._text_parts()
        parts.extend(self.tags)
        return parts


def _item_kind(value: Any) -> str | None:
    """Read the kind tag from raw input (``kind`` or legacy ``type``) or a model."""
    if isinstance(value, dict):
        return value.get("kind", value.get("type"))
    return getattr(value, "kind", None)


Item = Annotated[
    Union[  # noqa: UP007
        Annotated[AgentItem, Tag(ItemKind.AGENT.value)],
        Annotated[SkillItem, Tag(ItemKind.SKILL.value)],
    ],
    Discriminator(_item_kind),
]

_ITEMS_ADAPTER: TypeAdapter[list[Item]] = TypeAdapter(list[Item])


def parse_items(raw: list[dict[str, Any]]) -> list[AgentItem | SkillItem]:
    """Validate raw JSON records into typed items."""
    return _ITEMS_ADAPTER.validate_python(raw)


def dump_items(items: list[AgentItem | SkillItem]) -> list[dict[str, Any]]:
    """Serialize items back to their JSON wire form."""
    return _ITEMS_ADAPTER.dump_python(items, mode="json", by_alias=True)


class SearchResult(BaseModel):
    """A scored item produced by the ranker.

    ``item`` is the caller's object, shared rather than copied.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    item: Item
    score: float = Field(default=0.0, ge=0.0)
    matched_terms: list[str] = Field(default_factory=list)
    skills: list[str] = Field(default_factory=list)
