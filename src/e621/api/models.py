"""
Post Records

Typed, read-only snapshots of the post objects returned by the API.

A single generic record covers both stages of the pipeline: the decoder
produces ``NullableURLPost`` (media URLs may be None, as the API sends them),
and ``fix_url`` turns it into a ``ResolvedPost`` whose URLs are all set.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar


UrlT = TypeVar("UrlT", str, Optional[str])

TAG_CATEGORIES = (
    "general",
    "species",
    "character",
    "copyright",
    "artist",
    "invalid",
    "lore",
    "meta",
)


@dataclass(frozen=True)
class PostFile(Generic[UrlT]):
    """The original upload."""
    width: int
    height: int
    ext: str
    md5: str
    url: UrlT
    size: int = 0


@dataclass(frozen=True)
class PostPreview(Generic[UrlT]):
    """Thumbnail."""
    width: int
    height: int
    url: UrlT


@dataclass(frozen=True)
class PostSample(Generic[UrlT]):
    """Downscaled sample; ``has`` is False when the post has none."""
    has: bool
    width: int
    height: int
    url: UrlT
    alternates: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Score:
    up: int = 0
    down: int = 0
    total: int = 0


@dataclass(frozen=True)
class Tags:
    """Tags grouped by category."""
    general: List[str] = field(default_factory=list)
    species: List[str] = field(default_factory=list)
    character: List[str] = field(default_factory=list)
    copyright: List[str] = field(default_factory=list)
    artist: List[str] = field(default_factory=list)
    invalid: List[str] = field(default_factory=list)
    lore: List[str] = field(default_factory=list)
    meta: List[str] = field(default_factory=list)

    def all(self) -> List[str]:
        """Every tag across all categories, in category order."""
        tags: List[str] = []
        for category in TAG_CATEGORIES:
            tags.extend(getattr(self, category))
        return tags

    @classmethod
    def from_dict(cls, data: Dict[str, List[str]]) -> "Tags":
        return cls(**{c: list(data.get(c) or []) for c in TAG_CATEGORIES})


@dataclass(frozen=True)
class Flags:
    pending: bool = False
    flagged: bool = False
    note_locked: bool = False
    status_locked: bool = False
    rating_locked: bool = False
    deleted: bool = False


@dataclass(frozen=True)
class Relationships:
    parent_id: Optional[int] = None
    has_children: bool = False
    has_active_children: bool = False
    children: List[int] = field(default_factory=list)


@dataclass(frozen=True)
class Post(Generic[UrlT]):
    """Represents a post from the API."""
    id: int
    created_at: str
    updated_at: Optional[str]
    file: PostFile[UrlT]
    preview: PostPreview[UrlT]
    sample: PostSample[UrlT]
    score: Score
    tags: Tags
    rating: str  # s, q, e
    locked_tags: List[str] = field(default_factory=list)
    change_seq: int = 0
    flags: Flags = field(default_factory=Flags)
    fav_count: int = 0
    sources: List[str] = field(default_factory=list)
    pools: List[int] = field(default_factory=list)
    relationships: Relationships = field(default_factory=Relationships)
    approver_id: Optional[int] = None
    uploader_id: Optional[int] = None
    description: str = ""
    comment_count: int = 0
    is_favorited: bool = False
    has_notes: bool = False
    duration: Optional[float] = None

    def has_any_tag(self, tags) -> bool:
        """True if any tag in ``tags`` appears in any category of this post."""
        return not set(tags).isdisjoint(self.tags.all())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NullableURLPost":
        """
        Decode a post object from an API response.

        Optional fields fall back to neutral defaults. Missing identity or
        media fields raise KeyError.
        """
        file = data["file"]
        preview = data.get("preview") or {}
        sample = data.get("sample") or {}
        relationships = data.get("relationships") or {}
        flags = data.get("flags") or {}
        score = data.get("score") or {}

        return cls(
            id=data["id"],
            created_at=data.get("created_at", ""),
            updated_at=data.get("updated_at"),
            file=PostFile(
                width=file.get("width", 0),
                height=file.get("height", 0),
                ext=file["ext"],
                md5=file["md5"],
                url=file.get("url"),
                size=file.get("size", 0),
            ),
            preview=PostPreview(
                width=preview.get("width", 0),
                height=preview.get("height", 0),
                url=preview.get("url"),
            ),
            sample=PostSample(
                has=sample.get("has", False),
                width=sample.get("width", 0),
                height=sample.get("height", 0),
                url=sample.get("url"),
                alternates=dict(sample.get("alternates") or {}),
            ),
            score=Score(
                up=score.get("up", 0),
                down=score.get("down", 0),
                total=score.get("total", 0),
            ),
            tags=Tags.from_dict(data["tags"]),
            rating=data.get("rating", "s"),
            locked_tags=list(data.get("locked_tags") or []),
            change_seq=data.get("change_seq", 0),
            flags=Flags(**{k: bool(flags.get(k, False)) for k in Flags.__dataclass_fields__}),
            fav_count=data.get("fav_count", 0),
            sources=list(data.get("sources") or []),
            pools=list(data.get("pools") or []),
            relationships=Relationships(
                parent_id=relationships.get("parent_id"),
                has_children=relationships.get("has_children", False),
                has_active_children=relationships.get("has_active_children", False),
                children=list(relationships.get("children") or []),
            ),
            approver_id=data.get("approver_id"),
            uploader_id=data.get("uploader_id"),
            description=data.get("description") or "",
            comment_count=data.get("comment_count", 0),
            is_favorited=data.get("is_favorited", False),
            has_notes=data.get("has_notes", False),
            duration=data.get("duration"),
        )


NullableURLPost = Post[Optional[str]]
ResolvedPost = Post[str]
