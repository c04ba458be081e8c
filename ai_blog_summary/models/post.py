"""
Blog post model used by the storage layer and the front-end renderers.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from .base import BaseModel


class PostStatus(Enum):
    """Publication status of a post."""
    DRAFT = "draft"
    PUBLISH = "publish"
    PRIVATE = "private"
    TRASH = "trash"


@dataclass
class Post(BaseModel):
    """A blog post as seen by the plugin."""
    id: int
    title: str
    content: str = ""
    status: PostStatus = PostStatus.DRAFT
    permalink: str = ""
    published_at: Optional[datetime] = None
    featured_image: Optional[str] = None
    category: Optional[str] = None

    @property
    def is_published(self) -> bool:
        return self.status == PostStatus.PUBLISH

    def summary_source(self) -> str:
        """Text handed to the summarizer: title, blank line, body."""
        return f"{self.title}\n\n{self.content}"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Post":
        """Create from dictionary (database row or request body)."""
        published_at = data.get("published_at")
        if isinstance(published_at, str) and published_at:
            published_at = datetime.fromisoformat(published_at)
        return cls(
            id=int(data["id"]),
            title=data.get("title") or "",
            content=data.get("content") or "",
            status=PostStatus(data.get("status") or PostStatus.DRAFT.value),
            permalink=data.get("permalink") or "",
            published_at=published_at or None,
            featured_image=data.get("featured_image"),
            category=data.get("category"),
        )
