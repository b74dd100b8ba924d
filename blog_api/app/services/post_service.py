"""
Service layer for blog posts.

``PostStore`` owns the ordered in-memory collection of posts and
implements list, create, update and delete.  Expected outcomes such as
a missing post are reported through ``PostResult`` rather than raised,
so the API layer only has to map a result status to an HTTP response.

All methods are synchronous and never yield to the event loop.  When
called from ``async def`` handlers each operation therefore runs to
completion before another request can touch the collection.  A store
backed by real asynchronous I/O would need an ``asyncio.Lock`` or a
transactional database instead.
"""

from __future__ import annotations

import enum
import logging
import secrets
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from blog_api.app.schemas.post import PostCreate, PostRead, PostUpdate
from blog_api.app.services.seed_data import SEED_POSTS

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Post not found"


class ResultStatus(str, enum.Enum):
    OK = "ok"
    CREATED = "created"
    DELETED = "deleted"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class PostResult:
    """Outcome of a store operation.

    Attributes:
        status: What happened.
        post: The created or updated post, ``None`` otherwise.
        message: Explanation for ``NOT_FOUND`` results.
    """

    status: ResultStatus
    post: Optional[PostRead] = None
    message: Optional[str] = None

    @property
    def found(self) -> bool:
        return self.status is not ResultStatus.NOT_FOUND

    @classmethod
    def not_found(cls) -> "PostResult":
        return cls(status=ResultStatus.NOT_FOUND, message=NOT_FOUND_MESSAGE)


def _now_ms() -> int:
    return int(time.time() * 1000)


class PostStore:
    """In-memory, insertion ordered collection of posts."""

    def __init__(self, posts: Optional[Iterable[Dict[str, Any]]] = None) -> None:
        self._posts: List[PostRead] = [PostRead.model_validate(p) for p in posts or []]
        self._last_timestamp = max((p.timestamp for p in self._posts), default=0)

    @classmethod
    def with_seed_posts(cls) -> "PostStore":
        """Return a store holding the two sample posts."""
        return cls(SEED_POSTS)

    def __len__(self) -> int:
        return len(self._posts)

    def ids(self) -> List[str]:
        return [p.id for p in self._posts]

    def list_posts(self) -> List[PostRead]:
        """Return every post in collection order."""
        logger.info("GET /api/posts requested")
        return list(self._posts)

    def create_post(self, data: PostCreate) -> PostResult:
        """Append a new post built from ``data``.

        The store assigns ``timestamp`` (milliseconds since the epoch,
        never lower than the previously issued one) and an ``id`` that
        is not used by any post currently held.
        """
        timestamp = max(_now_ms(), self._last_timestamp)
        self._last_timestamp = timestamp
        post = PostRead.model_validate(
            {**data.model_dump(), "id": self._new_id(timestamp), "timestamp": timestamp}
        )
        self._posts.append(post)
        logger.info("POST /api/posts - New post created: %s", post.title)
        return PostResult(status=ResultStatus.CREATED, post=post)

    def update_post(self, post_id: str, data: PostUpdate) -> PostResult:
        """Overlay the fields present in ``data`` onto the stored post.

        The post keeps its position and its ``id``; fields not sent by
        the client keep their current values.
        """
        index = self._index_of(post_id)
        if index is None:
            logger.warning("PUT /api/posts/%s - Post not found.", post_id)
            return PostResult.not_found()
        changes = data.model_dump(exclude_unset=True)
        updated = PostRead.model_validate({**self._posts[index].model_dump(), **changes, "id": post_id})
        self._posts[index] = updated
        logger.info("PUT /api/posts/%s - Post updated: %s", post_id, updated.title)
        return PostResult(status=ResultStatus.OK, post=updated)

    def delete_post(self, post_id: str) -> PostResult:
        """Remove every post whose ``id`` equals ``post_id``."""
        initial_length = len(self._posts)
        self._posts = [p for p in self._posts if p.id != post_id]
        if len(self._posts) < initial_length:
            logger.info("DELETE /api/posts/%s - Post deleted.", post_id)
            return PostResult(status=ResultStatus.DELETED)
        logger.warning("DELETE /api/posts/%s - Post not found.", post_id)
        return PostResult.not_found()

    def _index_of(self, post_id: str) -> Optional[int]:
        for index, post in enumerate(self._posts):
            if post.id == post_id:
                return index
        return None

    def _new_id(self, timestamp: int) -> str:
        taken = set(self.ids())
        while True:
            candidate = f"post_{timestamp}_{secrets.token_hex(4)}"
            if candidate not in taken:
                return candidate
