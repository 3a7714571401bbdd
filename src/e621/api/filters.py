"""Client-side tag blacklist."""

import logging
from typing import AbstractSet, List

from .models import Post


logger = logging.getLogger(__name__)


def is_blacklisted(post: Post, blacklist: AbstractSet[str]) -> bool:
    """True if any of the post's tags, in any category, is blacklisted."""
    return bool(blacklist) and post.has_any_tag(blacklist)


def filter_posts(posts: List[Post], blacklist: AbstractSet[str]) -> List[Post]:
    """Drop blacklisted posts, keeping the order of the rest."""
    if not blacklist:
        return list(posts)

    kept = [post for post in posts if not is_blacklisted(post, blacklist)]
    dropped = len(posts) - len(kept)
    if dropped:
        logger.debug(f"Blacklist removed {dropped} of {len(posts)} posts")
    return kept
