"""
API Client Module

Provides the async e621 client and the post records it returns.
"""

from .client import E621Client
from .models import NullableURLPost, Post, ResolvedPost, Tags
from .urls import construct_url_from_md5, fix_url

__all__ = [
    "E621Client",
    "Post",
    "NullableURLPost",
    "ResolvedPost",
    "Tags",
    "construct_url_from_md5",
    "fix_url",
]
