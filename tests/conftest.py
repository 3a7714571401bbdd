"""
Shared fixtures: sample post payloads and a recording mock transport.
"""

import sys
from pathlib import Path
from typing import Callable, Dict, List

import httpx
import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


MD5 = "6fd0b0f2237543bfeee5ca9318a97b46"


def make_post_data(post_id: int = 1022094, tags=None, md5: str = MD5, urls: bool = True, **extra) -> Dict:
    """Build a post object shaped like the API's JSON."""
    data = {
        "id": post_id,
        "created_at": "2016-10-30T01:46:10.614-04:00",
        "updated_at": "2020-06-03T11:12:13.000-04:00",
        "file": {
            "width": 1000,
            "height": 800,
            "ext": "jpg",
            "size": 123456,
            "md5": md5,
            "url": f"https://static1.e621.net/data/{md5[:2]}/{md5[2:4]}/{md5}.jpg" if urls else None,
        },
        "preview": {
            "width": 150,
            "height": 120,
            "url": f"https://static1.e621.net/data/preview/{md5[:2]}/{md5[2:4]}/{md5}.jpg" if urls else None,
        },
        "sample": {
            "has": False,
            "width": 1000,
            "height": 800,
            "url": f"https://static1.e621.net/data/{md5[:2]}/{md5[2:4]}/{md5}.jpg" if urls else None,
            "alternates": {},
        },
        "score": {"up": 10, "down": -1, "total": 9},
        "tags": {
            "general": ["solo"],
            "species": ["wolf"],
            "character": [],
            "copyright": [],
            "artist": ["someartist"],
            "invalid": [],
            "lore": [],
            "meta": [],
        },
        "locked_tags": [],
        "change_seq": 42,
        "flags": {
            "pending": False,
            "flagged": False,
            "note_locked": False,
            "status_locked": False,
            "rating_locked": False,
            "deleted": False,
        },
        "rating": "s",
        "fav_count": 3,
        "sources": ["https://example.com/art"],
        "pools": [],
        "relationships": {
            "parent_id": None,
            "has_children": False,
            "has_active_children": False,
            "children": [],
        },
        "approver_id": None,
        "uploader_id": 1,
        "description": "old description",
        "comment_count": 0,
        "is_favorited": False,
        "has_notes": False,
        "duration": None,
    }
    if tags is not None:
        data["tags"] = {**data["tags"], **tags}
    data.update(extra)
    return data


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it was handed."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(record)


@pytest.fixture
def post_data():
    """Factory for post payloads."""
    return make_post_data


@pytest.fixture
def transport_for():
    """Build a RecordingTransport from a handler."""
    return RecordingTransport
