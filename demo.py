"""
Client Demo Script

Fetches a page of posts and one post by id from e621 and prints a short
summary of each. Needs network access.

    python demo.py "wolf rating:s" --limit 5 --blacklist "gore"
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from e621.api import E621Client
from e621.errors import APIError, E621Error
from e621.log import setup_logging


async def demonstrate_client(tags: str, limit: int, blacklist, post_id: int) -> int:
    """Run a search and a lookup, printing what came back."""
    client = E621Client(blacklist=blacklist)

    print("=" * 60)
    print("e621 Client Demo")
    print("=" * 60)

    print(f"\n[1/2] Searching for: {tags!r} (limit {limit})")
    posts = await client.list_posts(tags, limit=limit)
    for post in posts:
        print(f"      #{post.id} [{post.rating}] score={post.score.total} {post.file.url}")
    print(f"      {len(posts)} posts after blacklist")

    print(f"\n[2/2] Looking up post {post_id}")
    try:
        post = await client.get_post_by_id(post_id)
    except APIError as e:
        print(f"      [X] {e} ({e.reason})")
        return 1
    print(f"      [OK] md5={post.file.md5} ext={post.file.ext}")
    print(f"      [OK] artists: {', '.join(post.tags.artist) or '-'}")
    print(f"      [OK] preview: {post.preview.url}")

    print("\n" + "=" * 60)
    print("Demo Complete!")
    print("=" * 60)
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="e621 client demo")
    parser.add_argument("tags", nargs="?", default="rating:s", help="Search tags")
    parser.add_argument("--limit", type=int, default=5)
    parser.add_argument("--blacklist", action="append", default=[], help="Tag to hide (repeatable)")
    parser.add_argument("--post-id", type=int, default=1022094)
    parser.add_argument("--debug", action="store_true", help="Log requests")
    args = parser.parse_args()

    setup_logging("DEBUG" if args.debug else "WARNING")
    try:
        return asyncio.run(demonstrate_client(args.tags, args.limit, args.blacklist, args.post_id))
    except E621Error as e:
        print(f"[!] {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
