"""
API Client Module

Async HTTP client for the e621 posts API: list, lookup by id or md5, and
edit. Every call is a single independent request; nothing is cached or
retried.
"""

import base64
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union
from urllib.parse import quote, urlencode

import httpx

from ..config import API, ClientConfig
from ..errors import APIError, AuthenticationRequired, InvalidArgument
from .filters import filter_posts
from .models import NullableURLPost, Post, ResolvedPost
from .urls import construct_url_from_md5, fix_url


logger = logging.getLogger(__name__)


class E621Client:
    """
    HTTP client for the e621 API.

    Features:
    - Optional basic auth (username + API key)
    - Client-side tag blacklist for list results
    - Reconstruction of null media URLs from the file md5
    - Injectable httpx transport for testing or proxying

    The client holds only its immutable ClientConfig, so one instance can
    serve any number of concurrent calls.
    """

    def __init__(
        self,
        username: Optional[str] = None,
        api_key: Optional[str] = None,
        blacklist: Optional[Union[str, Sequence[str]]] = None,
        user_agent: Optional[str] = None,
        fix_null_urls: bool = True,
        base_domain: Optional[str] = None,
        set_host: bool = False,
        *,
        config: Optional[ClientConfig] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize the client.

        Either pass the individual settings or a ready ClientConfig via
        ``config``; when ``config`` is given the other settings are ignored.
        """
        self.config = config or ClientConfig.create(
            username=username,
            api_key=api_key,
            blacklist=blacklist,
            user_agent=user_agent,
            fix_null_urls=fix_null_urls,
            base_domain=base_domain,
            set_host=set_host,
        )
        self._transport = transport
        logger.info(
            f"E621Client initialized (base_url: {self.config.base_url}, "
            f"authenticated: {self.config.has_credentials})"
        )

    @property
    def auth(self) -> Optional[str]:
        """Basic-auth token, or None unless both credentials are set."""
        if not self.config.has_credentials:
            return None
        raw = f"{self.config.username}:{self.config.api_key}".encode("utf-8")
        return base64.b64encode(raw).decode("ascii")

    async def list_posts(
        self,
        tags: Optional[Union[str, Sequence[str]]] = None,
        limit: Optional[int] = None,
        page: Optional[Union[int, str]] = None,
    ) -> List[Post]:
        """
        Search posts.

        Args:
            tags: Tags to search for, as a list or a space separated string (40 max).
            limit: Maximum number of posts to return (320 max).
            page: Page number, or a ``a<id>``/``b<id>`` cursor.

        Returns:
            Posts that survived the blacklist, with URLs fixed if configured.

        Raises:
            InvalidArgument: Too many tags or limit too large.
            APIError: The API answered with a non-200 status.
        """
        if isinstance(tags, str):
            tags = tags.split()
        tags = list(tags or [])
        if len(tags) > API.max_tags:
            raise InvalidArgument(f"You may only supply up to {API.max_tags} tags.")
        if limit and limit > API.max_limit:
            raise InvalidArgument(f"You may only request up to {API.max_limit} posts at a time.")

        query = []
        if tags:
            query.append(f"tags={quote(' '.join(tags), safe='')}")
        if limit:
            query.append(f"limit={limit}")
        if page:
            query.append(f"page={quote(str(page), safe='')}")
        path = "/posts.json"
        if query:
            path = f"{path}?{'&'.join(query)}"

        data = await self._request("GET", path, endpoint="/posts.json")

        items = data.get("posts")
        if not isinstance(items, list):
            raise ValueError(f"Unexpected API response format: no 'posts' list in {sorted(data)}")

        posts = filter_posts([Post.from_dict(item) for item in items], self.config.blacklist)
        if self.config.fix_null_urls:
            posts = [fix_url(post) for post in posts]

        logger.info(f"Fetched {len(posts)} posts ({len(items) - len(posts)} blacklisted)")
        return posts

    async def get_post_by_id(self, post_id: Union[int, str]) -> Post:
        """
        Get a single post by id.

        Raises:
            InvalidArgument: ``post_id`` is not a positive integer.
            APIError: The API answered with a non-200 status.
        """
        post_id = _validate_post_id(post_id)
        endpoint = f"/posts/{post_id}.json"
        data = await self._request("GET", endpoint)
        return self._finish(_single_post(data))

    async def get_post_by_md5(self, md5: str) -> Post:
        """
        Get a single post by the md5 of its file.

        The response is read through its singular ``post`` field.

        Raises:
            InvalidArgument: ``md5`` is not 32 characters long.
            APIError: The API answered with a non-200 status.
        """
        if not isinstance(md5, str) or len(md5) != API.md5_length:
            raise InvalidArgument("Invalid md5 provided.")
        endpoint = f"/posts.json?md5={md5}"
        data = await self._request("GET", f"/posts.json?md5={quote(md5, safe='')}", endpoint=endpoint)
        return self._finish(_single_post(data))

    async def edit_post(
        self,
        post_id: Union[int, str],
        reason: Optional[str] = None,
        tag_changes: Optional[str] = None,
        source_changes: Optional[str] = None,
        parent_id: Optional[int] = None,
        description: Optional[str] = None,
        rating: Optional[str] = None,
        rating_locked: Optional[bool] = None,
        note_locked: Optional[bool] = None,
        has_embedded_notes: Optional[bool] = None,
    ) -> Post:
        """
        Edit a post.

        The current post is fetched first to supply the ``old_*`` values the
        API expects next to parent, description and rating changes. The read
        and the write are two separate requests.

        Args:
            post_id: Post to edit.
            reason: Edit reason shown in the post history.
            tag_changes: Tag diff, e.g. ``"dog -cat"``.
            source_changes: Source diff, same syntax as tag_changes.
            parent_id: New parent post id.
            description: New description.
            rating: New rating (``s``, ``q`` or ``e``).
            rating_locked: Lock the rating.
            note_locked: Lock notes.
            has_embedded_notes: Mark the post as having embedded notes.

        Returns:
            The updated post.

        Raises:
            InvalidArgument: ``post_id`` is not a positive integer.
            AuthenticationRequired: No username/API key configured.
            APIError: Either request got a non-200 status.
        """
        post_id = _validate_post_id(post_id)
        if not self.auth:
            raise AuthenticationRequired()

        current = await self.get_post_by_id(post_id)

        fields: List[Tuple[str, str]] = [
            ("post[edit_reason]", reason or API.default_edit_reason),
        ]
        if tag_changes:
            fields.append(("post[tag_string_diff]", tag_changes))
        if source_changes:
            fields.append(("post[source_diff]", source_changes))
        if parent_id:
            old_parent = current.relationships.parent_id
            fields.append(("post[parent_id]", str(parent_id)))
            fields.append(("post[old_parent_id]", "null" if old_parent is None else str(old_parent)))
        if description:
            fields.append(("post[description]", description))
            fields.append(("post[old_description]", current.description))
        if rating:
            fields.append(("post[rating]", rating))
            fields.append(("post[old_rating]", current.rating))
        if rating_locked:
            fields.append(("post[is_rating_locked]", "true"))
        if note_locked:
            fields.append(("post[is_note_locked]", "true"))
        if has_embedded_notes:
            fields.append(("post[has_embedded_notes]", "true"))

        endpoint = f"/posts/{post_id}.json"
        logger.info(f"Editing post {post_id} ({', '.join(k for k, _ in fields[1:]) or 'reason only'})")
        data = await self._request("PATCH", endpoint, body=urlencode(fields, quote_via=quote))
        return self._finish(_single_post(data))

    def fix_url(self, post: NullableURLPost) -> ResolvedPost:
        """Fill in null media URLs; see urls.fix_url."""
        return fix_url(post)

    def construct_url_from_md5(self, md5: str, ext: str = "png", preview: bool = False) -> str:
        """Build a static file URL; see urls.construct_url_from_md5."""
        return construct_url_from_md5(md5, ext, preview)

    def _finish(self, post: NullableURLPost) -> Post:
        return fix_url(post) if self.config.fix_null_urls else post

    def _headers(self, method: str) -> Dict[str, str]:
        headers = {"User-Agent": self.config.user_agent}
        if method == "PATCH":
            headers["Content-Type"] = "application/x-www-form-urlencoded"
        if self.auth:
            headers["Authorization"] = f"Basic {self.auth}"
        if self.config.set_host:
            headers["Host"] = API.host_header
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        endpoint: Optional[str] = None,
        body: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Send one request and return the decoded JSON object.

        Args:
            method: HTTP method.
            path: Path including any query string.
            endpoint: Name used in APIError (defaults to ``path``).
            body: Form-encoded request body.

        Raises:
            APIError: Status other than 200.
            httpx.TransportError: Connection-level failure, unwrapped.
            ValueError: Body is not a JSON object.
        """
        url = f"{self.config.base_url}{path}"
        logger.debug(f"{method} {url}")

        async with httpx.AsyncClient(
            timeout=self.config.timeout_seconds,
            transport=self._transport,
        ) as client:
            response = await client.request(
                method,
                url,
                headers=self._headers(method),
                content=body.encode("utf-8") if body is not None else None,
            )

        logger.debug(f"{method} {path} -> {response.status_code}")
        if response.status_code != 200:
            raise APIError(response.status_code, response.reason_phrase, method, endpoint or path)

        data = response.json()
        if not isinstance(data, dict):
            raise ValueError(f"Unexpected API response format: {type(data)}")
        return data


def _validate_post_id(post_id: Union[int, str]) -> int:
    """Accept positive ints and strings of digits; reject everything else."""
    if isinstance(post_id, bool):
        raise InvalidArgument("Invalid id provided.")
    if isinstance(post_id, str) and post_id.strip().isdecimal():
        post_id = int(post_id.strip())
    if not isinstance(post_id, int) or post_id < 1:
        raise InvalidArgument("Invalid id provided.")
    return post_id


def _single_post(data: Dict[str, Any]) -> NullableURLPost:
    item = data.get("post")
    if not isinstance(item, dict):
        raise ValueError(f"Unexpected API response format: no 'post' object in {sorted(data)}")
    return Post.from_dict(item)
