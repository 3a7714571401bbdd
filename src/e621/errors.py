"""
Error types raised by the e621 client.

Transport failures (DNS, connection, TLS) are not wrapped: they surface as
the httpx exceptions raised by the underlying request.
"""

from typing import Dict, Optional


# Status codes the API documents, mapped to a short category name
STATUS_REASONS: Dict[int, str] = {
    400: "BadRequest",
    401: "Unauthorized",
    403: "Forbidden",
    404: "NotFound",
    429: "RateLimited",
}


class E621Error(Exception):
    """Base class for errors raised by this library."""


class InvalidArgument(E621Error, ValueError):
    """Caller input rejected before any request was made."""


class AuthenticationRequired(E621Error):
    """An authenticated operation was called without username and API key."""

    def __init__(self, message: str = "Authentication is required to use this."):
        super().__init__(message)


class APIError(E621Error):
    """
    A non-200 response from the API.

    Attributes:
        code: HTTP status code.
        server_message: Status text returned by the server.
        method: HTTP method of the failed request.
        endpoint: Path (and query, where one was sent) of the failed request.
    """

    def __init__(self, code: int, server_message: str, method: str, endpoint: str):
        super().__init__(f"Unexpected {code} {server_message} on {method} {endpoint}")
        self.code = code
        self.server_message = server_message
        self.method = method
        self.endpoint = endpoint

    @property
    def reason(self) -> Optional[str]:
        """Category name for documented status codes, else None."""
        return STATUS_REASONS.get(self.code)

    @property
    def is_rate_limited(self) -> bool:
        return self.code == 429

    def __repr__(self) -> str:
        name = f"APIError[{self.reason}]" if self.reason else "APIError"
        return f"{name}(code={self.code}, method={self.method!r}, endpoint={self.endpoint!r})"
