"""
Configuration for the e621 client.

Static API constants live in APIConfig; per-client settings live in the
immutable ClientConfig that every E621Client is constructed with.
"""

from pathlib import Path
from dataclasses import dataclass, field
from typing import FrozenSet, Iterable, Optional, Union


__version__ = "1.0.0"


@dataclass(frozen=True)
class APIConfig:
    """Fixed facts about the remote API."""
    base_domain: str = "e621.net"
    host_header: str = "e621.net"
    static_host: str = "static1.e621.net"

    # Request limits enforced before any network call
    max_tags: int = 40
    max_limit: int = 320
    md5_length: int = 32

    default_user_agent: str = f"e621-py/{__version__} (+https://e621.net)"
    default_edit_reason: str = "Edit via e621-py"
    timeout_seconds: Optional[float] = 30.0


API = APIConfig()


@dataclass
class LogConfig:
    """Logging configuration."""
    log_directory: Path = field(default_factory=lambda: Path("logs"))
    log_filename: str = "e621.log"
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @property
    def log_file_path(self) -> Path:
        """Get full path to the log file."""
        return self.log_directory / self.log_filename


@dataclass(frozen=True)
class ClientConfig:
    """
    Settings owned by a single E621Client.

    Empty credentials are normalised to None so that ``has_credentials``
    only reports True when both halves of the basic-auth pair are usable.
    """
    username: Optional[str] = None
    api_key: Optional[str] = None
    blacklist: FrozenSet[str] = frozenset()
    user_agent: str = API.default_user_agent
    fix_null_urls: bool = True
    base_domain: str = API.base_domain
    set_host: bool = False
    timeout_seconds: Optional[float] = API.timeout_seconds

    def __post_init__(self):
        # frozen: normalise through object.__setattr__
        object.__setattr__(self, "username", self.username or None)
        object.__setattr__(self, "api_key", self.api_key or None)
        object.__setattr__(self, "blacklist", _tag_set(self.blacklist))
        object.__setattr__(self, "user_agent", self.user_agent or API.default_user_agent)
        object.__setattr__(self, "base_domain", self.base_domain or API.base_domain)

    @classmethod
    def create(
        cls,
        username: Optional[str] = None,
        api_key: Optional[str] = None,
        blacklist: Optional[Union[str, Iterable[str]]] = None,
        user_agent: Optional[str] = None,
        fix_null_urls: bool = True,
        base_domain: Optional[str] = None,
        set_host: bool = False,
        timeout_seconds: Optional[float] = API.timeout_seconds,
    ) -> "ClientConfig":
        """Build a config from loosely typed arguments (None means default)."""
        return cls(
            username=username,
            api_key=api_key,
            blacklist=_tag_set(blacklist),
            user_agent=user_agent or API.default_user_agent,
            fix_null_urls=fix_null_urls,
            base_domain=base_domain or API.base_domain,
            set_host=set_host,
            timeout_seconds=timeout_seconds,
        )

    @property
    def has_credentials(self) -> bool:
        return bool(self.username and self.api_key)

    @property
    def base_url(self) -> str:
        return f"https://{self.base_domain}"


def _tag_set(tags: Optional[Union[str, Iterable[str]]]) -> FrozenSet[str]:
    """A bare string is one tag, not a sequence of one-letter tags."""
    if isinstance(tags, str):
        return frozenset([tags]) if tags else frozenset()
    return frozenset(tags or ())
