"""Proxy configuration domain model."""

from dataclasses import dataclass
from urllib.parse import urlsplit


@dataclass(frozen=True)
class ProxyConfig:
    """Proxy endpoints resolved for this process run.

    Both endpoints absent means a direct connection.
    """

    http: str | None = None
    https: str | None = None

    @classmethod
    def direct(cls) -> "ProxyConfig":
        """Return a configuration without any proxy."""
        return cls()

    @property
    def is_direct(self) -> bool:
        """Whether no proxy is configured at all."""
        return self.http is None and self.https is None

    def for_url(self, url: str) -> str | None:
        """Return the proxy to use for the scheme of the given URL."""
        scheme = urlsplit(url).scheme.lower()
        if scheme == "https":
            return self.https
        if scheme == "http":
            return self.http
        return None
