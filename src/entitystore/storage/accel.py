"""Disk entity store served through a reverse proxy's X-Accel-Redirect."""

import urllib.parse
from pathlib import Path
from typing import Union

from pydantic import BaseModel, field_validator

from ..constants import DEFAULT_REDIRECT_ROOT
from ..errors import InvalidDescriptorError
from .disk import DiskEntityStore

SCHEME = "accelredirect"


class AccelRedirectConfig(BaseModel):
    """On-disk root plus the root under which the proxy exposes it."""
    root: Path
    redirect_root: str = DEFAULT_REDIRECT_ROOT

    @field_validator("redirect_root")
    @classmethod
    def validate_redirect_root(cls, v: str) -> str:
        """Normalize to a single leading slash and no trailing slash."""
        v = v.strip().strip("/")
        return f"/{v}" if v else DEFAULT_REDIRECT_ROOT

    @classmethod
    def from_uri(cls, uri: str) -> "AccelRedirectConfig":
        """
        Parse an ``accelredirect:<root>[#<redirect_root>]`` descriptor.

        Examples:
            "accelredirect:/foo/bar"     -> root=/foo/bar, redirect_root=/cache
            "accelredirect:/foo/bar#baz" -> root=/foo/bar, redirect_root=/baz

        Raises:
            InvalidDescriptorError: On a foreign scheme or missing root
        """
        parsed = urllib.parse.urlsplit(uri)
        if parsed.scheme != SCHEME:
            raise InvalidDescriptorError(uri, f"expected {SCHEME}: scheme")

        path = urllib.parse.unquote(parsed.netloc + parsed.path)
        if not path:
            raise InvalidDescriptorError(uri, "missing on-disk root")

        fragment = urllib.parse.unquote(parsed.fragment)
        return cls(
            root=Path(path).expanduser(),
            redirect_root=fragment or DEFAULT_REDIRECT_ROOT,
        )


class AccelRedirectEntityStore(DiskEntityStore):
    """
    Disk store whose responses are served by the front-end proxy.

    Bytes are stored exactly as in ``DiskEntityStore``. The response codec
    recognizes ``redirect_path`` and, instead of sending the body, emits an
    ``X-Accel-Redirect`` header pointing at the proxy-visible copy of the
    shard path.
    """

    def __init__(self, root: Union[str, Path], redirect_root: str = DEFAULT_REDIRECT_ROOT):
        self.config = AccelRedirectConfig(root=Path(root), redirect_root=redirect_root)
        super().__init__(self.config.root)

    @classmethod
    def resolve(cls, uri: str) -> "AccelRedirectEntityStore":
        """Build a store from an ``accelredirect:`` descriptor."""
        config = AccelRedirectConfig.from_uri(uri)
        return cls(config.root, config.redirect_root)

    @property
    def redirect_root(self) -> str:
        return self.config.redirect_root

    def redirect_path(self, digest: str) -> str:
        """
        Proxy-visible path for an entry.

        Raises:
            ValueError: If digest format is invalid
        """
        relative = self.path_for(digest).relative_to(self.root)
        return f"{self.redirect_root}/{relative.as_posix()}"


__all__ = ["AccelRedirectConfig", "AccelRedirectEntityStore"]
