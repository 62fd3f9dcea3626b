"""Response envelope passed between the HTTP cache and the entity store."""

from dataclasses import dataclass, field
from typing import Dict, Iterable


@dataclass
class Response:
    """Status, headers and body of one cached HTTP response.

    ``body`` is any iterable of byte chunks; a disk-backed body also
    exposes ``path``.
    """

    status: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: Iterable[bytes] = field(default_factory=list)

    def body_bytes(self) -> bytes:
        """Materialize the body. Consumes single-pass bodies."""
        return b"".join(self.body)
