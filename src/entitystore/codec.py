"""Serialize response bodies into an entity store and restore them.

The codec holds no storage state of its own. It depends only on the
``EntityStore`` protocol; stores that also implement ``Redirecting``
get their bodies replaced by an ``X-Accel-Redirect`` header.
"""

import logging
from typing import Mapping, Optional

from .constants import DIGEST_HEADER, LENGTH_HEADER, REDIRECT_HEADER
from .response import Response
from .storage.base import EntityStore, Redirecting

logger = logging.getLogger(__name__)


class ResponseCodec:
    """Write and restore response bodies through an injected store."""

    def __init__(self, store: EntityStore):
        self.store = store

    @property
    def redirects(self) -> bool:
        return isinstance(self.store, Redirecting)

    def write_response(self, response: Response) -> Response:
        """
        Store a response's body and annotate its headers.

        Sets ``Content-Length`` and ``X-Content-Digest``. For a redirecting
        store the body is emptied and ``X-Accel-Redirect`` is set; otherwise
        the consumed body is replaced with one freshly opened from the store.

        Args:
            response: Response to write; modified in place

        Returns:
            The same response, for chaining
        """
        original = response.body
        digest, size = self.store.write(original)
        response.headers[LENGTH_HEADER] = str(size)
        response.headers[DIGEST_HEADER] = digest

        if self.redirects:
            response.headers[REDIRECT_HEADER] = self.store.redirect_path(digest)
            response.body = []
        else:
            body = self.store.open(digest)
            if body is None:
                # Nothing retained; only a re-iterable body survives the write
                body = original if isinstance(original, (list, tuple)) else []
            response.body = body

        logger.debug("Wrote response body %s (%d bytes)", digest, size)
        return response

    def restore_response(self, headers: Mapping[str, str], status: int = 200) -> Optional[Response]:
        """
        Rebuild a response from stored headers.

        Args:
            headers: Headers previously annotated by ``write_response``
            status: Status of the rebuilt response

        Returns:
            New Response with a freshly opened body, or None when the digest
            header is missing or the store has no such entry
        """
        digest = headers.get(DIGEST_HEADER)
        if not digest:
            return None

        restored = dict(headers)
        if self.redirects:
            if not self.store.exist(digest):
                logger.debug("Entity missing for restore: %s", digest)
                return None
            restored[REDIRECT_HEADER] = self.store.redirect_path(digest)
            return Response(status, restored, [])

        body = self.store.open(digest)
        if body is None:
            logger.debug("Entity missing for restore: %s", digest)
            return None
        return Response(status, restored, body)


__all__ = ["ResponseCodec"]
