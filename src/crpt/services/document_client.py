from __future__ import annotations

import logging

from crpt.config import DOCUMENT_CREATE_URL
from crpt.models.document import Document
from crpt.services.json_encoder import encode_document
from crpt.services.rate_limiter import RateLimiter, TimeUnit
from crpt.services.transport import send_document

logger = logging.getLogger(__name__)


class DocumentClient:
    """Rate-limited client for the documents/create endpoint.

    Safe to share between threads: the limiter is the only mutable state and
    the HTTP call runs outside its lock.
    """

    def __init__(
        self,
        time_unit: TimeUnit | str | None = None,
        request_limit: int | None = None,
        *,
        url: str = DOCUMENT_CREATE_URL,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        """Build a limiter from *time_unit* and *request_limit*, or use *rate_limiter*.

        Exactly one of the two forms must be given.
        """
        self.url = url
        if rate_limiter is None:
            if time_unit is None or request_limit is None:
                raise ValueError("time_unit and request_limit are required without a rate_limiter")
            rate_limiter = RateLimiter(request_limit, TimeUnit.parse(time_unit).seconds)
        elif time_unit is not None or request_limit is not None:
            raise ValueError("time_unit and request_limit cannot be combined with a rate_limiter")
        self.rate_limiter = rate_limiter

    def create_document(self, document: Document, signature: str) -> bool:
        """Submit *document* unless the current window is exhausted.

        Returns False when rate-limited (nothing is sent). Returns True once any
        HTTP response arrives, whatever its status code. *signature* is accepted
        but not sent.

        Raises SerializationError or TransportError; neither is retried.
        """
        if not self.rate_limiter.try_acquire():
            logger.info(
                "Failed to make '/documents/create' call, cause request limit '%d'",
                self.rate_limiter.limit,
            )
            return False

        body = encode_document(document)
        status = send_document(self.url, body)

        if 200 <= status < 300:
            logger.info(
                "Received the response status code '%d' from '/documents/create' call", status
            )
        else:
            logger.warning(
                "Received the response status code '%d' from '/documents/create' call", status
            )
        return True

    def close(self) -> None:
        self.rate_limiter.close()

    def __enter__(self) -> DocumentClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
