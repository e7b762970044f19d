from __future__ import annotations

import logging

import requests.exceptions
from requests import post

from crpt.config import JSON_MEDIA_TYPE
from crpt.services.exceptions import TransportError

logger = logging.getLogger(__name__)


def send_document(url: str, body: bytes) -> int:
    """POST *body* as JSON to *url* and return the response status code.

    Single attempt, library-default timeout and redirects. The response is
    streamed and closed as soon as the status code is read.
    """
    try:
        with post(
            url,
            data=body,
            headers={"Content-Type": JSON_MEDIA_TYPE},
            stream=True,
        ) as resp:
            return resp.status_code
    except (requests.exceptions.RequestException, OSError) as exc:
        logger.debug("POST %s failed: %s", url, exc)
        raise TransportError(f"Failed to make a call to {url}", url=url) from exc
