"""Persistence endpoint client — hands a finished composition to the backend.

POST {"source": <document>} as JSON, return the decoded acknowledgment.
Failures are not retried.
"""

import logging

import httpx

logger = logging.getLogger(__name__)


class PersistenceError(RuntimeError):
    """The endpoint answered with a non-success status."""

    def __init__(self, status_code: int, body: str):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Persistence endpoint returned HTTP {status_code}: {body[:500]}")


async def submit_video(source: dict, url: str, client: httpx.AsyncClient) -> dict:
    """Send a source document to the persistence endpoint.

    Args:
        source: Full composition source document.
        url: Endpoint URL (absolute, or relative to the client's base_url).
        client: Open async client; the caller owns its lifetime.

    Returns:
        Decoded JSON acknowledgment.

    Raises:
        PersistenceError: Non-2xx response.
        httpx.HTTPError: Transport failure (connection, timeout, ...).
    """
    logger.debug("POST %s (%d top-level elements)", url, len(source.get("elements", [])))
    resp = await client.post(url, json={"source": source})
    if not resp.is_success:
        raise PersistenceError(resp.status_code, resp.text)

    ack = resp.json()
    logger.info("Video submitted to %s", url)
    return ack
