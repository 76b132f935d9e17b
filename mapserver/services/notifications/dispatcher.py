"""Batched push notification dispatch."""

import logging
from dataclasses import dataclass

import httpx

from mapserver.config import settings

logger = logging.getLogger(__name__)

# Expo push API accepts at most 100 messages per request
MAX_BATCH_SIZE = 100


@dataclass
class DeliveryStatus:
    """Outcome of sending to one token."""

    token: str
    status: str  # "ok" or "error"
    message: str | None = None


def batch_tokens(tokens: list[str], size: int = MAX_BATCH_SIZE) -> list[list[str]]:
    """Split tokens into consecutive batches of at most `size`."""
    if size <= 0:
        raise ValueError(f"Batch size must be positive, got {size}")
    return [tokens[i : i + size] for i in range(0, len(tokens), size)]


class NotificationDispatcher:
    """Sends a title/body notification to many tokens, one request per batch.

    No retries: a failed batch reports an error status for each of its tokens.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        push_url: str | None = None,
        batch_size: int | None = None,
    ):
        self.client = client
        self.push_url = push_url or settings.push_api_url
        self.batch_size = min(batch_size or settings.notification_batch_size, MAX_BATCH_SIZE)

    async def send(self, tokens: list[str], title: str, body: str) -> list[DeliveryStatus]:
        results: list[DeliveryStatus] = []
        for batch in batch_tokens(tokens, self.batch_size):
            results.extend(await self._send_batch(batch, title, body))
        return results

    async def _send_batch(self, batch: list[str], title: str, body: str) -> list[DeliveryStatus]:
        messages = [
            {"to": token, "sound": "default", "title": title, "body": body} for token in batch
        ]
        try:
            response = await self.client.post(
                self.push_url,
                json=messages,
                headers={"Accept": "application/json"},
            )
            response.raise_for_status()
            payload = response.json()
            tickets = payload.get("data") if isinstance(payload, dict) else None
            if not isinstance(tickets, list):
                raise ValueError("Push response has no ticket list")
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Push batch of {len(batch)} tokens failed: {e}")
            return [DeliveryStatus(token=token, status="error", message=str(e)) for token in batch]

        results = []
        for i, token in enumerate(batch):
            ticket = tickets[i] if i < len(tickets) else {}
            if not isinstance(ticket, dict):
                ticket = {}
            status = ticket.get("status", "error")
            message = ticket.get("message") if status != "ok" else None
            if status != "ok" and message is None:
                message = "No ticket returned"
            results.append(DeliveryStatus(token=token, status=status, message=message))

        failed = sum(1 for r in results if r.status != "ok")
        if failed:
            logger.warning(f"{failed}/{len(batch)} push tickets reported errors")
        return results
