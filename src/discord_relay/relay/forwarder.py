"""Webhook forwarding of normalized envelopes.

Forwarding is fire-and-forget: each envelope gets exactly one POST attempt,
failures are caught and logged, and nothing is retried or queued. Callers
schedule the POST with dispatch_envelope so a slow or failing webhook never
blocks or crashes gateway event handling.
"""

import asyncio
import logging

import httpx

from discord_relay.models.envelope import ForwardedEnvelope

logger = logging.getLogger(__name__)

# Strong references to in-flight forwards; the event loop only keeps weak ones
_pending: set[asyncio.Task] = set()


async def forward_envelope(envelope: ForwardedEnvelope, webhook_url: str | None) -> bool:
    """POST the envelope as JSON to the webhook.

    Args:
        envelope: Normalized event to send.
        webhook_url: Destination URL. When None or empty, nothing is sent.

    Returns:
        True if the webhook answered 2xx, False if skipped or failed. Never raises
        for network or HTTP errors.
    """
    if not webhook_url:
        logger.warning(
            "N8N_WEBHOOK_URL is not configured; %s from channel %s not forwarded",
            envelope.type,
            envelope.channel_id,
        )
        return False

    try:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                webhook_url,
                json=envelope.to_payload(),
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
    except (httpx.HTTPError, httpx.InvalidURL):
        logger.error(
            "Error sending %s from channel %s to webhook",
            envelope.type,
            envelope.channel_id,
            exc_info=True,
        )
        return False

    logger.info(
        "Sent %s from channel %s to webhook (status %d)",
        envelope.type,
        envelope.channel_id,
        response.status_code,
    )
    return True


def _on_forward_done(task: asyncio.Task) -> None:
    _pending.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Unexpected error in webhook forward task", exc_info=exc)


def dispatch_envelope(envelope: ForwardedEnvelope, webhook_url: str | None) -> asyncio.Task:
    """Schedule forward_envelope as an independent task on the running loop."""
    task = asyncio.create_task(forward_envelope(envelope, webhook_url))
    _pending.add(task)
    task.add_done_callback(_on_forward_done)
    return task


def pending_count() -> int:
    """Number of forwards still in flight."""
    return len(_pending)


async def drain_pending(timeout: float = 10.0) -> None:
    """Wait for in-flight forwards to finish. Does not cancel stragglers."""
    if not _pending:
        return
    logger.info("Waiting for %d in-flight webhook forward(s)", len(_pending))
    _, still_pending = await asyncio.wait(set(_pending), timeout=timeout)
    if still_pending:
        logger.warning("%d webhook forward(s) still in flight at shutdown", len(still_pending))
