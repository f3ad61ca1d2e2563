"""Tests for webhook forwarding (mocked httpx).

forward_envelope must never raise on network or HTTP failures, and must not
touch the network when no webhook URL is configured.
"""

import asyncio
import logging
from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from discord_relay.models.envelope import EventType, ForwardedEnvelope
from discord_relay.relay.forwarder import (
    dispatch_envelope,
    drain_pending,
    forward_envelope,
    pending_count,
)

WEBHOOK = "https://n8n.example.com/webhook/discord"


def _envelope() -> ForwardedEnvelope:
    return ForwardedEnvelope(
        type=EventType.CHANNEL_MESSAGE,
        user_id="U1",
        message="hello",
        channel_id="C1",
        message_id="M1",
    )


def _mock_client(post_error: Exception | None = None, status_error: Exception | None = None):
    """Build a mocked httpx.AsyncClient context manager."""
    client = AsyncMock()

    if post_error is not None:
        client.post.side_effect = post_error
    else:
        response = MagicMock()
        response.status_code = 200
        response.raise_for_status = MagicMock(side_effect=status_error)
        client.post.return_value = response

    ctx = AsyncMock()
    ctx.__aenter__ = AsyncMock(return_value=client)
    ctx.__aexit__ = AsyncMock(return_value=False)
    return ctx, client


async def test_forward_posts_json_envelope():
    """Envelope is POSTed once as JSON with the content-type header."""
    mock_ctx, mock_client = _mock_client()

    with patch("discord_relay.relay.forwarder.httpx.AsyncClient", return_value=mock_ctx):
        result = await forward_envelope(_envelope(), WEBHOOK)

    assert result is True
    mock_client.post.assert_awaited_once()
    call = mock_client.post.call_args
    assert call.args[0] == WEBHOOK
    assert call.kwargs["json"] == {
        "type": "channel_message",
        "userId": "U1",
        "message": "hello",
        "channelId": "C1",
        "messageId": "M1",
    }
    assert call.kwargs["headers"] == {"Content-Type": "application/json"}


async def test_forward_without_webhook_skips_network(caplog: pytest.LogCaptureFixture):
    """No URL: warn, return False, never construct a client."""
    with patch("discord_relay.relay.forwarder.httpx.AsyncClient") as mock_cls:
        result = await forward_envelope(_envelope(), None)

    assert result is False
    mock_cls.assert_not_called()
    assert "N8N_WEBHOOK_URL is not configured" in caplog.text


async def test_forward_with_empty_webhook_skips_network():
    with patch("discord_relay.relay.forwarder.httpx.AsyncClient") as mock_cls:
        result = await forward_envelope(_envelope(), "")

    assert result is False
    mock_cls.assert_not_called()


async def test_forward_transport_error_is_caught(caplog: pytest.LogCaptureFixture):
    """Connection failures are logged and swallowed."""
    mock_ctx, _ = _mock_client(post_error=httpx.ConnectError("Connection refused"))

    with patch("discord_relay.relay.forwarder.httpx.AsyncClient", return_value=mock_ctx):
        result = await forward_envelope(_envelope(), WEBHOOK)

    assert result is False
    assert "Error sending" in caplog.text


async def test_forward_invalid_url_is_caught(caplog: pytest.LogCaptureFixture):
    """httpx.InvalidURL is not an HTTPError subclass but is still dropped and logged."""
    mock_ctx, _ = _mock_client(post_error=httpx.InvalidURL("bad"))

    with patch("discord_relay.relay.forwarder.httpx.AsyncClient", return_value=mock_ctx):
        result = await forward_envelope(_envelope(), "not a url")

    assert result is False
    assert "Error sending" in caplog.text


async def test_forward_error_logged_once_with_traceback(caplog: pytest.LogCaptureFixture):
    """The exception is attached as exc_info, not repeated in the message text."""
    mock_ctx, _ = _mock_client(post_error=httpx.ConnectError("Connection refused"))

    with patch("discord_relay.relay.forwarder.httpx.AsyncClient", return_value=mock_ctx):
        await forward_envelope(_envelope(), WEBHOOK)

    record = next(r for r in caplog.records if r.levelno == logging.ERROR)
    assert record.getMessage() == "Error sending channel_message from channel C1 to webhook"
    assert record.exc_info is not None
    assert isinstance(record.exc_info[1], httpx.ConnectError)


async def test_forward_timeout_is_caught():
    mock_ctx, _ = _mock_client(post_error=httpx.ReadTimeout("timed out"))

    with patch("discord_relay.relay.forwarder.httpx.AsyncClient", return_value=mock_ctx):
        result = await forward_envelope(_envelope(), WEBHOOK)

    assert result is False


async def test_forward_non_2xx_is_failure():
    """HTTP error statuses are treated like transport errors."""
    status_error = httpx.HTTPStatusError(
        "500 Internal Server Error", request=MagicMock(), response=MagicMock()
    )
    mock_ctx, _ = _mock_client(status_error=status_error)

    with patch("discord_relay.relay.forwarder.httpx.AsyncClient", return_value=mock_ctx):
        result = await forward_envelope(_envelope(), WEBHOOK)

    assert result is False


async def test_forward_success_logged(caplog: pytest.LogCaptureFixture):
    mock_ctx, _ = _mock_client()

    with (
        caplog.at_level(logging.INFO, logger="discord_relay.relay.forwarder"),
        patch("discord_relay.relay.forwarder.httpx.AsyncClient", return_value=mock_ctx),
    ):
        await forward_envelope(_envelope(), WEBHOOK)

    assert "to webhook (status 200)" in caplog.text


# -- dispatch / drain --


async def test_dispatch_runs_forward_in_task():
    """dispatch_envelope schedules forward_envelope and tracks it until done."""
    envelope = _envelope()
    mock_forward = AsyncMock(return_value=True)

    with patch("discord_relay.relay.forwarder.forward_envelope", mock_forward):
        task = dispatch_envelope(envelope, WEBHOOK)
        assert pending_count() == 1
        await task
        await asyncio.sleep(0)

    mock_forward.assert_awaited_once_with(envelope, WEBHOOK)
    assert pending_count() == 0


async def test_dispatch_unexpected_error_is_logged(caplog: pytest.LogCaptureFixture):
    """An exception escaping the task is logged at the task boundary."""
    mock_forward = AsyncMock(side_effect=RuntimeError("boom"))

    with patch("discord_relay.relay.forwarder.forward_envelope", mock_forward):
        task = dispatch_envelope(_envelope(), WEBHOOK)
        await asyncio.wait([task])
        await asyncio.sleep(0)

    assert "Unexpected error in webhook forward task" in caplog.text
    assert pending_count() == 0


async def test_drain_pending_waits_for_forwards():
    """drain_pending lets in-flight forwards complete."""
    release = asyncio.Event()
    finished = []

    async def slow_forward(envelope, url):
        await release.wait()
        finished.append(envelope)
        return True

    with patch("discord_relay.relay.forwarder.forward_envelope", slow_forward):
        dispatch_envelope(_envelope(), WEBHOOK)
        asyncio.get_running_loop().call_soon(release.set)
        await drain_pending(timeout=1.0)
        await asyncio.sleep(0)

    assert len(finished) == 1
    assert pending_count() == 0


async def test_drain_pending_timeout_leaves_forward_running(caplog: pytest.LogCaptureFixture):
    """A forward that outlives the drain timeout is reported, not cancelled."""
    never = asyncio.Event()

    async def stuck_forward(envelope, url):
        await never.wait()
        return True

    with patch("discord_relay.relay.forwarder.forward_envelope", stuck_forward):
        task = dispatch_envelope(_envelope(), WEBHOOK)
        await drain_pending(timeout=0.01)

        assert "still in flight at shutdown" in caplog.text
        assert not task.done()
        assert not task.cancelled()
        assert pending_count() == 1

        never.set()
        await task
        await asyncio.sleep(0)

    assert pending_count() == 0


async def test_drain_pending_noop_when_idle():
    await drain_pending(timeout=0.01)
    assert pending_count() == 0
