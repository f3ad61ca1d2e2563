"""FastAPI application hosting the Discord relay bot, with a health endpoint."""

import asyncio
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from discord_relay.config import get_settings, validate_settings
from discord_relay.gateway.client import RelayBot
from discord_relay.logging_config import configure_logging
from discord_relay.relay.forwarder import drain_pending

logger = logging.getLogger(__name__)


def _on_bot_done(task: asyncio.Task) -> None:
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("Discord client stopped with error: %s", exc, exc_info=exc)
    else:
        logger.info("Discord client stopped")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging, validate config, run the bot.

    A ConfigurationError raised here aborts startup, so the process exits
    with a non-zero status before connecting to the gateway.
    """
    settings = get_settings()
    configure_logging(settings.log_level)
    validate_settings(settings)
    app.state.settings = settings

    bot = RelayBot(settings)
    app.state.bot = bot
    bot_task = asyncio.create_task(bot.start(settings.discord_bot_token))
    bot_task.add_done_callback(_on_bot_done)
    app.state.bot_task = bot_task

    yield

    logger.info("Closing Discord connection")
    await bot.close()
    await asyncio.gather(bot_task, return_exceptions=True)
    await drain_pending()
    app.state.bot = None


app = FastAPI(
    title="Discord Relay",
    lifespan=lifespan,
)


@app.get("/health")
async def health(request: Request):
    """Health check endpoint reporting gateway connection state."""
    bot: RelayBot | None = getattr(request.app.state, "bot", None)
    connected = bot is not None and bot.is_connected
    return {
        "status": "ok",
        "service": "discord-relay",
        "version": "0.1.0",
        "gateway": "connected" if connected else "disconnected",
    }
