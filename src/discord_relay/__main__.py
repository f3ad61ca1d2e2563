"""Run the relay: ``python -m discord_relay``."""

import uvicorn

from discord_relay.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "discord_relay.app:app",
        host="0.0.0.0",
        port=settings.port,
        log_config=None,  # logging is configured in the app lifespan
    )


if __name__ == "__main__":
    main()
