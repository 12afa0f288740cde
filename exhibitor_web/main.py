import sys
import signal
import asyncio
import logging

# Basic console logger for messages BEFORE full setup is complete.
# This logger will be replaced by the full setup later.
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)-8s - [console] - %(message)s',
    stream=sys.stdout
)
log = logging.getLogger("console")

import setproctitle
from hypercorn.asyncio import serve
from hypercorn.config import Config

from exhibitor_web import settings
from exhibitor_web.log.setup import setup_logging


def build_server_config() -> Config:
    """Builds the Hypercorn configuration from settings."""
    config = Config()
    config.bind = [f"{settings.WEB_SERVER_HOST}:{settings.WEB_SERVER_PORT}"]
    config.graceful_timeout = settings.GRACEFUL_SHUTDOWN_TIMEOUT
    config.accesslog = "-"
    config.errorlog = "-"
    return config


async def _serve(config: Config) -> None:
    from exhibitor_web.web.setup import app

    shutdown_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown_event.set)
        except NotImplementedError:
            # Windows event loops have no signal handlers; Ctrl+C still raises KeyboardInterrupt.
            pass

    await serve(app, config, shutdown_trigger=shutdown_event.wait)


def main() -> None:
    """The main entry point for the Exhibitor web bootstrap."""
    args = sys.argv[1:]
    if "--verbose" in args:
        settings.VERBOSE_LOGGING = True
        args.remove("--verbose")
    if args:
        log.warning(f"Ignoring unknown arguments: {' '.join(args)}")

    setup_logging(logging.DEBUG if settings.VERBOSE_LOGGING else logging.INFO)
    setproctitle.setproctitle(settings.PROCESS_TITLE)

    config = build_server_config()
    log.info(f"Serving Exhibitor bootstrap on {config.bind[0]}")
    try:
        asyncio.run(_serve(config))
    except KeyboardInterrupt:
        log.warning("Exiting due to KeyboardInterrupt.")


if __name__ == "__main__":
    main()
