import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from exhibitor_web import settings
from exhibitor_web.local.config import PropertySource
from exhibitor_web.local.supervisor import ExhibitorLifecycle
from exhibitor_web.local.supervisor.interfaces import Supervisor
from exhibitor_web.log import setup_logging

log = logging.getLogger("asgi_server")


def get_exhibitor(request: Request) -> Optional[Supervisor]:
    """Returns the supervisor published at startup, or None if there is none."""
    return getattr(request.app.state, ExhibitorLifecycle.attribute_key(), None)


async def status_handler(request: Request) -> JSONResponse:
    """Reports whether a supervisor is published for this application."""
    exhibitor = get_exhibitor(request)
    return JSONResponse({
        "running": exhibitor is not None,
        "exhibitor": type(exhibitor).__name__ if exhibitor is not None else None,
    })


def create_app(
    lifecycle: Optional[ExhibitorLifecycle] = None,
    source: Optional[PropertySource] = None,
    configure_logging: bool = False,
) -> Starlette:
    """
    Creates the hosting application.

    The supervisor is brought up in the lifespan startup phase and torn down
    in the shutdown phase. A startup failure propagates so the server refuses
    to start, after releasing whatever was created before the failure.

    :param lifecycle: The lifecycle manager; built from settings when omitted.
    :param source: Live properties; defaults to the environment at startup.
    :param configure_logging: Set up console logging when the app starts.
    """
    lifecycle = lifecycle or ExhibitorLifecycle()

    @asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        if configure_logging:
            setup_logging(logging.DEBUG if settings.VERBOSE_LOGGING else logging.INFO)

        log.info("Starting Exhibitor bootstrap")
        try:
            await run_in_threadpool(lifecycle.initialize, app.state, source)
        except Exception:
            log.critical("Exhibitor bootstrap failed; releasing partially created resources.")
            await run_in_threadpool(lifecycle.destroy)
            raise

        try:
            yield
        finally:
            log.info("Stopping Exhibitor bootstrap")
            await run_in_threadpool(lifecycle.destroy)
            if hasattr(app.state, ExhibitorLifecycle.attribute_key()):
                delattr(app.state, ExhibitorLifecycle.attribute_key())

    routes = [
        Route(settings.STATUS_PATH, endpoint=status_handler, methods=["GET"]),
    ]
    app = Starlette(debug=False, routes=routes, lifespan=lifespan)
    app.state.lifecycle = lifecycle
    return app


# The main application object to be loaded by Hypercorn
app = create_app(configure_logging=True)
