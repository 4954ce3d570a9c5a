"""Sweeps wagering engine - Tornado entry point"""
import logging

import sentry_sdk
from tornado import web, ioloop
from sentry_sdk.integrations.tornado import TornadoIntegration

from sweeps_engine.config.container import Container
from sweeps_engine.config.settings import Settings
from sweeps_engine.presentation.http import routes

logger = logging.getLogger(__name__)


def init_sentry(settings: Settings) -> None:
    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        integrations=[TornadoIntegration()],
        traces_sample_rate=settings.sentry_traces_sample_rate,
        environment=settings.sentry_environment,
        debug=settings.sentry_debug,
        release=f"sweeps-engine@{settings.app_version}",
        auto_session_tracking=True
    )


def make_app(container: Container) -> web.Application:
    """Create Tornado application with the engine's handlers"""
    return web.Application(routes(container))


def main():
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level)
    init_sentry(settings)

    container = Container.get_instance(settings)
    app = make_app(container)
    app.listen(settings.port)

    logger.info("Sweeps engine started on :%s (storage=%s)", settings.port, settings.storage_backend)
    try:
        ioloop.IOLoop.current().start()
    finally:
        container.close()


if __name__ == "__main__":
    main()
