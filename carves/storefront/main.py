"""Yala Carves storefront - Main application entry point."""

from __future__ import annotations

import asyncio
import logging
import logging.handlers
import os
from pathlib import Path

from dotenv import load_dotenv

import flet as ft
from carves.shared.core.configuration import LoggingConfig, SystemConfig, ValidationLevel, get_config
from carves.shared.core.event_bus import EventBus
from carves.shared.core.service_registry import register_cleanup_handler, set_repositories
from carves.shared.domain.models import AuthIdentity
from carves.shared.infrastructure.identity import SessionIdentityProvider
from carves.shared.infrastructure.persistence.factory import RepositoryBundle, build_repositories
from carves.storefront.controllers.dashboard_controller import DashboardController
from carves.storefront.state import Store

PROJECT_ROOT = Path(__file__).parent.parent.parent.resolve()

logger = logging.getLogger(__name__)


def configure_logging(config: LoggingConfig, project_root: Path = PROJECT_ROOT) -> Path:
    """Rotating file log at the configured level, console at WARNING and above.

    Returns:
        Path of the log file
    """
    log_file_path = Path(config.file)
    if not log_file_path.is_absolute():
        log_file_path = project_root / log_file_path
    log_file_path.parent.mkdir(parents=True, exist_ok=True)

    file_log_level = logging.getLevelName(config.level.upper())
    if not isinstance(file_log_level, int):
        file_log_level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(file_log_level)
    root_logger.handlers.clear()

    file_handler = logging.handlers.RotatingFileHandler(
        log_file_path,
        maxBytes=config.max_bytes,
        backupCount=config.backup_count,
        encoding='utf-8'
    )
    file_handler.setLevel(file_log_level)
    file_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    ))
    root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(logging.Formatter(
        "%(asctime)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S"
    ))
    root_logger.addHandler(console_handler)

    # Suppress verbose third-party library logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("flet_controls").setLevel(logging.WARNING)
    logging.getLogger("flet_transport").setLevel(logging.WARNING)
    logging.getLogger("fletx.core.state").setLevel(logging.CRITICAL)  # Observer errors after teardown

    logger.info(f"Logging configured: file={log_file_path}, console=WARNING+")
    return log_file_path


def identity_from_env() -> SessionIdentityProvider:
    """Seed the session with the identity handed over by the sign-in flow."""
    uid = os.getenv("AUTH_UID")
    if not uid:
        return SessionIdentityProvider()
    return SessionIdentityProvider(AuthIdentity(uid=uid, email=os.getenv("AUTH_EMAIL")))


def _close_repositories(repositories: RepositoryBundle) -> None:
    asyncio.run(repositories.aclose())


def create_store(config: SystemConfig) -> Store:
    """Build repositories, identity and the global store."""
    repositories = build_repositories(config.store)
    set_repositories(repositories)
    register_cleanup_handler(lambda: _close_repositories(repositories))
    return Store.initialize(EventBus(), repositories, identity_from_env())


def build_app(config: SystemConfig):
    """Return the Flet ``main`` coroutine bound to ``config``."""

    async def main(page: ft.Page) -> None:
        logger.info("Initializing storefront...")
        page.title = config.ui.app_title
        page.bgcolor = config.ui.background_color

        try:
            store = Store.get()
        except RuntimeError:
            store = create_store(config)
        await store.app.initialize()

        controller = DashboardController(store, page)

        def _on_lifecycle(e) -> None:
            if e.state == ft.AppLifecycleState.RESUME:
                page.run_task(controller.resume)

        page.on_app_lifecycle_state_change = _on_lifecycle
        page.on_disconnect = lambda e: controller.dispose()

        page.appbar = ft.AppBar(
            title=ft.Text(config.ui.app_title, color=ft.Colors.WHITE),
            bgcolor=config.ui.primary_color,
        )
        page.add(controller.build_view())

        await controller.activate()
        logger.info("Storefront ready")

    return main


def run() -> None:
    load_dotenv(dotenv_path=PROJECT_ROOT / ".env")
    config = get_config(ValidationLevel.LENIENT)
    configure_logging(config.logging)

    app_main = build_app(config)
    if config.ui.flet_web_mode:
        logger.info(f"Starting Flet app in WEB mode on port {config.ui.flet_port}")
        ft.run(app_main, view=ft.AppView.WEB_BROWSER, port=config.ui.flet_port)
    else:
        logger.info("Starting Flet app in DESKTOP mode")
        ft.run(app_main, view=ft.AppView.FLET_APP)


if __name__ == "__main__":
    run()
