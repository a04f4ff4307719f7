#!/usr/bin/env python3
"""Main entry point for the CLI Music Player."""

from __future__ import annotations

import asyncio
import json
import logging
import logging.config
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from cli_music_player.domain.shared.messages import LogTemplates

if TYPE_CHECKING:
    from cli_music_player.config.container import Container

_LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "logging_config.json"
_PACKAGE_LOGGER = "cli_music_player"


def setup_logging(log_level: str = "INFO") -> None:
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)

    try:
        with open(_LOGGING_CONFIG_PATH) as f:
            config = json.load(f)
        logging.config.dictConfig(config)
    except (FileNotFoundError, json.JSONDecodeError, ValueError):
        logging.warning(
            "Could not load %s, falling back to basic config", _LOGGING_CONFIG_PATH
        )
        logging.basicConfig(
            level=resolved_level,
            format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    logging.getLogger().setLevel(resolved_level)
    logging.getLogger(_PACKAGE_LOGGER).setLevel(resolved_level)


async def run_app(container: Container) -> int:
    """Run the menu until the user exits or a signal or fault requests shutdown."""
    presenter = container.presenter
    shutdown = container.shutdown_coordinator
    controller = container.session_controller

    shutdown.install()
    try:
        presenter.banner()
        menu_task = asyncio.create_task(container.menu.run(), name="menu")
        exit_task = asyncio.create_task(shutdown.wait(), name="shutdown-wait")

        done, _ = await asyncio.wait(
            {menu_task, exit_task}, return_when=asyncio.FIRST_COMPLETED
        )

        if exit_task in done:
            menu_task.cancel()
            exit_code = exit_task.result()
            if exit_code == 0:
                presenter.cleanup_complete()
            return exit_code

        exit_task.cancel()
        menu_task.result()
        await shutdown.settle()
        presenter.goodbye()
        return 0
    finally:
        controller.cleanup()
        controller.reap()
        shutdown.uninstall()


def main() -> int:
    from cli_music_player.config.settings import get_settings

    settings = get_settings()
    setup_logging(settings.log_level)

    logger = logging.getLogger(__name__)
    logger.info(LogTemplates.APP_STARTING.format(environment=settings.environment))

    from cli_music_player.config.container import create_container
    from cli_music_player.infrastructure.audio.mpv_process import find_player_executable

    container = create_container(settings)

    if find_player_executable(settings.player.executable) is None:
        logger.error(LogTemplates.PLAYER_NOT_FOUND, settings.player.executable)
        container.presenter.player_not_installed()
        return 1

    try:
        exit_code = asyncio.run(run_app(container))
    except KeyboardInterrupt:
        logger.info(LogTemplates.APP_KEYBOARD_INTERRUPT)
        container.shutdown()
        return 0
    except Exception as e:
        logger.exception(LogTemplates.APP_FATAL_ERROR, e)
        container.shutdown()
        return 1

    logger.info(LogTemplates.APP_STOPPED, exit_code)
    return exit_code


def cli() -> None:
    """Console script entry point (used by pyproject.toml [project.scripts])."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
