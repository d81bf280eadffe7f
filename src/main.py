"""Main entry point for tasklog.

build_app() is the composition root: one Storage, one collection per key,
one surface and one controller, passed to each other explicitly.
"""
import logging
from pathlib import Path
from typing import NamedTuple, Optional
import click
from cli import CLI
from collection import LogCollection, TaskCollection
from config import Settings, load_settings, parse_level
from controller import Controller
from display import TerminalSurface
from logging_setup import setup_logging
from storage import Storage

logger = logging.getLogger(__name__)


class App(NamedTuple):
    storage: Storage
    tasks: TaskCollection
    logs: LogCollection
    surface: TerminalSurface
    controller: Controller


def build_app(storage: Storage) -> App:
    tasks = TaskCollection(storage)
    logs = LogCollection(storage)
    surface = TerminalSurface()
    controller = Controller(tasks, logs, surface)
    return App(storage, tasks, logs, surface, controller)


@click.command()
@click.option('--data-file', type=click.Path(dir_okay=False, path_type=Path), default=None,
              help='JSON file holding the tasks and logs (env: TASKLOG_DATA_FILE).')
@click.option('--alt-screen/--no-alt-screen', default=None,
              help='Draw in the terminal alternate screen (env: TASKLOG_ALT_SCREEN).')
@click.option('--log-level', default=None, help='File log level, e.g. DEBUG (env: TASKLOG_LOG_LEVEL).')
def main(data_file: Optional[Path], alt_screen: Optional[bool], log_level: Optional[str]) -> None:
    """Terminal task list with an activity log."""
    settings: Settings = load_settings()
    if data_file is not None:
        settings.data_file = data_file
    if alt_screen is not None:
        settings.alt_screen = alt_screen
    if log_level is not None:
        settings.log_level = parse_level(log_level, settings.log_level)
    setup_logging(log_dir=settings.log_dir, file_level=settings.log_level)
    logger.info('Starting with data file %s', settings.data_file)
    try:
        app = build_app(Storage(settings.data_file))
        CLI(app.controller, alt_screen=settings.alt_screen).run()
    except OSError as e:
        logger.exception('Storage failure')
        raise click.ClickException(f'Could not access {settings.data_file}: {e}')


if __name__ == "__main__":
    main()
