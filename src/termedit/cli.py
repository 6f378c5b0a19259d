"""CLI entry point for termedit. Uses Click for argument parsing."""

from __future__ import annotations

import contextlib
import logging
import sys
from dataclasses import replace

import click

from termedit import __version__
from termedit.config import EditorConfig, load_config
from termedit.decoder import KeyDecoder
from termedit.errors import ConfigError, FatalError
from termedit.screen import CLEAR_SCREEN, CURSOR_HOME
from termedit.session import EditSession
from termedit.terminal import ProcessTerminal, Terminal, raw_mode

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(log_file: str | None, level: str) -> None:
    """Send log records to *log_file*, or nowhere: stdout is the screen."""
    handler: logging.Handler
    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.NullHandler()
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=LOG_FORMAT,
        handlers=[handler],
        force=True,
    )


def run_editor(terminal: Terminal, config: EditorConfig, filename: str | None) -> int:
    """Run one editing session on *terminal* and return the exit status."""
    try:
        with raw_mode(terminal):
            session = EditSession(terminal, config)
            if filename:
                session.open(filename)
            session.set_status_message(config.help_message)
            return session.run(KeyDecoder(terminal))
    except FatalError as e:
        logger.exception("Fatal error")
        with contextlib.suppress(FatalError):
            terminal.write(CLEAR_SCREEN)
            terminal.write(CURSOR_HOME)
        click.echo(f"termedit: {e}", err=True)
        return 1


@click.command()
@click.argument("filename", required=False, type=click.Path(dir_okay=False))
@click.option("--log-file", default=None, help="Append debug logs to this file")
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"]),
    default="info",
    help="Log level (only used with a log file)",
)
@click.option(
    "--tab-stop",
    type=click.IntRange(min=1),
    default=None,
    help="Columns per tab stop (default: 8)",
)
@click.version_option(__version__, prog_name="termedit")
def main(filename, log_file, log_level, tab_stop):
    """Minimal terminal text editor. Press Ctrl-Q to quit."""
    try:
        config = load_config()
    except ConfigError as e:
        raise click.UsageError(str(e)) from e

    if tab_stop is not None:
        config = replace(config, tab_stop=tab_stop)
    if log_file:
        config = replace(config, log_file=log_file)

    setup_logging(config.log_file, log_level)
    logger.debug("Starting with %s", config)

    terminal = ProcessTerminal(read_timeout_ds=config.read_timeout_ds)
    sys.exit(run_editor(terminal, config, filename))


if __name__ == "__main__":
    main()
