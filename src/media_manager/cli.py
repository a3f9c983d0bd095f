"""Command line interface for media manager."""

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from . import __version__
from .commands import COMMANDS, QUIT
from .domain.catalog.services import MediaService
from .exceptions import ConfigurationError
from .infrastructure.repositories import FileBasedMediaRepository
from .input_reader import InputReader
from .models.config import DEFAULT_PROMPT, Config, load_config

logger = logging.getLogger(__name__)

MSG_UNRECOGNIZED_COMMAND = "Unrecognized command!"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def run_loop(service: MediaService, reader: InputReader, console: Console,
              prompt: str = DEFAULT_PROMPT) -> None:
    """Read and dispatch commands until qq or end of input."""
    while True:
        console.print(prompt, end="")

        try:
            command = reader.read_command()
        except EOFError:
            break

        if command == QUIT:
            break

        logger.debug("Dispatching command %s", command)
        handler = COMMANDS.get(command)
        if handler is None:
            console.print(MSG_UNRECOGNIZED_COMMAND)
            reader.skip_line()
            continue

        try:
            result = handler(service, reader)
        except EOFError:
            break

        if result.is_success():
            console.print(result.value())
        else:
            error = result.error()
            if error.discard_rest_of_line:
                reader.skip_line()
            console.print(str(error))

    service.clear_all()
    console.print("All data deleted")
    console.print("Done")


@click.command()
@click.version_option(version=__version__, prog_name="media-manager")
@click.option(
    '--config',
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Configuration file path'
)
@click.option(
    '--restore',
    'restore_path',
    type=click.Path(dir_okay=False, path_type=Path),
    help='Restore a saved library and catalog before the first prompt'
)
@click.option(
    '--verbose',
    is_flag=True,
    help='Verbose output'
)
def cli(config: Optional[Path], restore_path: Optional[Path], verbose: bool):
    """Manage a media library and named collections of its records."""
    console = Console(highlight=False, markup=False, emoji=False, soft_wrap=True)

    try:
        cfg = load_config(config) if config else Config.default()
    except ConfigurationError as e:
        console.print(f"Error: {e}")
        sys.exit(1)

    configure_logging("DEBUG" if verbose else cfg.log_level)

    service = MediaService(FileBasedMediaRepository(encoding=cfg.encoding))

    initial = restore_path
    if initial is None and cfg.restore_on_start:
        initial = cfg.default_data_file
    if initial is not None:
        restored = service.restore_all(str(initial))
        console.print("Data loaded" if restored.is_success() else str(restored.error()))

    reader = InputReader(click.get_text_stream('stdin'))
    run_loop(service, reader, console, cfg.prompt)


def main():
    """Main entry point."""
    cli()


if __name__ == "__main__":
    main()
