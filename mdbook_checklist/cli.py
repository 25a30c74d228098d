"""Command-line interface for the checklist preprocessor.

mdBook calls the preprocessor in two ways:

    mdbook-checklist supports <renderer>   # may this preprocessor run?
    mdbook-checklist                       # process [context, book] on stdin

This is the single entry point for both.
"""

import json
import logging
import sys
from importlib.metadata import version as get_version

import click
from rich.console import Console
from rich.logging import RichHandler

from .services import ProtocolService

# Get version from package metadata
try:
    __version__ = get_version("mdbook-checklist")
except Exception:
    __version__ = "0.0.0"  # Fallback version


LOGGER_NAME = "mdbook_checklist"


def configure_logging(verbose: bool) -> None:
    """Send package logs to stderr; stdout carries the book.

    Args:
        verbose: If True, log at DEBUG level instead of INFO.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def handle_supports(protocol: ProtocolService, renderer: str) -> None:
    """Answer the renderer support query with the exit status."""
    sys.exit(0 if protocol.supports_renderer(renderer) else 1)


def handle_preprocessing(protocol: ProtocolService) -> None:
    """Process the book on stdin, reporting bad input on stderr.

    mdBook always talks UTF-8, whatever the locale.
    """
    input_stream = click.get_text_stream("stdin", encoding="utf-8")
    output_stream = click.get_text_stream("stdout", encoding="utf-8")

    try:
        protocol.handle_preprocessing(input_stream, output_stream)
    except json.JSONDecodeError as e:
        click.echo(f"Error: Invalid JSON input - {e}", err=True)
        sys.exit(1)
    except ValueError as e:
        click.echo(f"Error: Invalid preprocessor input - {e}", err=True)
        sys.exit(1)


@click.command(context_settings={"ignore_unknown_options": True})
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Log debug details to stderr.",
)
@click.version_option(version=__version__, prog_name="mdbook-checklist")
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
def cli(verbose: bool, args: tuple[str, ...]) -> None:
    """mdBook preprocessor generating a checklist chapter.

    Called as `supports RENDERER`, exits with status 0 when the renderer
    is supported; the checklist only rewrites markdown, so every renderer
    is. Called any other way, reads the [context, book] JSON pair mdBook
    writes to stdin, replaces every {{#check ID | description}} directive
    with an anchor, appends the checklist chapter and writes the book
    JSON to stdout.
    """
    protocol = ProtocolService()

    if len(args) == 2 and args[0] == "supports":
        handle_supports(protocol, args[1])
        return

    configure_logging(verbose)
    handle_preprocessing(protocol)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
