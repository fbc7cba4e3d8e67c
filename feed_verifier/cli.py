"""Command-line interface for the OPML feed verifier."""

import logging
import sys

import click

from feed_verifier.classifier import MATCH_MODES
from feed_verifier.config import (
    DEFAULT_EXCEPTIONS,
    DEFAULT_TIMEOUT,
    DEFAULT_WORKERS,
    VerifierConfig,
    load_exceptions,
)
from feed_verifier.opml_parser import OpmlError, parse_opml
from feed_verifier.reports import format_outcome, format_summary, outcomes_to_json
from feed_verifier.walker import verify_tree

_LOG_LEVELS = [logging.WARNING, logging.INFO, logging.DEBUG]


def _configure_logging(verbose):
    """Send log records to stderr, one level more detailed per -v."""
    level = _LOG_LEVELS[min(verbose, len(_LOG_LEVELS) - 1)]
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _fail(message):
    """Report an input error on stderr and exit with status 1."""
    click.echo(message, err=True)
    sys.exit(1)


@click.command()
@click.argument("opml_file", required=False, type=click.Path())
@click.option("--timeout", type=float, default=DEFAULT_TIMEOUT, show_default=True,
              envvar="FEED_VERIFIER_TIMEOUT", help="Request timeout in seconds per feed.")
@click.option("--workers", type=int, default=DEFAULT_WORKERS, show_default=True,
              envvar="FEED_VERIFIER_WORKERS", help="Maximum concurrent requests.")
@click.option("--exceptions-file", type=click.Path(exists=True, dir_okay=False),
              envvar="FEED_VERIFIER_EXCEPTIONS_FILE",
              help="File of URL entries treated as valid regardless of Content-Type.")
@click.option("--no-default-exceptions", is_flag=True,
              help="Do not include the built-in exception list.")
@click.option("--match", type=click.Choice(MATCH_MODES), default="substring", show_default=True,
              envvar="FEED_VERIFIER_MATCH",
              help="How exception entries are matched against feed URLs; substring also "
                   "matches entries embedded anywhere in the URL.")
@click.option("--ignore-content-type-case", is_flag=True,
              help="Accept 'XML' in any case in the Content-Type header.")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]),
              default="text", show_default=True, help="Output format.")
@click.option("--show-valid", is_flag=True, help="Also print a line for valid feeds.")
@click.option("--summary/--no-summary", default=True, show_default=True,
              help="Print a summary line to stderr.")
@click.option("--progress", is_flag=True, help="Show a progress bar on stderr.")
@click.option("-v", "--verbose", count=True, help="Increase log verbosity.")
def main(opml_file, timeout, workers, exceptions_file, no_default_exceptions, match,
         ignore_content_type_case, output_format, show_valid, summary, progress, verbose):
    """Check that every feed in OPML_FILE serves an RSS/Atom document."""
    _configure_logging(verbose)

    if not opml_file:
        _fail("Usage: feed-verifier <opml-file>")

    exceptions = () if no_default_exceptions else DEFAULT_EXCEPTIONS
    if exceptions_file:
        try:
            exceptions = exceptions + load_exceptions(exceptions_file)
        except OSError as exc:
            raise click.BadParameter(str(exc), param_hint="--exceptions-file")

    try:
        config = VerifierConfig(
            exceptions=exceptions,
            timeout=timeout,
            max_workers=workers,
            match=match,
            ignore_content_type_case=ignore_content_type_case,
        )
    except ValueError as exc:
        raise click.UsageError(str(exc))

    try:
        document = parse_opml(opml_file)
    except OSError as exc:
        _fail(f"Error reading file: {exc}")
    except OpmlError as exc:
        _fail(f"Error parsing OPML: {exc}")

    def emit(outcome):
        line = format_outcome(outcome, show_valid=show_valid)
        if line is not None:
            click.echo(line)

    outcomes = verify_tree(
        document.outlines,
        classify=config.classifier(),
        max_workers=config.max_workers,
        on_outcome=emit if output_format == "text" else None,
        progress=progress,
    )

    if output_format == "json":
        click.echo(outcomes_to_json(outcomes))
    if summary:
        click.echo(format_summary(outcomes), err=True)


if __name__ == "__main__":
    main()
