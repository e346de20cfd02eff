"""CLI entry point for runtests.

    runtests [NAME ...] [-verbose] [-suppress] [-logfile FILE] [-xmlfile FILE|DIR]

The single-dash options are handed to the run orchestrator untouched,
so the command line and run_tests() accept exactly the same tokens.
"""

import logging
import warnings

import click

from .config import WorkingContext, load_config
from .errors import RunTestsError, UnrecognizedOptionWarning
from .runner.orchestrator import TestRunOrchestrator

CONTEXT_SETTINGS = {
    "ignore_unknown_options": True,
    "help_option_names": ["--help"],
}


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("args", nargs=-1, type=click.UNPROCESSED)
@click.pass_context
def main(ctx: click.Context, args: tuple[str, ...]):
    """Run unit tests.

    With no NAME, runs every test found in the current directory. A NAME
    may be a directory, a package, a module, a TestCase class, a test
    function, or 'module:test' for a single test.

    \b
    Options:
        -verbose          Show each test's name, result and time
        -suppress         Do not print results to the console
        -logfile FILE     Also write the results to FILE
        -xmlfile PATH     Write a JUnit XML report to PATH; if PATH is a
                          directory, write one report per suite

    Exits with status 0 if all tests passed, 1 otherwise.
    """
    context = WorkingContext.current()
    try:
        config = load_config(context)
    except RunTestsError as e:
        raise click.ClickException(str(e)) from e

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    with warnings.catch_warnings():
        warnings.simplefilter("always", UnrecognizedOptionWarning)
        warnings.showwarning = _show_warning
        try:
            orchestrator = TestRunOrchestrator(context=context, config=config)
            passed = orchestrator.execute(list(args))
        except RunTestsError as e:
            raise click.ClickException(str(e)) from e

    ctx.exit(0 if passed else 1)


def _show_warning(message, category, filename, lineno, file=None, line=None):
    if issubclass(category, UnrecognizedOptionWarning):
        click.echo(f"Warning: {message}", err=True)
    else:
        click.echo(warnings.formatwarning(message, category, filename, lineno, line), err=True, nl=False)


if __name__ == "__main__":
    main()
