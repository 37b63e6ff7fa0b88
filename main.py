import logging
import sys

import typer

from ibooks_export.exceptions import IBooksExportError
from ibooks_export.export import run_export
from ibooks_export.export_utils import get_setting
from ibooks_export.models import ExportOptions, OutputFormat

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)


def configure_logging(verbose: bool):
    level_name = get_setting('IBOOKS_EXPORT_LOG_LEVEL', 'WARNING').upper()
    level = logging.getLevelName(level_name)
    unknown_level = not isinstance(level, int)
    if verbose:
        level = logging.DEBUG
    elif unknown_level:
        level = logging.WARNING
    logging.basicConfig(
        stream=sys.stderr,
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )
    if unknown_level:
        logger.warning("Unknown log level %r, using WARNING", level_name)


@app.command()
def export(
        dry_run: bool = typer.Option(False, "--dry-run", help="Do not update sync date at the end"),
        json_output: bool = typer.Option(False, "--json", "-j", help="Output annotations in JSON format"),
        table_output: bool = typer.Option(False, "--table", "-t", help="Output annotations as a table"),
        all_annotations: bool = typer.Option(False, "--all", "-a",
                                             help="Read all annotations, not from last sync time"),
        verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
):
    """
    Export iBooks highlights and notes, by default only those added since the last run.
    """
    configure_logging(verbose)
    if json_output and table_output:
        raise typer.BadParameter("--json and --table can't be used together")
    if json_output:
        output_format = OutputFormat.JSON
    elif table_output:
        output_format = OutputFormat.TABLE
    else:
        output_format = OutputFormat.OUTLINE
    options = ExportOptions(all=all_annotations, dry_run=dry_run, output_format=output_format)

    try:
        run_export(options, sys.stdout)
    except IBooksExportError as e:
        logger.error("Export failed: %s", e)
        message = f"{e}: {e.__cause__}" if e.__cause__ is not None else str(e)
        typer.echo(f"Error: {message}", err=True)
        raise typer.Exit(1)


if __name__ == '__main__':
    app()
