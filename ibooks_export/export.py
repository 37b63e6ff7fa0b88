import datetime
import logging
from pathlib import Path
from typing import Callable, Optional, TextIO, Tuple

from ibooks_export.annotations import read_annotations
from ibooks_export.formatters import render
from ibooks_export.locator import locate_databases
from ibooks_export.models import ExportOptions
from ibooks_export.sync_marker import LastSyncFile

logger = logging.getLogger(__name__)


def run_export(options: ExportOptions, out: TextIO, marker_store=None,
               database_locator: Callable[[], Tuple[Path, Path]] = locate_databases) -> Optional[datetime.datetime]:
    """
    Runs one export: reads the annotations newer than the last sync, renders them
    and, unless this is a dry run, remembers the newest annotation time for next time.

    The sync marker is only written after rendering succeeded.
    :param options: what to read and how to render it
    :param out: stream the rendered annotations are written to
    :param marker_store: where the last sync time lives, defaults to the sync-file
    :param database_locator: returns the (annotation db, library db) paths
    :return: the newest annotation time of this run, None if nothing was exported
    """
    annotation_db, library_db = database_locator()

    if marker_store is None:
        marker_store = LastSyncFile.find()
    logger.debug("Last sync file: %s", marker_store)

    last_sync = None if options.all else marker_store.read()
    logger.debug("Last sync date: %s", last_sync)

    annotations = read_annotations(annotation_db, library_db, last_sync)
    new_last_sync_time = max((a.annotation_time for a in annotations), default=None)

    render(annotations, options.output_format, out)

    if not options.dry_run and new_last_sync_time is not None:
        logger.debug("Updating last sync time: %s", new_last_sync_time)
        marker_store.update(new_last_sync_time)

    return new_last_sync_time
