import datetime
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError
from sqlalchemy import func, or_
from sqlalchemy.exc import SQLAlchemyError

from ibooks_export.database import create_annotation_engine, get_direct_db
from ibooks_export.epoch import core_data_to_timestamp, datetime_to_core_data
from ibooks_export.exceptions import AnnotationProcessingError, DatabaseReadError
from ibooks_export.models import AEAnnotation, LibraryAsset, Annotation

logger = logging.getLogger(__name__)


def to_annotation(row) -> Annotation:
    selected_text, note, annotation_time, book_title = row
    return Annotation(
        selected_text=selected_text,
        note=note,
        annotation_time=core_data_to_timestamp(int(annotation_time)),
        book_title=book_title,
    )


def read_annotations(annotation_db: Path, library_db: Path,
                     created_after: Optional[datetime.datetime]) -> List[Annotation]:
    """
    Reads every annotation modified after `created_after`, oldest first.

    Annotations without selected text, or with an empty (but not null) note, are skipped.
    Fractional Core Data times are rounded to whole seconds, for the filter as well
    as for the returned annotation times.
    :param annotation_db: path to the AEAnnotation database
    :param library_db: path to the BKLibrary database
    :param created_after: only return annotations strictly newer than this; None for all of them
    :return:
    """
    threshold = datetime_to_core_data(created_after) if created_after is not None else 0
    annotation_time = func.round(AEAnnotation.modification_date)
    engine = create_annotation_engine(annotation_db, library_db)
    db = get_direct_db(engine)
    try:
        rows = (db.query(AEAnnotation.selected_text, AEAnnotation.note, annotation_time, LibraryAsset.title)
                .join(LibraryAsset, LibraryAsset.asset_id == AEAnnotation.asset_id)
                .filter(AEAnnotation.selected_text.isnot(None),
                        or_(AEAnnotation.note != '', AEAnnotation.note.is_(None)),
                        annotation_time > threshold)
                .order_by(AEAnnotation.modification_date)
                .all())
    except SQLAlchemyError as e:
        raise DatabaseReadError() from e
    finally:
        db.close()
        engine.dispose()
    logger.debug("Read %d annotations newer than %s", len(rows), created_after)
    try:
        return [to_annotation(row) for row in rows]
    except (TypeError, ValueError, OverflowError, ValidationError) as e:
        raise AnnotationProcessingError() from e
