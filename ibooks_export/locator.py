import logging
from pathlib import Path
from typing import Optional, Tuple

from ibooks_export.exceptions import NoHomeDirError, DatabaseNotFoundError

logger = logging.getLogger(__name__)

ANNOTATION_DB_DIR = "Library/Containers/com.apple.iBooksX/Data/Documents/AEAnnotation"
LIBRARY_DB_DIR = "Library/Containers/com.apple.iBooksX/Data/Documents/BKLibrary"
DATABASE_EXTENSION = ".sqlite"


def _home_dir() -> Path:
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise NoHomeDirError() from e


def locate_database(relative_path: str, home: Optional[Path] = None) -> Optional[Path]:
    """
    Looks for a sqlite file directly inside `relative_path` under the home dir.

    When the directory holds more than one database the lexicographically
    first one wins. A missing or unreadable directory counts as "not found".
    :param relative_path: container directory, relative to the home dir
    :param home: home dir override
    :return: path of the database, or None
    """
    directory = (home or _home_dir()) / relative_path
    try:
        candidates = sorted(
            path for path in directory.iterdir()
            if path.is_file() and path.suffix == DATABASE_EXTENSION
        )
    except OSError as e:
        logger.debug("Unable to scan %s: %s", directory, e)
        return None
    if not candidates:
        return None
    if len(candidates) > 1:
        logger.debug("Found %d databases in %s, using %s", len(candidates), directory, candidates[0])
    return candidates[0]


def locate_annotation_database(home: Optional[Path] = None) -> Optional[Path]:
    return locate_database(ANNOTATION_DB_DIR, home)


def locate_library_database(home: Optional[Path] = None) -> Optional[Path]:
    return locate_database(LIBRARY_DB_DIR, home)


def locate_databases(home: Optional[Path] = None) -> Tuple[Path, Path]:
    annotation_db = locate_annotation_database(home)
    library_db = locate_library_database(home)
    if annotation_db is None or library_db is None:
        raise DatabaseNotFoundError()
    logger.debug("Library database location: %s", library_db)
    logger.debug("Annotation database location: %s", annotation_db)
    return annotation_db, library_db
