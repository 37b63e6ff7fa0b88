"""
Errors raised while exporting annotations.

Every failure is fatal for the run; the only expected "empty" condition is a
missing sync-file, which is not an error at all.
"""


class IBooksExportError(Exception):
    message = "iBooks export failed"

    def __init__(self, message=None):
        super().__init__(message or self.message)


class NoHomeDirError(IBooksExportError):
    message = "No home dir can be detected"


class DatabaseNotFoundError(IBooksExportError):
    message = "iBooks database not found. Are you sure iBooks is installed?"


class AnnotationProcessingError(IBooksExportError):
    message = "Processing annotation"


class ProgramLocationError(IBooksExportError):
    message = "Unable to find program location"


class SyncFileWriteError(IBooksExportError):
    message = "Unable to write sync-file"


class SyncFileReadError(IBooksExportError):
    message = "Unable to read sync-file"


class DatabaseReadError(IBooksExportError):
    message = "Unable to read iBooks database"
