"""
Persistence of the last sync time.

The marker is a single RFC 3339 timestamp: the annotation time of the most
recent annotation emitted by a previous run.
"""
import datetime
import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Optional

import typer
from pydantic import AwareDatetime, TypeAdapter

from ibooks_export.export_utils import APP_NAME, get_setting
from ibooks_export.exceptions import ProgramLocationError, SyncFileReadError, SyncFileWriteError

logger = logging.getLogger(__name__)

LAST_SYNC_FILE_NAME = "last_sync"

# extended date-time with seconds and an explicit offset; no basic format, no bare epoch numbers
RFC3339_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}:\d{2}(\.\d+)?(Z|[+-]\d{2}:\d{2})")
_aware_datetime = TypeAdapter(AwareDatetime)


def _parse_rfc3339(value: str) -> datetime.datetime:
    value = value.strip()
    if not RFC3339_PATTERN.fullmatch(value):
        raise ValueError(f"Not an RFC 3339 timestamp: {value!r}")
    parsed = _aware_datetime.validate_strings(value)
    return parsed.astimezone(datetime.timezone.utc)


def _format_rfc3339(ts: datetime.datetime) -> str:
    return ts.astimezone(datetime.timezone.utc).replace(microsecond=0).isoformat()


class LastSyncFile:
    def __init__(self, path: Path):
        self.path = Path(path)

    @classmethod
    def find(cls) -> "LastSyncFile":
        """
        Resolves the sync-file inside the per-application data directory,
        creating the directory when it doesn't exist yet
        """
        state_dir = get_setting("IBOOKS_EXPORT_DATA_DIR") or typer.get_app_dir(APP_NAME)
        if not state_dir:
            raise ProgramLocationError()
        state_dir = Path(state_dir)
        try:
            state_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ProgramLocationError() from e
        return cls(state_dir / LAST_SYNC_FILE_NAME)

    def read(self) -> Optional[datetime.datetime]:
        if not self.path.exists():
            return None
        try:
            data = self.path.read_bytes()
            return _parse_rfc3339(data.decode("utf-8"))
        except (OSError, UnicodeDecodeError, ValueError) as e:
            raise SyncFileReadError() from e

    def update(self, ts: datetime.datetime):
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile("w", encoding="utf-8", dir=self.path.parent,
                                             prefix=f".{self.path.name}.", delete=False) as tmp_file:
                tmp_name = tmp_file.name
                tmp_file.write(_format_rfc3339(ts))
            os.replace(tmp_name, self.path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise SyncFileWriteError() from e

    def __repr__(self):
        return f"LastSyncFile(path={self.path})"


class MemorySyncMarker:
    """
    Keeps the marker in memory; same surface as LastSyncFile
    """

    def __init__(self, value: Optional[datetime.datetime] = None):
        self.value = value
        self.updates = 0

    def read(self) -> Optional[datetime.datetime]:
        return self.value

    def update(self, ts: datetime.datetime):
        self.value = ts
        self.updates += 1

    def __repr__(self):
        return f"MemorySyncMarker(value={self.value})"
