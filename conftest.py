import sqlite3
from pathlib import Path

import pytest

from ibooks_export.epoch import CORE_DATA_EPOCH_OFFSET
from ibooks_export.locator import ANNOTATION_DB_DIR, LIBRARY_DB_DIR

ANNOTATION_DB_NAME = "AEAnnotation_v10312011_1727_local.sqlite"
LIBRARY_DB_NAME = "BKLibrary-1-091020131601.sqlite"

# 2023-11-14T22:13:20Z and an hour later
T1 = 1700000000
T2 = 1700003600


class IBooksLibrary:
    """
    A fake Apple Books install: both databases inside their container dirs under `home`
    """

    def __init__(self, home: Path):
        self.home = home
        self.annotation_db = home / ANNOTATION_DB_DIR / ANNOTATION_DB_NAME
        self.library_db = home / LIBRARY_DB_DIR / LIBRARY_DB_NAME
        self.annotation_db.parent.mkdir(parents=True)
        self.library_db.parent.mkdir(parents=True)
        with sqlite3.connect(self.annotation_db) as conn:
            conn.execute("""
                CREATE TABLE ZAEANNOTATION (
                    Z_PK INTEGER PRIMARY KEY,
                    ZANNOTATIONASSETID VARCHAR,
                    ZANNOTATIONSELECTEDTEXT VARCHAR,
                    ZANNOTATIONNOTE VARCHAR,
                    ZANNOTATIONCREATIONDATE TIMESTAMP,
                    ZANNOTATIONMODIFICATIONDATE TIMESTAMP
                )""")
        conn.close()
        with sqlite3.connect(self.library_db) as conn:
            conn.execute("""
                CREATE TABLE ZBKLIBRARYASSET (
                    Z_PK INTEGER PRIMARY KEY,
                    ZASSETID VARCHAR,
                    ZTITLE VARCHAR,
                    ZAUTHOR VARCHAR
                )""")
        conn.close()

    @property
    def paths(self):
        return self.annotation_db, self.library_db

    def add_book(self, asset_id, title, author=None):
        with sqlite3.connect(self.library_db) as conn:
            conn.execute("INSERT INTO ZBKLIBRARYASSET (ZASSETID, ZTITLE, ZAUTHOR) VALUES (?, ?, ?)",
                         (asset_id, title, author))
        conn.close()

    def add_annotation(self, asset_id, selected_text, unix_time, note=None):
        """
        `unix_time` may be fractional, it's stored as Core Data time like Apple Books does
        """
        core_data_time = unix_time - CORE_DATA_EPOCH_OFFSET
        with sqlite3.connect(self.annotation_db) as conn:
            conn.execute(
                "INSERT INTO ZAEANNOTATION (ZANNOTATIONASSETID, ZANNOTATIONSELECTEDTEXT, ZANNOTATIONNOTE,"
                " ZANNOTATIONCREATIONDATE, ZANNOTATIONMODIFICATIONDATE) VALUES (?, ?, ?, ?, ?)",
                (asset_id, selected_text, note, core_data_time, core_data_time))
        conn.close()


@pytest.fixture
def ibooks(tmp_path) -> IBooksLibrary:
    return IBooksLibrary(tmp_path / "home")


@pytest.fixture
def dune(ibooks) -> IBooksLibrary:
    ibooks.add_book("DUNE-1", "Dune", "Frank Herbert")
    ibooks.add_annotation("DUNE-1", "I must not fear.", T1)
    ibooks.add_annotation("DUNE-1", "Fear is the mind-killer.", T2, note="good line")
    return ibooks
