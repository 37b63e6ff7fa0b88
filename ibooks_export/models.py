import datetime
import enum
from typing import Optional

from pydantic import BaseModel
from sqlalchemy import Column, Integer, String, Float

from ibooks_export.database import Base, LIBRARY_SCHEMA


class AEAnnotation(Base):
    """
    Apple Books annotation store (AEAnnotation/*.sqlite). Read only.
    """
    __tablename__ = 'ZAEANNOTATION'

    id = Column('Z_PK', Integer, primary_key=True)
    asset_id = Column('ZANNOTATIONASSETID', String)
    selected_text = Column('ZANNOTATIONSELECTEDTEXT', String)
    note = Column('ZANNOTATIONNOTE', String)
    creation_date = Column('ZANNOTATIONCREATIONDATE', Float)
    # the authoritative annotation time: filtering, ordering and the sync marker all use it
    modification_date = Column('ZANNOTATIONMODIFICATIONDATE', Float)

    def __repr__(self):
        return f"AEAnnotation(id={self.id}, selected_text={self.selected_text})"


class LibraryAsset(Base):
    """
    Apple Books library (BKLibrary/*.sqlite), attached as a secondary schema
    """
    __tablename__ = 'ZBKLIBRARYASSET'
    __table_args__ = {'schema': LIBRARY_SCHEMA}

    id = Column('Z_PK', Integer, primary_key=True)
    asset_id = Column('ZASSETID', String)
    title = Column('ZTITLE', String)
    author = Column('ZAUTHOR', String)

    def __repr__(self):
        return f"LibraryAsset(asset_id={self.asset_id}, title={self.title})"


class Annotation(BaseModel):
    selected_text: Optional[str] = None
    note: Optional[str] = None
    annotation_time: datetime.datetime
    book_title: str

    def to_json_dict(self) -> dict:
        # a missing note is left out entirely instead of being emitted as null
        exclude = {'note'} if self.note is None else None
        return self.model_dump(mode='json', exclude=exclude)


class OutputFormat(enum.Enum):
    OUTLINE = 'outline'
    JSON = 'json'
    TABLE = 'table'


class ExportOptions(BaseModel):
    all: bool = False
    dry_run: bool = False
    output_format: OutputFormat = OutputFormat.OUTLINE
