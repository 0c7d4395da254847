import os
from pathlib import Path

import pandas as pd
from sqlalchemy import create_engine, Column, String, Integer, Float, Boolean, Text
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from metconfig.config import COLUMN_TYPES, PANDAS_DTYPES, SYSDATA_PATH


Base = declarative_base()

class MetConfigEntry(Base):
    """One row of the MET output table configuration."""
    __tablename__ = 'met_config'

    # Zero-based row position in the workbook
    id = Column(Integer, primary_key=True, autoincrement=False)
    version = Column(Float)
    tool = Column(String, index=True)
    table_ref = Column('table', String)
    linetype = Column(String, index=True)
    name = Column(String)
    multi_column = Column(Boolean)
    description = Column(Text)
    supported = Column(Boolean)
    datatype = Column(String)

    def __repr__(self):
        return f"<MetConfigEntry {self.tool} {self.linetype} {self.name}>"


# Workbook column -> MetConfigEntry attribute
COLUMN_ATTRIBUTES = {
    'VERSION': 'version',
    'TOOL': 'tool',
    'TABLE': 'table_ref',
    'LINETYPE': 'linetype',
    'NAME': 'name',
    'MULTI_COLUMN': 'multi_column',
    'DESCRIPTION': 'description',
    'SUPPORTED': 'supported',
    'DATATYPE': 'datatype',
}


def get_engine(db_url=None):
    if db_url is None:
        db_url = f"sqlite:///{SYSDATA_PATH}"
    return create_engine(db_url)

def get_session_factory(engine):
    return sessionmaker(bind=engine)


def _to_python(value, declared_type):
    # numpy/pandas scalars -> plain Python values the sqlite driver accepts
    if pd.isna(value):
        return None
    if declared_type == 'numeric':
        return float(value)
    if declared_type == 'logical':
        return bool(value)
    return str(value)


def frame_to_entries(frame):
    """
    Convert a typed configuration DataFrame into MetConfigEntry objects.

    Missing cells (NaN / pd.NA) become None, i.e. SQL NULL.
    """
    entries = []
    for position, row in enumerate(frame.itertuples(index=False, name=None)):
        values = dict(zip(frame.columns, row))
        fields = {
            COLUMN_ATTRIBUTES[column]: _to_python(values[column], declared_type)
            for column, declared_type in COLUMN_TYPES.items()
        }
        entries.append(MetConfigEntry(id=position, **fields))
    return entries


def entries_to_frame(entries):
    """Build a typed configuration DataFrame from MetConfigEntry objects."""
    data = {}
    for column, declared_type in COLUMN_TYPES.items():
        attribute = COLUMN_ATTRIBUTES[column]
        values = [getattr(entry, attribute) for entry in entries]
        if declared_type == 'numeric':
            values = [float('nan') if v is None else v for v in values]
        else:
            values = [pd.NA if v is None else v for v in values]
        data[column] = pd.Series(values, dtype=PANDAS_DTYPES[declared_type])
    return pd.DataFrame(data)


def write_met_config(frame, db_path=SYSDATA_PATH):
    """
    Persist the configuration table, replacing any previous store.

    The store is built from scratch in a temporary file next to db_path and
    then moved over it, so an unchanged table always produces the same bytes.

    Args:
        frame: Normalized configuration DataFrame
        db_path: Location of the SQLite store

    Returns:
        Path: The written store
    """
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = db_path.with_name(db_path.name + ".tmp")
    if tmp_path.exists():
        tmp_path.unlink()

    engine = get_engine(f"sqlite:///{tmp_path}")
    try:
        Base.metadata.create_all(engine)
        with Session(engine) as session:
            session.add_all(frame_to_entries(frame))
            session.commit()
    finally:
        engine.dispose()

    os.replace(tmp_path, db_path)
    print(f"Saved {len(frame)} configuration rows to {db_path}")
    return db_path


def load_met_config(db_path=SYSDATA_PATH):
    """
    Read the persisted configuration table back into a DataFrame.

    Raises:
        FileNotFoundError: If the store has not been created yet
    """
    db_path = Path(db_path)
    if not db_path.exists():
        raise FileNotFoundError(f"Configuration store not found: {db_path}")

    engine = get_engine(f"sqlite:///{db_path}")
    try:
        with Session(engine) as session:
            entries = session.query(MetConfigEntry).order_by(MetConfigEntry.id).all()
            return entries_to_frame(entries)
    finally:
        engine.dispose()
